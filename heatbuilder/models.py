from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

NO_TIME = 0


@dataclass(slots=True)
class Swimmer:
    full_name: str
    birth_year: Optional[int] = None
    team: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Entrant:
    entrant_id: str
    seed_time_ms: int = NO_TIME
    payload: Any = None


@dataclass(frozen=True, slots=True)
class LaneAssignment:
    lane: int
    entrant: Entrant


@dataclass(slots=True)
class Heat:
    heat_number: int
    assignments: list[LaneAssignment] = field(default_factory=list)

    def lane_map(self) -> dict[int, Entrant]:
        return {a.lane: a.entrant for a in self.assignments}
