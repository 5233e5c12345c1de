from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

from heatbuilder.models import Entrant, Heat, LaneAssignment

logger = logging.getLogger(__name__)

MIN_SWIMMERS_PER_HEAT = 3


def seed_sort_key(entrant: Entrant) -> float:
    """Ascending sort key: faster first, NT (and anything non-positive) last."""
    if entrant.seed_time_ms <= 0:
        return math.inf
    return entrant.seed_time_ms


def lane_order(lanes: int) -> list[int]:
    """Center-out lane pattern, e.g. 8 lanes -> 4, 5, 3, 6, 2, 7, 1, 8."""
    order: list[int] = []
    left = math.ceil(lanes / 2)
    right = left + 1
    for i in range(max(lanes, 0)):
        if i % 2 == 0:
            order.append(left)
            left -= 1
        else:
            order.append(right)
            right += 1
    return order


def raw_heat_sizes(num_swimmers: int, lanes: int) -> list[int]:
    if num_swimmers <= 0 or lanes <= 0:
        return []
    num_heats = -(-num_swimmers // lanes)
    sizes = [0] * num_heats
    remaining = num_swimmers
    # fastest heat is filled first, heat 1 gets whatever is left
    for i in range(num_heats - 1, -1, -1):
        sizes[i] = min(remaining, lanes)
        remaining -= sizes[i]
    return sizes


def rebalance_heat_sizes(sizes: Sequence[int], minimum: int = MIN_SWIMMERS_PER_HEAT) -> list[int]:
    """Top up short heats by borrowing surplus from the faster heats after them.

    A donor never drops below ``minimum``. A heat may stay short when nobody
    has surplus left.
    """
    result = list(sizes)
    for i in range(len(result) - 1):
        if result[i] >= minimum:
            continue
        needed = minimum - result[i]
        borrowed = 0
        for j in range(i + 1, len(result)):
            can_give = result[j] - minimum
            if can_give <= 0:
                continue
            take = min(needed - borrowed, can_give)
            result[i] += take
            result[j] -= take
            borrowed += take
            if borrowed >= needed:
                break
        if borrowed < needed:
            logger.debug("heat %d stays at %d swimmers, no surplus to borrow", i + 1, result[i])
    return result


def heat_sizes(num_swimmers: int, lanes: int) -> list[int]:
    sizes = rebalance_heat_sizes(raw_heat_sizes(num_swimmers, lanes))
    return [size for size in sizes if size > 0]


def generate_heats(entries: Iterable[Entrant], lanes_per_heat: int) -> list[Heat]:
    """Split entrants into heats and seed lanes.

    Heat 1 holds the slowest swimmers and the last heat the fastest. Inside a
    heat the fastest swimmer gets the center lane and the rest alternate
    outward. Empty input or a non-positive lane count gives an empty list.
    """
    entries = list(entries)
    if not entries or lanes_per_heat <= 0:
        return []

    # slowest to fastest, NT first
    assignment_order = sorted(entries, key=seed_sort_key, reverse=True)
    sizes = heat_sizes(len(assignment_order), lanes_per_heat)
    pattern = lane_order(lanes_per_heat)

    heats: list[Heat] = []
    start = 0
    for heat_number, size in enumerate(sizes, start=1):
        heat_entries = sorted(assignment_order[start : start + size], key=seed_sort_key)
        assignments = [
            LaneAssignment(lane=lane, entrant=entrant)
            for lane, entrant in zip(pattern, heat_entries)
        ]
        assignments.sort(key=lambda a: a.lane)
        heats.append(Heat(heat_number=heat_number, assignments=assignments))
        start += size

    logger.debug(
        "seeded %d entrants into %d heats of %d lanes: sizes=%s",
        len(entries),
        len(heats),
        lanes_per_heat,
        sizes,
    )
    return heats
