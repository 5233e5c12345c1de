from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field


class Settings(BaseModel):
    lanes_per_heat: int = Field(
        default_factory=lambda: os.getenv("HEATBUILDER_LANES", "8"),
        validate_default=True,
        ge=1,
    )
    output_dir: Path = Field(
        default_factory=lambda: os.getenv("HEATBUILDER_OUTPUT_DIR", "protocols"),
        validate_default=True,
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
