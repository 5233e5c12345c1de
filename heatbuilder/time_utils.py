from __future__ import annotations

import datetime
import re

from heatbuilder.models import NO_TIME

TIME_RE = re.compile(r"^(\d{1,2})[:.](\d{2})[:.](\d{2,3})$")
NT_MARKERS = {"nt", "n/t", "no time"}


def _fraction_to_ms(digits: str) -> int:
    return int((digits + "000")[:3])


def parse_seed_time_to_ms(value: str | float | int | datetime.time | datetime.timedelta | None) -> int | None:
    if value is None:
        return None
    # time-formatted Excel cells come back from openpyxl as time or timedelta
    if isinstance(value, datetime.time):
        seconds = (value.hour * 60 + value.minute) * 60 + value.second
        return seconds * 1000 + value.microsecond // 1000
    if isinstance(value, datetime.timedelta):
        return (value.days * 86400 + value.seconds) * 1000 + value.microseconds // 1000
    if isinstance(value, (int, float)):
        text = f"{value:.2f}"
    else:
        text = str(value).strip().replace(",", ".")
    if not text:
        return None
    if text.lower() in NT_MARKERS:
        return NO_TIME

    match = TIME_RE.match(text)
    if match:
        minutes = int(match.group(1))
        seconds = int(match.group(2))
        return (minutes * 60 + seconds) * 1000 + _fraction_to_ms(match.group(3))

    # M:SS or M:SS.cc
    if ":" in text:
        mins_part, rest = text.split(":", 1)
        secs_part, _, frac_part = rest.partition(".")
        if mins_part.isdigit() and secs_part.isdigit() and (not frac_part or frac_part.isdigit()):
            ms = (int(mins_part) * 60 + int(secs_part)) * 1000
            return ms + (_fraction_to_ms(frac_part) if frac_part else 0)
        return None

    if "." in text:
        secs_part, frac_part = text.split(".", 1)
        if secs_part.isdigit() and frac_part.isdigit():
            return int(secs_part) * 1000 + _fraction_to_ms(frac_part)
    if text.isdigit():
        return int(text) * 1000
    return None


def format_seed_time(value: int | None) -> str:
    if value is None or value <= 0:
        return "NT"
    total_seconds, ms = divmod(value, 1000)
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}.{ms // 10:02d}"
