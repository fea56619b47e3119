
from datetime import date
from typing import Optional

# Seasons run August through July and are labelled "YY/YY", e.g. "25/26"
SEASON_START_MONTH = 8


def _short_year(year: int) -> str:
    return f"{year % 100:02d}"


def _start_year(season: str) -> int:
    start = season.split("/")[0].strip() if isinstance(season, str) else ""
    if not start.isdigit():
        raise ValueError(f"Ongeldig seizoensformaat: {season}")
    return int(start)


def current_season(today: Optional[date] = None) -> str:
    today = today or date.today()
    if today.month >= SEASON_START_MONTH:
        return f"{_short_year(today.year)}/{_short_year(today.year + 1)}"
    return f"{_short_year(today.year - 1)}/{_short_year(today.year)}"


def next_season(season: str) -> str:
    start = _start_year(season)
    return f"{_short_year(start + 1)}/{_short_year(start + 2)}"


def previous_season(season: str) -> str:
    start = _start_year(season)
    return f"{_short_year(start - 1)}/{_short_year(start)}"


def is_season_label(value: str) -> bool:
    parts = value.split("/") if isinstance(value, str) else []
    return len(parts) == 2 and all(len(p) == 2 and p.isdigit() for p in parts)
