from typing import List, Dict
from pydantic import BaseModel

from showdesk.schemas.show import ShowSummary


class GenreCount(BaseModel):
    genre: str
    count: int


class StatusBucket(BaseModel):
    status: str
    label: str
    count: int
    shows: List[ShowSummary]


class SeasonDashboard(BaseModel):
    season: str
    show_count: int
    done_count: int
    # Mean of the per-show progress percentages
    progress: int
    by_status: Dict[str, int]
    buckets: List[StatusBucket]
    genres: List[GenreCount]


class SeasonInfo(BaseModel):
    current: str
    previous: str
    next: str
    default: str
