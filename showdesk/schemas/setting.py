"""
Typed setting values.

The settings table stores JSON, but each known key has a fixed shape; values
are validated against it before they are written.
"""
import re
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import AfterValidator, BaseModel, Field, TypeAdapter, field_validator

from showdesk.core.config import settings
from showdesk.utils.season import is_season_label
from showdesk.utils.sort_order import SORT_ORDER_PREFIX

SettingValue = Union[bool, int, float, str, List[str], None]

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _season_or_auto(value: str) -> str:
    if value != "auto" and not is_season_label(value):
        raise ValueError("must be 'auto' or a season label like '25/26'")
    return value


def _time_of_day(value: str) -> str:
    if not _TIME_PATTERN.match(value):
        raise ValueError("must be a time of day as HH:MM")
    return value


def _unique_genres(value: List[str]) -> List[str]:
    cleaned = []
    for genre in value:
        genre = genre.strip()
        if genre and genre not in cleaned:
            cleaned.append(genre)
    return cleaned


SETTING_TYPES: Dict[str, TypeAdapter] = {
    "genres": TypeAdapter(Annotated[List[str], AfterValidator(_unique_genres)]),
    "ai_model": TypeAdapter(Annotated[str, Field(min_length=1, max_length=100)]),
    "ai_max_words": TypeAdapter(Annotated[int, Field(ge=1, le=1000)]),
    "default_season": TypeAdapter(Annotated[str, AfterValidator(_season_or_auto)]),
    "default_start_time": TypeAdapter(Annotated[str, AfterValidator(_time_of_day)]),
    "default_end_time": TypeAdapter(Annotated[str, AfterValidator(_time_of_day)]),
}

_SORT_ORDER_TYPE = TypeAdapter(List[str])
_GENERIC_TYPE = TypeAdapter(SettingValue)

DEFAULT_GENRES = ["Cabaret", "Muziek", "Theater", "Musical", "Jeugd", "Dans", "Overig"]


def default_settings() -> Dict[str, Any]:
    return {
        "genres": list(DEFAULT_GENRES),
        "ai_model": settings.AI_DEFAULT_MODEL,
        "ai_max_words": settings.AI_DEFAULT_MAX_WORDS,
        "default_season": "auto",
        "default_start_time": "20:00",
        "default_end_time": "22:00",
    }


def validate_setting(key: str, value: Any) -> Any:
    """Coerce `value` to the shape registered for `key`; raises ValidationError."""
    if key in SETTING_TYPES:
        adapter = SETTING_TYPES[key]
    elif key.startswith(SORT_ORDER_PREFIX):
        adapter = _SORT_ORDER_TYPE
    else:
        adapter = _GENERIC_TYPE
    return adapter.validate_python(value)


class SettingUpdate(BaseModel):
    value: Any = None


class Setting(BaseModel):
    key: str
    value: Any = None


class SortOrder(BaseModel):
    context: str
    ids: List[str]


class SortOrderUpdate(BaseModel):
    ids: List[str]

    @field_validator("ids")
    @classmethod
    def no_duplicates(cls, value: List[str]) -> List[str]:
        if len(set(value)) != len(value):
            raise ValueError("ids must be unique")
        return value


class SortOrderMove(BaseModel):
    old_index: int = Field(..., ge=0)
    new_index: int = Field(..., ge=0)
    default_ids: Optional[List[str]] = None

