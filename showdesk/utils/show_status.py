"""
Show completion model.

A show's checklist is derived from its fields and its image set every time
it is needed; nothing here is persisted. All functions are pure and total:
missing or malformed optional fields simply count as "not filled in".
"""
import enum
import math
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Iterable, NamedTuple, Optional, Sequence

Checklist = Dict[str, bool]


class ShowStatus(str, enum.Enum):
    todo = "todo"
    in_progress = "in-progress"
    done = "done"


STATUS_LABELS = {
    ShowStatus.todo: "To-do",
    ShowStatus.in_progress: "Bezig",
    ShowStatus.done: "Afgerond",
}


class Criterion(NamedTuple):
    key: str
    label: str
    predicate: Callable[[Any], bool]


# ---------------------------------------------------------------------------
# Field access
# ---------------------------------------------------------------------------


def _field(obj: Any, name: str) -> Any:
    """Read a field from an ORM object, a schema or a plain dict."""
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _images(show: Any) -> list:
    images = _field(show, "images")
    if images is None:
        # Rows nested by the storage layer use the table name
        images = _field(show, "show_images")
    return list(images or [])


def _filled(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


def _positive(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return False
    try:
        return Decimal(str(value)) > 0
    except (InvalidOperation, ValueError):
        return False


def has_image_type(show: Any, image_type: str) -> bool:
    return any(_field(img, "type") == image_type for img in _images(show))


def _text_criterion(field: str) -> Callable[[Any], bool]:
    return lambda show: _filled(_field(show, field))


def _crop_criterion(image_type: str) -> Callable[[Any], bool]:
    return lambda show: has_image_type(show, image_type)


def _meta_description(show: Any) -> bool:
    value = _field(show, "seo_meta_description")
    return isinstance(value, str) and len(value.strip()) >= 50


# ---------------------------------------------------------------------------
# Criterion sets
# ---------------------------------------------------------------------------

STANDARD_CRITERIA: Sequence[Criterion] = (
    Criterion("title", "Titel", _text_criterion("title")),
    Criterion("date", "Datum", lambda show: bool(_field(show, "dates"))),
    Criterion("price", "Prijs", lambda show: _positive(_field(show, "price"))),
    Criterion("text", "Tekst", _text_criterion("description_text")),
    Criterion("heroImage", "Hoofdafbeelding", lambda show: bool(_field(show, "hero_image_url"))),
    Criterion("seoKeyword", "SEO-zoekwoord", _text_criterion("seo_keyword")),
    Criterion("webText", "Webtekst", _text_criterion("web_text")),
    Criterion("cropHero", "Crop hero", _crop_criterion("crop_hero")),
    Criterion("cropUitlichten", "Crop uitlichten", _crop_criterion("crop_uitlichten")),
    Criterion("cropNarrow", "Crop narrow", _crop_criterion("crop_narrow")),
)

# Earlier revision of the checklist; kept selectable until product confirms one
EXTENDED_CRITERIA: Sequence[Criterion] = (
    *STANDARD_CRITERIA[:6],
    Criterion("metaDescription", "Metabeschrijving", _meta_description),
    *STANDARD_CRITERIA[6:],
    Criterion("cropSlider", "Crop slider", _crop_criterion("crop_slider")),
)

CRITERIA_VARIANTS = {
    "standard": STANDARD_CRITERIA,
    "extended": EXTENDED_CRITERIA,
}


def active_criteria() -> Sequence[Criterion]:
    """The criterion set selected by CHECKLIST_VARIANT."""
    from showdesk.core.config import settings

    return CRITERIA_VARIANTS.get(settings.CHECKLIST_VARIANT, STANDARD_CRITERIA)


# ---------------------------------------------------------------------------
# Evaluator and classifier
# ---------------------------------------------------------------------------


def evaluate_checklist(show: Any, criteria: Optional[Iterable[Criterion]] = None) -> Checklist:
    if criteria is None:
        criteria = active_criteria()
    return {c.key: bool(c.predicate(show)) for c in criteria}


def completed_count(checklist: Checklist) -> int:
    return sum(1 for value in checklist.values() if value)


def total_count(checklist: Checklist) -> int:
    return len(checklist)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def progress_percent(checklist: Checklist) -> int:
    total = total_count(checklist)
    if total == 0:
        return 0
    return round_half_up(100 * completed_count(checklist) / total)


def show_status(checklist: Checklist) -> ShowStatus:
    completed = completed_count(checklist)
    if completed == 0:
        return ShowStatus.todo
    if completed == total_count(checklist):
        return ShowStatus.done
    return ShowStatus.in_progress


def status_label(status: ShowStatus) -> str:
    return STATUS_LABELS[ShowStatus(status)]


def describe_show(show: Any, criteria: Optional[Iterable[Criterion]] = None) -> dict:
    """Checklist plus every figure derived from it, for cards and badges."""
    checklist = evaluate_checklist(show, criteria)
    status = show_status(checklist)
    return {
        "checklist": checklist,
        "completed": completed_count(checklist),
        "total": total_count(checklist),
        "progress": progress_percent(checklist),
        "status": status,
        "status_label": status_label(status),
    }
