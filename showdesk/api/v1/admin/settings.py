
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError
from sqlalchemy.orm import Session

from showdesk.db.session import get_db
from showdesk.api.deps import get_current_user
from showdesk.models.setting import Setting
from showdesk.schemas.common import CurrentUser
from showdesk.schemas.setting import (
    Setting as SettingSchema,
    SettingUpdate,
    SortOrder,
    SortOrderMove,
    SortOrderUpdate,
    default_settings,
    validate_setting,
)
from showdesk.utils.sort_order import merge_sort_order, move_item, sort_order_key

router = APIRouter(prefix="/admin/settings", tags=["Admin - Settings"])
sort_order_router = APIRouter(prefix="/admin/sort-orders", tags=["Admin - Sort orders"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def load_setting(db: Session, key: str) -> Any:
    row = db.query(Setting).filter(Setting.key == key).first()
    return row.value if row is not None else None


def store_setting(db: Session, key: str, value: Any) -> Setting:
    """Insert or replace one setting (upsert on key)."""
    row = db.query(Setting).filter(Setting.key == key).first()
    if row is None:
        row = Setting(key=key, value=value)
        db.add(row)
    else:
        row.value = value
    db.commit()
    db.refresh(row)
    return row


def _validation_detail(e: ValidationError) -> str:
    return "; ".join(err["msg"] for err in e.errors())


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@router.get("/", response_model=Dict[str, Any])
def list_settings(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Defaults for every known key, overridden by what has been stored."""
    values = default_settings()
    for row in db.query(Setting).all():
        if row.value is not None:
            values[row.key] = row.value
    return values


@router.put("/{key}", response_model=SettingSchema)
def update_setting(
    key: str,
    data: SettingUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        value = validate_setting(key, data.value)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid value for '{key}': {_validation_detail(e)}")

    row = store_setting(db, key, value)
    return SettingSchema(key=row.key, value=row.value)


# ---------------------------------------------------------------------------
# Sort orders
# ---------------------------------------------------------------------------


@sort_order_router.get("/{context}", response_model=SortOrder)
def get_sort_order(
    context: str,
    default_ids: List[str] = Query([]),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Saved order for a list, reconciled with the ids currently on screen.

    Without `default_ids` the saved order is returned as is.
    """
    saved = load_setting(db, sort_order_key(context))
    if not default_ids:
        return SortOrder(context=context, ids=saved if isinstance(saved, list) else [])
    return SortOrder(context=context, ids=merge_sort_order(saved, default_ids))


@sort_order_router.put("/{context}", response_model=SortOrder)
def put_sort_order(
    context: str,
    data: SortOrderUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    row = store_setting(db, sort_order_key(context), data.ids)
    return SortOrder(context=context, ids=row.value)


@sort_order_router.post("/{context}/move", response_model=SortOrder)
def move_in_sort_order(
    context: str,
    data: SortOrderMove,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    saved = load_setting(db, sort_order_key(context))
    current: Optional[List[str]] = saved if isinstance(saved, list) else []
    if data.default_ids is not None:
        current = merge_sort_order(saved, data.default_ids)

    try:
        ids = move_item(current, data.old_index, data.new_index)
    except IndexError as e:
        raise HTTPException(status_code=400, detail=str(e))

    row = store_setting(db, sort_order_key(context), ids)
    return SortOrder(context=context, ids=row.value)
