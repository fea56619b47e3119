
from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session, selectinload

from showdesk.db.session import get_db
from showdesk.api.deps import get_current_user
from showdesk.models.setting import Setting
from showdesk.models.show import Show
from showdesk.schemas.common import CurrentUser
from showdesk.schemas.dashboard import GenreCount, SeasonDashboard, SeasonInfo, StatusBucket
from showdesk.schemas.show import ShowSummary
from showdesk.utils.season import current_season, is_season_label, next_season, previous_season
from showdesk.utils.season_summary import summarize_season
from showdesk.utils.show_status import ShowStatus, status_label

router = APIRouter(prefix="/admin", tags=["Admin - Dashboard"])


@router.get("/dashboard", response_model=SeasonDashboard)
def season_dashboard(
    season: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Season overview: overall progress, shows per status bucket and per genre.

    Status is recomputed from each show's fields and images on every call.
    """
    shows = (
        db.query(Show)
        .options(selectinload(Show.images))
        .filter(Show.season == season)
        .order_by(Show.title.asc())
        .all()
    )
    summary = summarize_season(shows)

    buckets = {status: [] for status in ShowStatus}
    for show, described in zip(shows, summary["described"]):
        buckets[described["status"]].append(
            ShowSummary(
                id=show.id,
                title=show.title,
                hero_image_url=show.hero_image_url,
                first_date=show.dates[0] if show.dates else None,
                progress=described["progress"],
                status=described["status"],
            )
        )

    return SeasonDashboard(
        season=season,
        show_count=summary["show_count"],
        done_count=summary["done_count"],
        progress=summary["progress"],
        by_status={status.value: count for status, count in summary["by_status"].items()},
        buckets=[
            StatusBucket(
                status=status.value,
                label=status_label(status),
                count=len(items),
                shows=items,
            )
            for status, items in buckets.items()
        ],
        genres=[GenreCount(genre=genre, count=count) for genre, count in summary["genres"]],
    )


@router.get("/seasons", response_model=SeasonInfo)
def seasons(
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    current = current_season(date.today())
    default = current
    row = db.query(Setting).filter(Setting.key == "default_season").first()
    if row is not None and isinstance(row.value, str) and is_season_label(row.value):
        default = row.value

    return SeasonInfo(
        current=current,
        previous=previous_season(current),
        next=next_season(current),
        default=default,
    )
