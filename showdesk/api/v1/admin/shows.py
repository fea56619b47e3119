
import logging
import time
from uuid import UUID
from typing import List, Optional
from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session, selectinload

from showdesk.db.session import get_db
from showdesk.api.deps import get_current_user
from showdesk.core.config import settings
from showdesk.models.show import Show
from showdesk.schemas.common import CurrentUser
from showdesk.schemas.show import ShowCreate, ShowUpdate, ShowWithStatus, Show as ShowSchema
from showdesk.services.storage import ShowAssetStorage, get_storage
from showdesk.utils.show_status import ShowStatus, describe_show

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/shows", tags=["Admin - Shows"])

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp"}

# Fields a duplicate starts without; they are specific to the original show
DUPLICATE_EXCLUDED = {
    "id", "created_at", "updated_at", "created_by", "images",
    "seo_keyword", "seo_meta_description", "seo_slug", "seo_title", "web_text",
    "hero_image_url",
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def with_status(show: Show) -> ShowWithStatus:
    """Serialize a show together with its freshly computed checklist and status."""
    data = ShowSchema.model_validate(show).model_dump()
    return ShowWithStatus(**data, **describe_show(show))


def get_show_or_404(db: Session, show_id: UUID) -> Show:
    show = (
        db.query(Show)
        .options(selectinload(Show.images))
        .filter(Show.id == show_id)
        .first()
    )
    if not show:
        raise HTTPException(status_code=404, detail="Show not found")
    return show


def file_extension(filename: Optional[str]) -> str:
    if not filename or "." not in filename:
        return ""
    return "." + filename.rsplit(".", 1)[1].lower()


async def read_upload(upload: UploadFile, allowed: set) -> bytes:
    ext = file_extension(upload.filename)
    if ext not in allowed:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type '{ext or upload.filename}'. Allowed: {', '.join(sorted(allowed))}",
        )
    data = await upload.read()
    if not data:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")
    if len(data) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="Uploaded file is too large")
    return data


# ---------------------------------------------------------------------------
# Show CRUD
# ---------------------------------------------------------------------------


@router.get("/", response_model=List[ShowWithStatus])
def list_shows(
    season: str = Query(..., min_length=1),
    status_filter: Optional[ShowStatus] = Query(None, alias="status"),
    genre: Optional[str] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    # The full image collection is loaded up front; crop criteria depend on it
    query = db.query(Show).options(selectinload(Show.images)).filter(Show.season == season)
    if genre:
        query = query.filter(Show.genre == genre)
    if search:
        query = query.filter(Show.title.ilike(f"%{search}%"))
    shows = query.order_by(Show.title.asc()).all()

    results = [with_status(show) for show in shows]
    if status_filter is not None:
        results = [item for item in results if item.status == status_filter]
    return results


@router.get("/{id}", response_model=ShowWithStatus)
def get_show(
    id: UUID,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return with_status(get_show_or_404(db, id))


@router.post("/", response_model=ShowWithStatus, status_code=status.HTTP_201_CREATED)
def create_show(
    data: ShowCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    payload = data.model_dump()
    payload["title"] = payload["title"].strip()
    show = Show(created_by=current_user.id, **payload)
    db.add(show)
    db.commit()
    db.refresh(show)
    logger.info("Created show %s in season %s", show.id, show.season)
    return with_status(show)


@router.patch("/{id}", response_model=ShowWithStatus)
def update_show(
    id: UUID,
    data: ShowUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    show = get_show_or_404(db, id)

    for field, value in data.model_dump(exclude_unset=True).items():
        if field == "title":
            value = (value or "").strip()
        setattr(show, field, value)

    db.commit()
    db.refresh(show)
    return with_status(show)


@router.post("/{id}/duplicate", response_model=ShowWithStatus, status_code=status.HTTP_201_CREATED)
def duplicate_show(
    id: UUID,
    season: Optional[str] = Query(None, min_length=1, description="Target season, defaults to the source show's season"),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    source = get_show_or_404(db, id)
    data = ShowSchema.model_validate(source).model_dump(exclude=DUPLICATE_EXCLUDED)
    data["title"] = f"{source.title} (kopie)"
    data["season"] = season or source.season

    copy = Show(created_by=current_user.id, **data)
    db.add(copy)
    db.commit()
    db.refresh(copy)
    logger.info("Duplicated show %s as %s", source.id, copy.id)
    return with_status(copy)


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_show(
    id: UUID,
    db: Session = Depends(get_db),
    storage: ShowAssetStorage = Depends(get_storage),
    current_user: CurrentUser = Depends(get_current_user),
):
    show = get_show_or_404(db, id)

    # Cascade: image rows go with the show, their files with the show's prefix
    file_urls = [img.file_url for img in show.images] + [show.hero_image_url]
    db.delete(show)
    db.commit()

    for url in file_urls:
        storage.remove(url)
    storage.remove_prefix(str(id))
    logger.info("Deleted show %s and %d stored file(s)", id, len(file_urls))


# ---------------------------------------------------------------------------
# Source text and hero image
# ---------------------------------------------------------------------------


@router.post("/{id}/description-file", response_model=ShowWithStatus)
async def import_description(
    id: UUID,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Replace `description_text` with the contents of an uploaded .txt file."""
    show = get_show_or_404(db, id)
    data = await read_upload(file, {".txt"})
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError:
        text = data.decode("latin-1")

    show.description_text = text.strip()
    show.text_filename = file.filename
    db.commit()
    db.refresh(show)
    return with_status(show)


@router.post("/{id}/hero-image", response_model=ShowWithStatus)
async def upload_hero_image(
    id: UUID,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    storage: ShowAssetStorage = Depends(get_storage),
    current_user: CurrentUser = Depends(get_current_user),
):
    show = get_show_or_404(db, id)
    data = await read_upload(file, IMAGE_EXTENSIONS)

    path = f"{show.id}/{int(time.time() * 1000)}{file_extension(file.filename)}"
    previous = show.hero_image_url
    show.hero_image_url = storage.upload(path, data)
    db.commit()
    db.refresh(show)

    if previous and previous != show.hero_image_url:
        storage.remove(previous)
    return with_status(show)
