
import logging
import time
from uuid import UUID
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from showdesk.db.session import get_db
from showdesk.api.deps import get_current_user
from showdesk.api.v1.admin.shows import (
    IMAGE_EXTENSIONS,
    file_extension,
    get_show_or_404,
    read_upload,
)
from showdesk.models.show import ShowImage, SCENE_IMAGE
from showdesk.schemas.common import CurrentUser
from showdesk.schemas.show import CropRequest, ShowImage as ShowImageSchema, ShowImageUpdate
from showdesk.services.cropper import (
    CROP_FORMATS_BY_KEY,
    CropArea,
    CropError,
    crop_alt_text,
    crop_file_name,
    crop_image,
    fetch_image,
)
from showdesk.services.storage import ShowAssetStorage, StorageError, get_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/shows/{show_id}", tags=["Admin - Show images"])


def _get_image_or_404(db: Session, show_id: UUID, img_id: UUID) -> ShowImage:
    image = (
        db.query(ShowImage)
        .filter(ShowImage.id == img_id, ShowImage.show_id == show_id)
        .first()
    )
    if not image:
        raise HTTPException(status_code=404, detail="Image not found")
    return image


# ---------------------------------------------------------------------------
# Scene photos
# ---------------------------------------------------------------------------


@router.post("/images", response_model=ShowImageSchema, status_code=status.HTTP_201_CREATED)
async def add_scene_image(
    show_id: UUID,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    storage: ShowAssetStorage = Depends(get_storage),
    current_user: CurrentUser = Depends(get_current_user),
):
    show = get_show_or_404(db, show_id)
    data = await read_upload(file, IMAGE_EXTENSIONS)

    path = f"{show.id}/{int(time.time() * 1000)}{file_extension(file.filename)}"
    url = storage.upload(path, data)

    last_position = (
        db.query(func.max(ShowImage.position))
        .filter(ShowImage.show_id == show.id, ShowImage.type == SCENE_IMAGE)
        .scalar()
    )
    image = ShowImage(
        show_id=show.id,
        type=SCENE_IMAGE,
        file_url=url,
        file_name=file.filename,
        file_size=len(data),
        position=0 if last_position is None else last_position + 1,
    )
    db.add(image)
    db.commit()
    db.refresh(image)
    return image


# ---------------------------------------------------------------------------
# Crops
# ---------------------------------------------------------------------------


@router.post("/crops/{format_key}", response_model=ShowImageSchema, status_code=status.HTTP_201_CREATED)
def save_crop(
    show_id: UUID,
    format_key: str,
    area: CropRequest,
    db: Session = Depends(get_db),
    storage: ShowAssetStorage = Depends(get_storage),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Crop the hero image to one of the fixed formats and store it.

    A show keeps one image per crop format: any existing image of the same
    type (row and file) is removed before the new one is inserted.
    """
    fmt = CROP_FORMATS_BY_KEY.get(format_key)
    if fmt is None:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown crop format '{format_key}'. Known: {', '.join(CROP_FORMATS_BY_KEY)}",
        )

    show = get_show_or_404(db, show_id)
    if not show.hero_image_url:
        raise HTTPException(status_code=400, detail="Show has no hero image to crop")

    try:
        source = storage.read(show.hero_image_url)
        if source is None:
            source = fetch_image(show.hero_image_url)
        webp = crop_image(source, CropArea(**area.model_dump()), fmt)
    except (CropError, StorageError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    file_name = crop_file_name(show.title, show.subtitle, fmt)

    existing = [img for img in show.images if img.type == fmt.image_type]
    old_urls = [old.file_url for old in existing if old.file_url]
    for old in existing:
        show.images.remove(old)

    url = storage.upload(f"{show.id}/{file_name}", webp)
    image = ShowImage(
        show_id=show.id,
        type=fmt.image_type,
        file_url=url,
        file_name=file_name,
        alt_text=crop_alt_text(show.title, show.subtitle, fmt),
        file_size=len(webp),
    )
    db.add(image)
    db.commit()
    db.refresh(image)

    # Old files go only once the new row is committed; same-name crops were overwritten in place
    for old_url in old_urls:
        if old_url != url:
            storage.remove(old_url)
    logger.info("Saved %s crop for show %s (replaced %d)", fmt.key, show.id, len(existing))
    return image


# ---------------------------------------------------------------------------
# Single image maintenance
# ---------------------------------------------------------------------------


@router.patch("/images/{img_id}", response_model=ShowImageSchema)
def update_image(
    show_id: UUID,
    img_id: UUID,
    data: ShowImageUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    image = _get_image_or_404(db, show_id, img_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(image, field, value)

    db.commit()
    db.refresh(image)
    return image


@router.delete("/images/{img_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_image(
    show_id: UUID,
    img_id: UUID,
    db: Session = Depends(get_db),
    storage: ShowAssetStorage = Depends(get_storage),
    current_user: CurrentUser = Depends(get_current_user),
):
    image = _get_image_or_404(db, show_id, img_id)
    file_url = image.file_url

    db.delete(image)
    db.commit()
    storage.remove(file_url)
