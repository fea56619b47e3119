
from typing import Annotated, Optional, List, Dict
from pydantic import AfterValidator, BaseModel, UUID4, Field, field_validator
from decimal import Decimal
from datetime import date, datetime

from showdesk.utils.show_status import ShowStatus


# Image Schemas
class ShowImageBase(BaseModel):
    type: str
    file_url: str
    file_name: Optional[str] = None
    alt_text: Optional[str] = None
    file_size: Optional[int] = None
    position: Optional[int] = None


class ShowImageUpdate(BaseModel):
    alt_text: Optional[str] = Field(None, max_length=500)
    position: Optional[int] = None


class ShowImage(ShowImageBase):
    id: UUID4
    show_id: UUID4

    class Config:
        from_attributes = True


# Pixel rectangle on the hero image, as reported by the crop tool
class CropRequest(BaseModel):
    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)


def _iso_dates(value: Optional[List[str]]) -> Optional[List[str]]:
    if value is None:
        return None
    return [date.fromisoformat(item.strip()).isoformat() for item in value]


IsoDates = Annotated[Optional[List[str]], AfterValidator(_iso_dates)]


# Show Schemas
class ShowBase(BaseModel):
    title: str = ""
    subtitle: Optional[str] = None
    dates: IsoDates = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    discount_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    genre: Optional[str] = None
    description_text: Optional[str] = None
    text_filename: Optional[str] = None
    web_text: Optional[str] = None
    seo_title: Optional[str] = None
    seo_keyword: Optional[str] = None
    seo_meta_description: Optional[str] = None
    seo_slug: Optional[str] = None
    social_facebook: Optional[str] = None
    social_instagram: Optional[str] = None
    notes: Optional[str] = None
    hero_image_url: Optional[str] = None


class ShowCreate(ShowBase):
    season: str = Field(..., min_length=1, max_length=20)


# Every field optional; only the ones sent are written (exclude_unset)
class ShowUpdate(BaseModel):
    season: Optional[str] = Field(None, min_length=1, max_length=20)
    title: Optional[str] = None
    subtitle: Optional[str] = None
    dates: IsoDates = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    discount_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    genre: Optional[str] = None
    description_text: Optional[str] = None
    text_filename: Optional[str] = None
    web_text: Optional[str] = None
    seo_title: Optional[str] = None
    seo_keyword: Optional[str] = None
    seo_meta_description: Optional[str] = None
    seo_slug: Optional[str] = None
    social_facebook: Optional[str] = None
    social_instagram: Optional[str] = None
    notes: Optional[str] = None
    hero_image_url: Optional[str] = None

    @field_validator("season")
    @classmethod
    def season_not_null(cls, value: Optional[str]) -> str:
        # May be left out, but a show always belongs to a season
        if value is None:
            raise ValueError("season cannot be null")
        return value


class Show(ShowBase):
    id: UUID4
    season: str
    dates: Optional[List[str]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    images: List[ShowImage] = []

    class Config:
        from_attributes = True


# Show with its derived completion figures (recomputed on every read)
class ShowWithStatus(Show):
    checklist: Dict[str, bool]
    completed: int
    total: int
    progress: int
    status: ShowStatus
    status_label: str


# Compact show for dashboard buckets
class ShowSummary(BaseModel):
    id: UUID4
    title: str
    hero_image_url: Optional[str] = None
    first_date: Optional[str] = None
    progress: int
    status: ShowStatus
