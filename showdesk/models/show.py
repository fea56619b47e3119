
import uuid
from sqlalchemy import Column, String, DateTime, func, Text, DECIMAL, Integer, ForeignKey, JSON, Uuid
from sqlalchemy.orm import relationship
from showdesk.db.session import Base

SCENE_IMAGE = "scene"
CROP_PREFIX = "crop_"


class Show(Base):
    __tablename__ = "shows"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    season = Column(String(20), nullable=False, index=True)
    title = Column(String(255), nullable=False, default="")
    subtitle = Column(String(255), nullable=True)
    dates = Column(JSON, nullable=True) # ISO date strings, in display order
    start_time = Column(String(10), nullable=True)
    end_time = Column(String(10), nullable=True)
    price = Column(DECIMAL(10, 2), nullable=True)
    discount_price = Column(DECIMAL(10, 2), nullable=True)
    genre = Column(String(100), nullable=True, index=True)

    # Source text as imported, and the rewritten website copy
    description_text = Column(Text, nullable=True)
    text_filename = Column(String(255), nullable=True)
    web_text = Column(Text, nullable=True)

    seo_title = Column(String(255), nullable=True)
    seo_keyword = Column(String(255), nullable=True)
    seo_meta_description = Column(Text, nullable=True)
    seo_slug = Column(String(255), nullable=True)
    social_facebook = Column(Text, nullable=True)
    social_instagram = Column(Text, nullable=True)

    notes = Column(Text, nullable=True)
    hero_image_url = Column(Text, nullable=True)
    created_by = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)

    # Relationships
    images = relationship(
        "ShowImage",
        back_populates="show",
        cascade="all, delete-orphan",
        order_by="ShowImage.position",
    )


class ShowImage(Base):
    __tablename__ = "show_images"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    show_id = Column(Uuid, ForeignKey("shows.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(50), nullable=False) # "scene" or "crop_<format>"
    file_url = Column(Text, nullable=False)
    file_name = Column(String(255), nullable=True)
    alt_text = Column(String(500), nullable=True)
    file_size = Column(Integer, nullable=True)
    position = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    show = relationship("Show", back_populates="images")
