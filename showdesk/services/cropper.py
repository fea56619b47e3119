import io
import logging
from dataclasses import dataclass
from typing import Optional

import requests
from PIL import Image, ImageOps, UnidentifiedImageError

from showdesk.core.config import settings
from showdesk.utils.slug import to_slug

logger = logging.getLogger(__name__)

WEBP_QUALITY = 85


class CropError(Exception):
    pass


@dataclass(frozen=True)
class CropFormat:
    key: str
    label: str
    width: int
    height: int
    description: str

    @property
    def suffix(self) -> str:
        return f"-{self.key}"

    @property
    def image_type(self) -> str:
        return f"crop_{self.key}"


CROP_FORMATS = (
    CropFormat("hero", "Hero", 2160, 1020, "Home & voorstellingspagina"),
    CropFormat("uitlichten", "Uitlichten", 1080, 1080, "Vierkant"),
    CropFormat("narrow", "Narrow", 1650, 1080, "Staand formaat"),
    CropFormat("slider", "Slider", 1920, 1080, "Carrousel liggend"),
)

CROP_FORMATS_BY_KEY = {fmt.key: fmt for fmt in CROP_FORMATS}


@dataclass(frozen=True)
class CropArea:
    x: int
    y: int
    width: int
    height: int


def crop_file_name(title: str, subtitle: Optional[str], fmt: CropFormat) -> str:
    return f"{to_slug(title or '', subtitle) or 'voorstelling'}{fmt.suffix}.webp"


def crop_alt_text(title: str, subtitle: Optional[str], fmt: CropFormat) -> str:
    name = " - ".join(part for part in (title, subtitle) if part)
    return f"{name} in {settings.THEATER_NAME} - {fmt.label.lower()}"


def fetch_image(url: str, timeout: int = 20, max_bytes: Optional[int] = None) -> bytes:
    """Download an external source image, refusing anything over `max_bytes`."""
    if not url.startswith(("http://", "https://")):
        raise CropError("Source image must be an http(s) URL")
    limit = max_bytes if max_bytes is not None else settings.MAX_UPLOAD_BYTES
    data = bytearray()
    try:
        with requests.get(url, timeout=timeout, stream=True) as response:
            response.raise_for_status()
            for chunk in response.iter_content(chunk_size=64 * 1024):
                data.extend(chunk)
                if len(data) > limit:
                    raise CropError(f"Source image is larger than {limit} bytes")
    except requests.RequestException as e:
        raise CropError(f"Could not download source image: {e}") from e
    return bytes(data)


def crop_image(source: bytes, area: CropArea, fmt: CropFormat) -> bytes:
    """Cut `area` out of the source image and export it at the format size as WebP."""
    try:
        with Image.open(io.BytesIO(source)) as im:
            im = ImageOps.exif_transpose(im)
            if area.width <= 0 or area.height <= 0:
                raise CropError("Crop area must have a positive size")
            if (
                area.x < 0
                or area.y < 0
                or area.x + area.width > im.width
                or area.y + area.height > im.height
            ):
                raise CropError(
                    f"Crop area {area.width}x{area.height}+{area.x}+{area.y} "
                    f"falls outside the {im.width}x{im.height} source image"
                )
            if im.mode not in ("RGB", "RGBA"):
                im = im.convert("RGBA" if "A" in im.getbands() else "RGB")
            cropped = im.crop((area.x, area.y, area.x + area.width, area.y + area.height))
            resized = cropped.resize((fmt.width, fmt.height), Image.LANCZOS)
            out = io.BytesIO()
            resized.save(out, format="WEBP", quality=WEBP_QUALITY)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise CropError(f"Unreadable source image: {e}") from e
    logger.debug("Cropped %s to %dx%d", fmt.key, fmt.width, fmt.height)
    return out.getvalue()
