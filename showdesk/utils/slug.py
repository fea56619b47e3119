
import re
from typing import Optional


def to_slug(title: str, subtitle: Optional[str] = None) -> str:
    """Convert title (+ subtitle) to a file-name slug: lowercase a-z0-9 joined by hyphens."""
    text = " ".join(part for part in (title, subtitle) if part)
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower())
    return slug.strip("-")
