from typing import Optional
from pydantic import BaseModel, Field, field_validator

MAX_TEXT_LENGTH = 50_000
MAX_SHORT_FIELD_LENGTH = 200


def _single_line(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return " ".join(value.replace("\r", " ").replace("\n", " ").split())


class OptimizeTextRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=MAX_TEXT_LENGTH)
    title: str = Field(..., min_length=1, max_length=MAX_SHORT_FIELD_LENGTH)
    keyword: Optional[str] = Field(None, max_length=MAX_SHORT_FIELD_LENGTH)
    model: Optional[str] = Field(None, max_length=100)
    maxWords: Optional[int] = Field(None, ge=10, le=1000)

    @field_validator("title", "keyword", mode="after")
    @classmethod
    def strip_newlines(cls, value: Optional[str]) -> Optional[str]:
        return _single_line(value)


class OptimizeTextResponse(BaseModel):
    text: str


class AltTextRequest(BaseModel):
    imageUrl: str = Field(..., min_length=1, max_length=2048)
    title: str = Field(..., min_length=1, max_length=MAX_SHORT_FIELD_LENGTH)
    subtitle: Optional[str] = Field(None, max_length=MAX_SHORT_FIELD_LENGTH)

    @field_validator("title", "subtitle", mode="after")
    @classmethod
    def strip_newlines(cls, value: Optional[str]) -> Optional[str]:
        return _single_line(value)

    @field_validator("imageUrl")
    @classmethod
    def http_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("imageUrl must be an http(s) URL")
        return value


class AltTextResponse(BaseModel):
    altText: str
