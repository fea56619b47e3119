
import logging
from typing import Any
from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from showdesk.db.session import get_db
from showdesk.api.deps import get_current_user
from showdesk.api.v1.admin.settings import load_setting
from showdesk.core.config import settings
from showdesk.schemas.ai import (
    AltTextRequest,
    AltTextResponse,
    OptimizeTextRequest,
    OptimizeTextResponse,
)
from showdesk.schemas.common import CurrentUser, ErrorResponse
from showdesk.services.ai_gateway import AIGatewayClient, GatewayError, get_ai_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["AI"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    402: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _invalid(e: ValidationError) -> JSONResponse:
    first = e.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "body"
    return _error(400, f"{field}: {first['msg']}")


@router.post("/optimize-text", response_model=OptimizeTextResponse, responses=ERROR_RESPONSES)
def optimize_text(
    payload: Any = Body(...),
    db: Session = Depends(get_db),
    client: AIGatewayClient = Depends(get_ai_client),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Rewrite a show's source text into website copy."""
    try:
        request = OptimizeTextRequest.model_validate(payload)
    except ValidationError as e:
        return _invalid(e)

    model = request.model or load_setting(db, "ai_model") or settings.AI_DEFAULT_MODEL
    max_words = request.maxWords or load_setting(db, "ai_max_words") or settings.AI_DEFAULT_MAX_WORDS

    try:
        text = client.optimize_text(
            text=request.text,
            title=request.title,
            keyword=request.keyword,
            model=model,
            max_words=max_words,
        )
    except GatewayError as e:
        logger.warning("optimize-text failed for user %s: %s", current_user.id, e.message)
        return _error(e.status_code, e.message)

    return OptimizeTextResponse(text=text)


@router.post("/generate-alt-text", response_model=AltTextResponse, responses=ERROR_RESPONSES)
def generate_alt_text(
    payload: Any = Body(...),
    client: AIGatewayClient = Depends(get_ai_client),
    current_user: CurrentUser = Depends(get_current_user),
):
    try:
        request = AltTextRequest.model_validate(payload)
    except ValidationError as e:
        return _invalid(e)

    try:
        alt_text = client.generate_alt_text(
            image_url=request.imageUrl,
            title=request.title,
            subtitle=request.subtitle,
            model=settings.AI_ALT_TEXT_MODEL,
        )
    except GatewayError as e:
        logger.warning("generate-alt-text failed for user %s: %s", current_user.id, e.message)
        if e.status_code == 500:
            return _error(500, "Fout bij genereren ALT-tekst.")
        return _error(e.status_code, e.message)

    return AltTextResponse(altText=alt_text)
