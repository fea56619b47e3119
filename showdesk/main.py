import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler, request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from starlette.exceptions import HTTPException as StarletteHTTPException
from showdesk.db.init_db import create_database
from showdesk.db.base import Base
from showdesk.db.session import engine
from showdesk.core.config import settings
from showdesk.api.v1.router import api_router

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

AI_PREFIX = f"{settings.API_V1_STR}/ai"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Ensure DB exists and create tables
    create_database()
    Base.metadata.create_all(bind=engine)
    Path(settings.MEDIA_ROOT).mkdir(parents=True, exist_ok=True)
    logger.info("%s ready", settings.PROJECT_NAME)
    yield


from fastapi.middleware.cors import CORSMiddleware

app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


# The AI proxies answer with {"error": ...} bodies instead of {"detail": ...}
@app.exception_handler(StarletteHTTPException)
async def ai_http_exception_handler(request: Request, exc: StarletteHTTPException):
    if request.url.path.startswith(AI_PREFIX):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )
    return await http_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def ai_validation_exception_handler(request: Request, exc: RequestValidationError):
    if request.url.path.startswith(AI_PREFIX):
        return JSONResponse(status_code=400, content={"error": "Ongeldige aanvraag."})
    return await request_validation_exception_handler(request, exc)


app.include_router(api_router, prefix=settings.API_V1_STR)

Path(settings.MEDIA_ROOT).mkdir(parents=True, exist_ok=True)
app.mount(settings.MEDIA_URL, StaticFiles(directory=settings.MEDIA_ROOT), name="media")

@app.get("/")
def read_root():
    return {"Hello": "Showdesk"}
