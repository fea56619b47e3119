import io
import os
import tempfile

# Configure before the app (and its engine) is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("MEDIA_ROOT", tempfile.mkdtemp(prefix="showdesk-media-"))
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from showdesk.core.security import create_access_token
from showdesk.db.base import Base
from showdesk.db.session import get_db
from showdesk.main import app
from showdesk.services.ai_gateway import get_ai_client
from showdesk.services.storage import ShowAssetStorage, get_storage


class FakeAIClient:
    """Stands in for the gateway; records calls and can be told to fail."""

    def __init__(self):
        self.calls = []
        self.error = None
        self.reply = "Herschreven tekst"

    def optimize_text(self, **kwargs):
        self.calls.append(("optimize_text", kwargs))
        if self.error:
            raise self.error
        return self.reply

    def generate_alt_text(self, **kwargs):
        self.calls.append(("generate_alt_text", kwargs))
        if self.error:
            raise self.error
        return "Dansers op het podium in Stadstheater Zoetermeer"


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def storage(tmp_path):
    return ShowAssetStorage(root=str(tmp_path), base_url="http://testserver/media")


@pytest.fixture
def ai_client():
    return FakeAIClient()


@pytest.fixture
def client(db_engine, storage, ai_client):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_ai_client] = lambda: ai_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    token = create_access_token("editor-1", email="redactie@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def png_bytes():
    image = Image.new("RGB", (400, 300), (200, 40, 40))
    out = io.BytesIO()
    image.save(out, format="PNG")
    return out.getvalue()
