"""
Fixtures compartidas.

La base de datos es SQLite en memoria y Cloudinary se reemplaza por un
storage falso que registra los borrados.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
import sys
import os

# Agregar app al path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'app'))

from main import app
from core.config import settings
from core.database import Base, get_db
from core.exceptions import MediaHostError
from core.storage import CloudinaryStorage, get_storage

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeStorage(CloudinaryStorage):
    """Storage que no sale a la red. Los public_id en `failing` fallan al borrarse."""

    def __init__(self, failing=()):
        super().__init__(cloud_name="demo", api_key="key", api_secret="secret")
        self.failing = set(failing)
        self.attempted = []
        self.destroyed = []

    async def destroy(self, public_id):
        self.attempted.append(public_id)
        if public_id in self.failing:
            raise MediaHostError(f"Cloudinary no borró {public_id}: not found")
        self.destroyed.append(public_id)
        return {"result": "ok"}


@pytest.fixture
def test_db():
    """Fixture para base de datos de prueba"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    yield db
    db.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def storage():
    return FakeStorage(failing={"rechazada"})


@pytest.fixture
def client(test_db, storage):
    """Fixture para cliente HTTP"""
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def cloudinary_settings(monkeypatch):
    monkeypatch.setattr(settings, "CLOUDINARY_CLOUD_NAME", "demo")
    monkeypatch.setattr(settings, "CLOUDINARY_API_KEY", "123456789")
    monkeypatch.setattr(settings, "CLOUDINARY_API_SECRET", "secreto")
    monkeypatch.setattr(settings, "CLOUDINARY_UPLOAD_PRESET", "explosion_preset")
    return settings


def make_product_payload(**overrides):
    payload = {
        "title": "Remera Oversize",
        "price": 12500,
        "description": "Algodón peinado",
        "images": [{"url": "https://res.cloudinary.com/demo/image/upload/remera.jpg", "public_id": "productos/remera"}],
        "talles": ["S", "M", "L"],
        "colores": ["Negro", "Blanco"],
        "sexo": "Unisex",
    }
    payload.update(overrides)
    return payload
