import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Float, DateTime, Text, JSON
from sqlalchemy.sql import func
from core.database import Base


def generate_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(100), unique=True, nullable=False)
    slug = Column(String(100), unique=True, nullable=False, index=True)
    description = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())


class Product(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=generate_id)
    title = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)
    description = Column(Text)
    # Lista de {"url", "public_id"} alojadas en Cloudinary
    images = Column(JSON, nullable=False, default=list)
    # Referencia débil: no hay foreign key hacia categories
    category = Column(String(36), nullable=True, index=True)
    talles = Column(JSON, nullable=False, default=list)
    colores = Column(JSON, nullable=False, default=list)
    sexo = Column(String(50))
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow)
