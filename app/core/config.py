import os
from typing import Optional
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # API Config
    API_TITLE: str = "La Explosión API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "API del catálogo de La Explosión Indumentaria"
    ENV: str = os.getenv("ENV", "production")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "postgresql://user:pass@db:5432/explosion")

    # Cloudinary (signed uploads y borrado de imágenes)
    CLOUDINARY_CLOUD_NAME: str = os.getenv("CLOUDINARY_CLOUD_NAME", "")
    CLOUDINARY_API_KEY: str = os.getenv("CLOUDINARY_API_KEY", "")
    CLOUDINARY_API_SECRET: str = os.getenv("CLOUDINARY_API_SECRET", "")
    CLOUDINARY_UPLOAD_PRESET: Optional[str] = os.getenv("CLOUDINARY_UPLOAD_PRESET") or None
    CLOUDINARY_API_BASE: str = os.getenv("CLOUDINARY_API_BASE", "https://api.cloudinary.com/v1_1")
    CLOUDINARY_TIMEOUT: float = float(os.getenv("CLOUDINARY_TIMEOUT", "10"))

    # Tienda
    WHATSAPP_PHONE: str = os.getenv("WHATSAPP_PHONE", "5492804833866")

    # Frontend URL (para links de productos)
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:3000")
    CORS_ALLOW_ORIGINS: str = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:3000")

    class Config:
        env_file = ".env"

settings = Settings()
