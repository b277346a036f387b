"""
Script para verificar que la configuración está completa.
Revisa variables de entorno, conexión a la base de datos y credenciales de Cloudinary.

Ejecutar con: python scripts/check_config.py
"""
import asyncio
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'app'))

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from core.config import settings
from core.database import get_engine
from core.exceptions import CatalogError
from core.storage import CloudinaryStorage

REQUIRED_VARS = [
    "DATABASE_URL",
    "CLOUDINARY_CLOUD_NAME",
    "CLOUDINARY_API_KEY",
    "CLOUDINARY_API_SECRET",
    "CLOUDINARY_UPLOAD_PRESET",
]


def missing_settings() -> list:
    """Nombres de las variables requeridas que están vacías."""
    return [name for name in REQUIRED_VARS if not getattr(settings, name)]


def check_database() -> bool:
    try:
        with get_engine().connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        print(f"❌ Base de datos: Error de conexión: {str(e)}")
        return False


async def check_cloudinary() -> bool:
    storage = CloudinaryStorage()
    try:
        return await storage.ping()
    except CatalogError as e:
        print(f"❌ Cloudinary: {e.message}")
        return False
    finally:
        await storage.aclose()


def main() -> int:
    print("🔍 Verificando configuración...\n")

    missing = missing_settings()
    for name in REQUIRED_VARS:
        print(f"{'❌' if name in missing else '✅'} {name}: {'FALTA' if name in missing else 'definida'}")

    if missing:
        print("\n⚠️  Faltan variables de entorno. Verifica tu archivo .env\n")
        return 1

    print("\n📦 Probando conexión a la base de datos...")
    if not check_database():
        return 1
    print("✅ Base de datos: Conexión exitosa")

    print("\n☁️  Probando configuración de Cloudinary...")
    if not asyncio.run(check_cloudinary()):
        print("❌ Cloudinary: credenciales rechazadas")
        return 1
    print("✅ Cloudinary: Conexión exitosa")

    print("\n🎉 Configuración completa\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
