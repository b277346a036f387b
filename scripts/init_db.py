"""
Script para inicializar la base de datos.
Crea todas las tablas definidas en models/
"""
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'app'))

from core.database import Base, get_engine
from models import Category, Product  # noqa: F401  registra las tablas


def init_db():
    """Crear todas las tablas en la base de datos"""
    print("🔨 Creando tablas en la base de datos...")
    Base.metadata.create_all(bind=get_engine())
    print("✅ Tablas creadas exitosamente!")
    print("\n📋 Tablas disponibles:")
    print("   ├── categories")
    print("   └── products")


def drop_db():
    """Eliminar todas las tablas de la base de datos"""
    print("⚠️  Eliminando todas las tablas...")
    Base.metadata.drop_all(bind=get_engine())
    print("✅ Tablas eliminadas!")


if __name__ == "__main__":
    if "--drop" in sys.argv:
        drop_db()
    init_db()
