from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session
from typing import Any, Dict, Optional

from core.catalog_service import CategoryService
from core.database import get_db
from core.exceptions import BadRequestError
from core.sanitize import sanitize_category_input, sanitize_category_update
from models.products import Category
from schemas.products import CategoryResponse

router = APIRouter(
    prefix="/api/categories",
    tags=["categories"]
)


def serialize_category(category: Category) -> dict:
    return CategoryResponse.model_validate(category).model_dump(mode="json")


@router.get("")
async def list_categories(db: Session = Depends(get_db)):
    """
    Listar categorías ordenadas por nombre.
    """
    categories = CategoryService(db).list()

    return {
        "success": True,
        "status_code": 200,
        "message": "Categorías obtenidas exitosamente",
        "data": {
            "categories": [serialize_category(c) for c in categories],
            "total": len(categories)
        }
    }


@router.post("", status_code=201)
async def create_category(
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db)
):
    """
    Crear una categoría. El slug se genera a partir del nombre.
    """
    category = CategoryService(db).create(sanitize_category_input(payload))

    return {
        "success": True,
        "status_code": 201,
        "message": "Categoría creada exitosamente",
        "data": serialize_category(category)
    }


@router.put("")
async def update_category(
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db)
):
    """
    Actualizar una categoría. Solo se actualizan los campos enviados.
    """
    category_id = payload.get("id")
    if not category_id:
        raise BadRequestError("falta id", "MISSING_ID")

    category = CategoryService(db).update(str(category_id), sanitize_category_update(payload))

    return {
        "success": True,
        "status_code": 200,
        "message": "Categoría actualizada exitosamente",
        "data": serialize_category(category)
    }


@router.delete("")
async def delete_category(
    id: Optional[str] = Query(None, description="ID de la categoría"),
    force: bool = Query(False, description="Quitar la categoría de los productos que la usan y eliminarla"),
    db: Session = Depends(get_db)
):
    """
    Eliminar una categoría.

    Por defecto NO se puede eliminar una categoría con productos asociados.
    Con ?force=true esos productos quedan sin categoría.
    """
    if not id:
        raise BadRequestError("falta id", "MISSING_ID")

    result = CategoryService(db).delete(id, force=force)

    return {
        "success": True,
        "status_code": 200,
        "message": "Categoría eliminada",
        "data": {"ok": True, **result}
    }
