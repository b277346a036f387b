from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session
from typing import Any, Dict, List, Optional

from core.catalog_service import CategoryService, ProductService
from core.contact import build_whatsapp_link, product_page_url
from core.database import get_db
from core.exceptions import BadRequestError
from core.sanitize import sanitize_product_input, sanitize_product_update
from core.storage import CloudinaryStorage, get_storage
from models.products import Product
from schemas.products import CategoryRef, ProductResponse, ProductWithCategoryResponse

router = APIRouter(
    prefix="/api/products",
    tags=["products"]
)


def serialize_product(product: Product) -> dict:
    return ProductResponse.model_validate(product).model_dump(mode="json")


def serialize_products_with_category(products: List[Product], db: Session) -> List[dict]:
    """Poblar la categoría de cada producto (una sola consulta)."""
    categories = CategoryService(db).find_many(p.category for p in products)
    serialized = []
    for product in products:
        data = ProductWithCategoryResponse.model_validate(product)
        category = categories.get(product.category)
        if category:
            data.category_info = CategoryRef.model_validate(category)
        serialized.append(data.model_dump(mode="json"))
    return serialized


# ==================== STOREFRONT ====================

@router.get("")
async def list_products(
    category: Optional[str] = Query(None, description="Filtrar por ID de categoría"),
    sexo: Optional[str] = Query(None, description="Hombre, Mujer, Unisex o Todos"),
    search: Optional[str] = Query(None, description="Buscar en título y colores"),
    db: Session = Depends(get_db)
):
    """
    Listar productos, del más nuevo al más viejo, con su categoría.
    """
    products = ProductService(db).list(category=category, sexo=sexo, search=search)

    return {
        "success": True,
        "status_code": 200,
        "message": "Productos obtenidos exitosamente",
        "data": {
            "products": serialize_products_with_category(products, db),
            "total": len(products)
        }
    }


@router.get("/{product_id}")
async def get_product(
    product_id: str,
    db: Session = Depends(get_db)
):
    """
    Obtener un producto por su ID.
    """
    product = ProductService(db).get(product_id)

    return {
        "success": True,
        "status_code": 200,
        "message": "Producto obtenido exitosamente",
        "data": serialize_products_with_category([product], db)[0]
    }


@router.get("/{product_id}/whatsapp")
async def get_whatsapp_link(
    product_id: str,
    talle: Optional[str] = Query(None, description="Talle elegido"),
    cantidad: int = Query(1, ge=1, description="Cantidad"),
    db: Session = Depends(get_db)
):
    """
    Link de WhatsApp con la consulta prellenada.

    Si el producto tiene talles hay que elegir uno.
    """
    product = ProductService(db).get(product_id)
    talle = talle.strip() if talle else None

    if product.talles and not talle:
        raise BadRequestError("Seleccioná un talle", "SIZE_REQUIRED")

    if talle and product.talles and talle not in product.talles:
        raise BadRequestError(f"El talle {talle} no está disponible", "INVALID_SIZE")

    url = build_whatsapp_link(
        title=product.title,
        page_url=product_page_url(product.id),
        talle=talle,
        cantidad=cantidad
    )

    return {
        "success": True,
        "status_code": 200,
        "message": "Link de contacto generado",
        "data": {"url": url}
    }


# ==================== ADMIN ====================

@router.post("", status_code=201)
async def create_product(
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db)
):
    """
    Crear un producto.

    Requiere al menos una imagen ya subida a Cloudinary ({url, public_id}).
    """
    product = ProductService(db).create(sanitize_product_input(payload))

    return {
        "success": True,
        "status_code": 201,
        "message": "Producto creado exitosamente",
        "data": serialize_product(product)
    }


@router.put("")
async def update_product(
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db)
):
    """
    Actualizar un producto. El body lleva `id` y solo los campos a cambiar.
    """
    product_id = payload.get("id")
    if not product_id:
        raise BadRequestError("falta id", "MISSING_ID")

    updates = {key: value for key, value in payload.items() if key != "id"}
    product = ProductService(db).update(str(product_id), sanitize_product_update(updates))

    return {
        "success": True,
        "status_code": 200,
        "message": "Producto actualizado exitosamente",
        "data": serialize_product(product)
    }


@router.delete("")
async def delete_product(
    id: Optional[str] = Query(None, description="ID del producto"),
    db: Session = Depends(get_db),
    storage: CloudinaryStorage = Depends(get_storage)
):
    """
    Eliminar un producto y sus imágenes de Cloudinary.

    Las imágenes que no se puedan borrar no impiden eliminar el producto;
    el detalle de cada una vuelve en `data.images`.
    """
    if not id:
        raise BadRequestError("falta id", "MISSING_ID")

    result = await ProductService(db, storage).delete(id)

    return {
        "success": True,
        "status_code": 200,
        "message": "Producto eliminado exitosamente",
        "data": {"ok": True, **result}
    }
