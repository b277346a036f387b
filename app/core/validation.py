"""
Validación de productos y categorías ya sanitizados.

Se evalúan todas las reglas y se devuelven todos los errores juntos, en el
orden en que se declaran las reglas. En modo actualización cada regla se
aplica solo si el campo viene en el payload.

La unicidad de nombres y slugs no se valida acá: la garantiza la base de
datos (ver core.catalog_service).
"""
import math
from typing import Any, Dict, List
from pydantic import BaseModel

from core.text import slugify

TITLE_REQUIRED = "El título es requerido y debe ser texto"
PRICE_INVALID = "El precio es requerido y debe ser un número positivo"
DESCRIPTION_INVALID = "La descripción debe ser texto"
IMAGES_REQUIRED = "Se requiere al menos una imagen"
CATEGORY_INVALID = "La categoría debe ser un ID válido"
TALLES_INVALID = "Talles debe ser un arreglo de strings"
COLORES_INVALID = "Colores debe ser un arreglo de strings"
SEXO_INVALID = "Sexo debe ser texto"
NAME_REQUIRED = "El nombre es requerido"
NAME_WITHOUT_SLUG = "El nombre debe contener al menos una letra o un número"


class ValidationResult(BaseModel):
    valid: bool
    errors: List[str] = []


def _result(errors: List[str]) -> ValidationResult:
    return ValidationResult(valid=not errors, errors=errors)


def _is_text(value: Any) -> bool:
    return isinstance(value, str)


def _is_valid_price(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value >= 0


def _check_images(images: Any, errors: List[str]) -> None:
    if not isinstance(images, list) or len(images) == 0:
        errors.append(IMAGES_REQUIRED)
        return

    for index, image in enumerate(images, start=1):
        if not isinstance(image, dict):
            image = {}
        url = image.get("url")
        public_id = image.get("public_id")
        if not url or not _is_text(url):
            errors.append(f"Imagen {index}: URL es requerida")
        if not public_id or not _is_text(public_id):
            errors.append(f"Imagen {index}: public_id es requerido")


def _check_product(data: Dict[str, Any], partial: bool) -> List[str]:
    errors: List[str] = []

    def applies(key: str) -> bool:
        return not partial or key in data

    if applies("title"):
        title = data.get("title")
        if not _is_text(title) or not title.strip():
            errors.append(TITLE_REQUIRED)

    if applies("price") and not _is_valid_price(data.get("price")):
        errors.append(PRICE_INVALID)

    if data.get("description") is not None and not _is_text(data["description"]):
        errors.append(DESCRIPTION_INVALID)

    if applies("images"):
        _check_images(data.get("images"), errors)

    if data.get("category") is not None and not _is_text(data["category"]):
        errors.append(CATEGORY_INVALID)

    if data.get("talles") is not None and not isinstance(data["talles"], list):
        errors.append(TALLES_INVALID)

    if data.get("colores") is not None and not isinstance(data["colores"], list):
        errors.append(COLORES_INVALID)

    if data.get("sexo") is not None and not _is_text(data["sexo"]):
        errors.append(SEXO_INVALID)

    return errors


def validate_product(data: Dict[str, Any]) -> ValidationResult:
    """Validación completa (creación)."""
    return _result(_check_product(data, partial=False))


def validate_product_update(data: Dict[str, Any]) -> ValidationResult:
    """Validación parcial: un campo ausente nunca es un error."""
    return _result(_check_product(data, partial=True))


def _check_category(data: Dict[str, Any], partial: bool) -> List[str]:
    errors: List[str] = []

    if not partial or "name" in data:
        name = data.get("name")
        if not _is_text(name) or not name.strip():
            errors.append(NAME_REQUIRED)
        elif not slugify(name):
            errors.append(NAME_WITHOUT_SLUG)

    if data.get("description") is not None and not _is_text(data["description"]):
        errors.append(DESCRIPTION_INVALID)

    return errors


def validate_category(data: Dict[str, Any]) -> ValidationResult:
    return _result(_check_category(data, partial=False))


def validate_category_update(data: Dict[str, Any]) -> ValidationResult:
    return _result(_check_category(data, partial=True))
