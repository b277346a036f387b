"""
Normalización de los payloads recibidos por la API.

Las funciones de este módulo nunca fallan: convierten cualquier entrada a un
diccionario con tipos predecibles y dejan que core.validation decida si los
valores son correctos (por ejemplo, un precio no numérico queda como NaN).

Los campos opcionales ausentes o vacíos no aparecen en el resultado.
"""
import math
from typing import Any, Dict, List, Optional

# Alias aceptados dentro de cada imagen. El primero de cada tupla es el
# nombre que se persiste.
IMAGE_URL_KEYS = ("url", "remoteUrl", "secure_url")
IMAGE_ID_KEYS = ("public_id", "cloudinaryId", "cloudinary_id", "remoteId")

# Campos del esquema anterior (una sola imagen por producto)
LEGACY_URL_KEYS = ("imageUrl", "image_url")
LEGACY_ID_KEYS = ("cloudinaryId", "cloudinary_id")


def to_number(value: Any) -> float:
    """
    Conversión numérica tolerante.

    Devuelve NaN cuando el valor no representa un número; la validación se
    encarga de rechazarlo.
    """
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            # Enteros fuera del rango de float
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return math.nan
        try:
            return float(s)
        except ValueError:
            return math.nan
    return math.nan


def _clean(value: Any) -> str:
    return str(value).strip()


def _optional_text(value: Any) -> Optional[str]:
    """Texto recortado, o None si no hay contenido."""
    if value is None:
        return None
    return _clean(value) or None


def _first(data: Dict[str, Any], keys) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _coerce_image(entry: Any) -> Dict[str, str]:
    if not isinstance(entry, dict):
        entry = {}
    url = _first(entry, IMAGE_URL_KEYS)
    public_id = _first(entry, IMAGE_ID_KEYS)
    return {
        "url": _clean(url) if url is not None else "",
        "public_id": _clean(public_id) if public_id is not None else "",
    }


def _coerce_images(value: Any) -> List[Dict[str, str]]:
    if not isinstance(value, list):
        return []
    return [_coerce_image(entry) for entry in value]


def _legacy_images(data: Dict[str, Any]) -> Optional[List[Dict[str, str]]]:
    """Convertir imageUrl/cloudinaryId sueltos en una lista de una imagen."""
    url = _first(data, LEGACY_URL_KEYS)
    public_id = _first(data, LEGACY_ID_KEYS)
    if url is None and public_id is None:
        return None
    return [_coerce_image({"url": url, "public_id": public_id})]


def _text_list(value: Any, drop_empty: bool = False) -> List[str]:
    if not isinstance(value, list):
        return []
    items = [_clean(item) for item in value if item is not None]
    if drop_empty:
        items = [item for item in items if item]
    return items


# ==================== PRODUCTOS ====================

def sanitize_product_input(data: Any) -> Dict[str, Any]:
    """Sanitizar el payload de creación de un producto."""
    if not isinstance(data, dict):
        data = {}

    sanitized: Dict[str, Any] = {}

    if data.get("title") is not None:
        sanitized["title"] = _clean(data["title"])

    sanitized["price"] = to_number(data.get("price"))

    description = _optional_text(data.get("description"))
    if description:
        sanitized["description"] = description

    if data.get("images") is not None:
        sanitized["images"] = _coerce_images(data["images"])
    else:
        sanitized["images"] = _legacy_images(data) or []

    if data.get("category"):
        category = _optional_text(data["category"])
        if category:
            sanitized["category"] = category

    sanitized["talles"] = _text_list(data.get("talles"))
    sanitized["colores"] = _text_list(data.get("colores"), drop_empty=True)

    sexo = _optional_text(data.get("sexo"))
    if sexo:
        sanitized["sexo"] = sexo

    return sanitized


def sanitize_product_update(data: Any) -> Dict[str, Any]:
    """
    Sanitizar una actualización parcial.

    Solo aparecen los campos enviados. `category` vacío se traduce a None
    para quitar la referencia.
    """
    if not isinstance(data, dict):
        return {}

    sanitized: Dict[str, Any] = {}

    if data.get("title") is not None:
        sanitized["title"] = _clean(data["title"])

    if data.get("price") is not None:
        sanitized["price"] = to_number(data["price"])

    if data.get("description") is not None:
        sanitized["description"] = _clean(data["description"])

    if data.get("images") is not None:
        sanitized["images"] = _coerce_images(data["images"])
    else:
        legacy = _legacy_images(data)
        if legacy is not None:
            sanitized["images"] = legacy

    if "category" in data:
        sanitized["category"] = _optional_text(data["category"]) if data["category"] else None

    if data.get("talles") is not None:
        sanitized["talles"] = _text_list(data["talles"])

    if data.get("colores") is not None:
        sanitized["colores"] = _text_list(data["colores"], drop_empty=True)

    if data.get("sexo") is not None:
        sanitized["sexo"] = _clean(data["sexo"])

    return sanitized


# ==================== CATEGORÍAS ====================

def sanitize_category_input(data: Any) -> Dict[str, Any]:
    """Sanitizar el payload de creación de una categoría."""
    if not isinstance(data, dict):
        data = {}

    sanitized: Dict[str, Any] = {}
    if data.get("name") is not None:
        sanitized["name"] = _clean(data["name"])

    description = _optional_text(data.get("description"))
    if description:
        sanitized["description"] = description
    return sanitized


def sanitize_category_update(data: Any) -> Dict[str, Any]:
    """Sanitizar una actualización parcial de categoría."""
    if not isinstance(data, dict):
        return {}

    sanitized: Dict[str, Any] = {}
    if data.get("name"):
        sanitized["name"] = _clean(data["name"])

    if "description" in data:
        description = data["description"]
        sanitized["description"] = _clean(description) if description else ""
    return sanitized
