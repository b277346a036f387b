"""
Errores del catálogo.

Cada error conoce su status HTTP y su código; el handler registrado en
main.py los convierte al formato estándar de respuesta:

    {"success": false, "status_code": 400, "message": "...", "error": "CODE"}
"""
from typing import List, Optional


class CatalogError(Exception):
    status_code = 500
    error_code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[List] = None
    ):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        self.details = details

    def to_response(self) -> dict:
        content = {
            "success": False,
            "status_code": self.status_code,
            "message": self.message,
            "error": self.error_code
        }
        if self.details is not None:
            content["details"] = self.details
        return content


class ValidationFailedError(CatalogError):
    """Uno o más invariantes de la entidad no se cumplen."""
    status_code = 400
    error_code = "VALIDATION_ERROR"

    def __init__(self, errors: List[str]):
        super().__init__("Error de validación: " + "; ".join(errors), details=list(errors))
        self.errors = list(errors)


class BadRequestError(CatalogError):
    status_code = 400
    error_code = "BAD_REQUEST"


class NotFoundError(CatalogError):
    status_code = 404
    error_code = "NOT_FOUND"


class ConflictError(CatalogError):
    """Violación de unicidad en la base de datos (nombre o slug duplicado)."""
    status_code = 400
    error_code = "DUPLICATE_CATEGORY"


class CategoryInUseError(CatalogError):
    status_code = 400
    error_code = "CATEGORY_HAS_PRODUCTS"


class ConfigurationError(CatalogError):
    status_code = 500
    error_code = "CONFIGURATION_ERROR"


class MediaHostError(CatalogError):
    """Falla de una llamada a Cloudinary."""
    status_code = 502
    error_code = "MEDIA_HOST_ERROR"
