"""
Schemas de respuesta para productos y categorías, y request de firmas.

Los payloads de creación/edición de productos y categorías no pasan por
Pydantic: se reciben como dict y se normalizan en core.sanitize.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, validator


# ==================== CATEGORY SCHEMAS ====================

class CategoryResponse(BaseModel):
    """Schema de respuesta para categoría"""
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CategoryRef(BaseModel):
    """Categoría resumida dentro de un producto"""
    id: str
    name: str
    slug: str

    class Config:
        from_attributes = True


# ==================== PRODUCT SCHEMAS ====================

class ProductImage(BaseModel):
    url: str
    public_id: str


class ProductResponse(BaseModel):
    """Schema de respuesta para producto"""
    id: str
    title: str
    price: float
    description: Optional[str] = None
    images: List[ProductImage] = []
    category: Optional[str] = Field(None, description="ID de la categoría")
    talles: List[str] = []
    colores: List[str] = []
    sexo: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProductWithCategoryResponse(ProductResponse):
    """Producto con la categoría referenciada (None si no existe)"""
    category_info: Optional[CategoryRef] = None


# ==================== UPLOAD SCHEMAS ====================

class UploadSignatureRequest(BaseModel):
    folder: Optional[str] = Field(None, description="Carpeta destino en Cloudinary")
    use_preset: bool = Field(False, description="Firmar también el upload preset configurado")

    @validator("folder", pre=True)
    def convert_folder_to_str(cls, v):
        """Aceptar carpetas no string (por ejemplo números)"""
        if v is not None and not isinstance(v, str):
            return str(v)
        return v

    @validator("use_preset", pre=True)
    def only_literal_true(cls, v):
        """Solo `true` activa el preset; "true", 1, "yes", etc. cuentan como False"""
        return v is True
