from .products import (
    CategoryResponse,
    CategoryRef,
    ProductImage,
    ProductResponse,
    ProductWithCategoryResponse,
    UploadSignatureRequest
)

__all__ = [
    "CategoryResponse",
    "CategoryRef",
    "ProductImage",
    "ProductResponse",
    "ProductWithCategoryResponse",
    "UploadSignatureRequest",
]
