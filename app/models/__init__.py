from .products import Product, Category

__all__ = [
    "Product",
    "Category",
]
