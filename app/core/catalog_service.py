"""
Persistencia de productos y categorías.

Los servicios reciben datos ya sanitizados, los validan y recién entonces
tocan la base de datos. Los errores se expresan con las excepciones de
core.exceptions, que la API convierte en respuestas JSON.
"""
import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import (
    BadRequestError,
    CategoryInUseError,
    ConflictError,
    NotFoundError,
    ValidationFailedError,
)
from core.storage import CloudinaryStorage
from core.text import slugify
from core.validation import (
    validate_category,
    validate_category_update,
    validate_product,
    validate_product_update,
)
from models.products import Category, Product

logger = logging.getLogger(__name__)


# ==================== CATEGORÍAS ====================

class CategoryService:
    def __init__(self, db: Session):
        self.db = db

    def list(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.name.asc()).all()

    def get(self, category_id: str) -> Category:
        category = self.db.query(Category).filter(Category.id == category_id).first()
        if not category:
            raise NotFoundError("Categoría no encontrada", "CATEGORY_NOT_FOUND")
        return category

    def find_many(self, category_ids: Iterable[str]) -> Dict[str, Category]:
        """Categorías por id, para poblar la referencia de los productos."""
        ids = {category_id for category_id in category_ids if category_id}
        if not ids:
            return {}
        categories = self.db.query(Category).filter(Category.id.in_(ids)).all()
        return {category.id: category for category in categories}

    def create(self, data: Dict) -> Category:
        validation = validate_category(data)
        if not validation.valid:
            raise ValidationFailedError(validation.errors)

        category = Category(
            name=data["name"],
            slug=slugify(data["name"]),
            description=data.get("description")
        )
        self.db.add(category)
        self._commit()
        self.db.refresh(category)

        logger.info(f"Categoría creada: {category.name} ({category.id})")
        return category

    def update(self, category_id: str, data: Dict) -> Category:
        if not data:
            raise BadRequestError("No hay datos para actualizar", "NO_UPDATES")

        validation = validate_category_update(data)
        if not validation.valid:
            raise ValidationFailedError(validation.errors)

        category = self.get(category_id)

        if "name" in data and data["name"] != category.name:
            category.name = data["name"]
            category.slug = slugify(data["name"])
        if not category.slug:
            category.slug = slugify(category.name)

        if "description" in data:
            category.description = data["description"]

        self._commit()
        self.db.refresh(category)
        return category

    def delete(self, category_id: str, force: bool = False) -> Dict:
        """
        Eliminar una categoría.

        Si hay productos que la referencian se rechaza, salvo con force=True:
        en ese caso se les quita la categoría antes de borrarla.
        """
        category = self.get(category_id)

        referencing = self.db.query(Product).filter(Product.category == category_id)
        products_count = referencing.count()

        if products_count > 0 and not force:
            raise CategoryInUseError(
                f"No se puede eliminar la categoría porque tiene {products_count} producto(s) asociado(s)",
                details=[{"products_count": products_count, "suggestion": "Use el parámetro ?force=true para forzar la eliminación"}]
            )

        if products_count > 0:
            referencing.update({Product.category: None}, synchronize_session=False)

        name = category.name
        self.db.delete(category)
        self.db.commit()

        logger.info(f"Categoría eliminada: {name} ({category_id}), productos desvinculados: {products_count}")
        return {"id": category_id, "name": name, "products_count": products_count}

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Categoría duplicada: {str(e.orig)}")
            raise ConflictError("Ya existe una categoría con ese nombre")


# ==================== PRODUCTOS ====================

class ProductService:
    def __init__(self, db: Session, storage: Optional[CloudinaryStorage] = None):
        self.db = db
        self.storage = storage

    def list(
        self,
        category: Optional[str] = None,
        sexo: Optional[str] = None,
        search: Optional[str] = None
    ) -> List[Product]:
        """
        Productos del más nuevo al más viejo.

        - **category**: id de categoría
        - **sexo**: coincidencia exacta ("Todos" no filtra)
        - **search**: texto contenido en el título o en algún color
        """
        query = self.db.query(Product)

        if category:
            query = query.filter(Product.category == category)

        if sexo and sexo != "Todos":
            query = query.filter(Product.sexo == sexo)

        products = query.order_by(Product.created_at.desc()).all()

        # Los colores viven en una columna JSON: se filtra en memoria
        needle = (search or "").strip().lower()
        if needle:
            products = [
                p for p in products
                if needle in p.title.lower()
                or any(needle in color.lower() for color in (p.colores or []))
            ]
        return products

    def get(self, product_id: str) -> Product:
        product = self.db.query(Product).filter(Product.id == product_id).first()
        if not product:
            raise NotFoundError("Producto no encontrado", "PRODUCT_NOT_FOUND")
        return product

    def create(self, data: Dict) -> Product:
        validation = validate_product(data)
        if not validation.valid:
            raise ValidationFailedError(validation.errors)

        product = Product(**data)
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)

        logger.info(f"Producto creado: {product.title} ({product.id})")
        return product

    def update(self, product_id: str, data: Dict) -> Product:
        validation = validate_product_update(data)
        if not validation.valid:
            raise ValidationFailedError(validation.errors)

        product = self.get(product_id)
        for field, value in data.items():
            setattr(product, field, value)

        self.db.commit()
        self.db.refresh(product)
        return product

    async def delete(self, product_id: str) -> Dict:
        """
        Eliminar un producto y, antes, sus imágenes de Cloudinary.

        El borrado de imágenes es best-effort: si alguna falla, el producto
        se elimina igual y la falla queda en el resultado.
        """
        product = self.get(product_id)

        public_ids = [image.get("public_id") for image in (product.images or []) if isinstance(image, dict)]
        images = []
        if self.storage is not None and public_ids:
            images = await self.storage.destroy_many(public_ids)

        self.db.delete(product)
        self.db.commit()

        failed = [image["public_id"] for image in images if not image["deleted"]]
        if failed:
            logger.warning(f"Producto {product_id} eliminado con imágenes sin borrar: {', '.join(failed)}")
        else:
            logger.info(f"Producto eliminado: {product_id}")

        return {"id": product_id, "images": images}
