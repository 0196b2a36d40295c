from typing import List

from sqlalchemy.orm import Session, joinedload

from models.product import Category, Product, ProductImage, ProductVariant
from utils.errors import NotFoundError

DEFAULT_SORT = "destacados"

# Allowed storefront orderings; unknown keys fall back to the default
PRODUCT_SORTS = {
    "destacados": (Product.destacado.desc(), Product.nombre.asc()),
    "nombre": (Product.nombre.asc(),),
    "precio_asc": (Product.precio_base.asc(), Product.nombre.asc()),
    "precio_desc": (Product.precio_base.desc(), Product.nombre.asc()),
}


# Read-only access to the catalog; inactive rows are never returned
class CatalogStore:
    def __init__(self, db: Session):
        self.db = db

    def list_active_products(self, sort: str = DEFAULT_SORT) -> List[Product]:
        order = PRODUCT_SORTS.get((sort or DEFAULT_SORT).lower(), PRODUCT_SORTS[DEFAULT_SORT])
        return (
            self.db.query(Product)
            .filter(Product.activo.is_(True))
            .order_by(*order, Product.id.asc())
            .all()
        )

    def get_product(self, product_id: int) -> Product:
        product = (
            self.db.query(Product)
            .options(joinedload(Product.categoria))
            .filter(Product.id == product_id, Product.activo.is_(True))
            .first()
        )
        if not product:
            raise NotFoundError("Producto no encontrado")
        return product

    def list_variants(self, product_id: int) -> List[ProductVariant]:
        return (
            self.db.query(ProductVariant)
            .filter(ProductVariant.producto_id == product_id, ProductVariant.activo.is_(True))
            .order_by(ProductVariant.id.asc())
            .all()
        )

    def list_images(self, product_id: int) -> List[ProductImage]:
        return (
            self.db.query(ProductImage)
            .filter(ProductImage.producto_id == product_id)
            .order_by(ProductImage.orden.asc(), ProductImage.id.asc())
            .all()
        )

    def list_categories(self) -> List[Category]:
        return (
            self.db.query(Category)
            .filter(Category.activo.is_(True))
            .order_by(Category.orden.asc(), Category.nombre.asc())
            .all()
        )

    def list_category_products(self, category_id: int, sort: str = DEFAULT_SORT) -> List[Product]:
        category = self.db.get(Category, category_id)
        if not category or not category.activo:
            raise NotFoundError("Categoría no encontrada")
        order = PRODUCT_SORTS.get((sort or DEFAULT_SORT).lower(), PRODUCT_SORTS[DEFAULT_SORT])
        return (
            self.db.query(Product)
            .filter(Product.categoria_id == category_id, Product.activo.is_(True))
            .order_by(*order, Product.id.asc())
            .all()
        )
