# backend/routes/products.py
from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database import get_db
from models.product import Product
from services.catalog import CatalogStore, DEFAULT_SORT
import schemas.product as product_schemas

router = APIRouter(prefix="/api/productos", tags=["Products"])


def _product_detail(catalog: CatalogStore, product: Product) -> product_schemas.ProductDetail:
    base = product_schemas.ProductOut.model_validate(product).model_dump()
    return product_schemas.ProductDetail(
        **base,
        categoria_nombre=product.categoria.nombre if product.categoria else None,
        fecha_creacion=product.fecha_creacion,
        variantes=[product_schemas.VariantOut.model_validate(v) for v in catalog.list_variants(product.id)],
        imagenes=[product_schemas.ProductImageOut.model_validate(i) for i in catalog.list_images(product.id)],
    )


# Active products; featured first unless another ordering is requested
@router.get("", response_model=List[product_schemas.ProductOut])
def list_products(
    sort: str = Query(DEFAULT_SORT, description="destacados | nombre | precio_asc | precio_desc"),
    db: Session = Depends(get_db),
):
    return CatalogStore(db).list_active_products(sort)


# Single product with category name, variants and gallery
@router.get("/{product_id}", response_model=product_schemas.ProductDetail)
def get_product(product_id: int, db: Session = Depends(get_db)):
    catalog = CatalogStore(db)
    return _product_detail(catalog, catalog.get_product(product_id))


@router.get("/{product_id}/variantes", response_model=List[product_schemas.VariantOut])
def list_product_variants(product_id: int, db: Session = Depends(get_db)):
    return CatalogStore(db).list_variants(product_id)
