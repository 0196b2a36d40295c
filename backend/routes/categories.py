from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database import get_db
from services.catalog import CatalogStore, DEFAULT_SORT
from schemas.product import CategoryOut, ProductOut

router = APIRouter(prefix="/api/categorias", tags=["Categories"])


@router.get("", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return CatalogStore(db).list_categories()


# Active products belonging to one category
@router.get("/{category_id}/productos", response_model=List[ProductOut])
def list_category_products(
    category_id: int,
    sort: str = Query(DEFAULT_SORT),
    db: Session = Depends(get_db),
):
    return CatalogStore(db).list_category_products(category_id, sort)
