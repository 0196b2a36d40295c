# backend/schemas/product.py
from pydantic import BaseModel, ConfigDict
from typing import Optional, List
from datetime import datetime


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class CategoryOut(ORMBase):
    id: int
    nombre: str
    descripcion: Optional[str] = None
    orden: int = 0


class VariantOut(ORMBase):
    id: int
    producto_id: int
    nombre_variante: str
    precio_adicional: float
    stock: int
    activo: bool


class ProductImageOut(ORMBase):
    id: int
    url_imagen: str
    orden: int


# Product card as listed in the storefront
class ProductOut(ORMBase):
    id: int
    nombre: str
    descripcion: Optional[str] = None
    imagen_principal: Optional[str] = None
    precio_base: float
    precio_mayorista: Optional[float] = None
    categoria_id: Optional[int] = None
    stock_disponible: int
    stock_minimo: int
    destacado: bool
    activo: bool


# Product page: card data plus category name, variants and gallery
class ProductDetail(ProductOut):
    categoria_nombre: Optional[str] = None
    fecha_creacion: Optional[datetime] = None
    variantes: List[VariantOut] = []
    imagenes: List[ProductImageOut] = []
