# backend/models/product.py
from sqlalchemy import Column, Integer, String, Float, Boolean, ForeignKey, DateTime, Text, func
from sqlalchemy.orm import relationship
from database import Base


# Product category shown in the storefront navigation
class Category(Base):
    __tablename__ = "categorias"

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(100), nullable=False)
    descripcion = Column(Text, nullable=True)
    orden = Column(Integer, nullable=False, default=0)  # Display order
    activo = Column(Boolean, nullable=False, default=True, index=True)

    productos = relationship("Product", back_populates="categoria")


# Model Product
# Catalog entry with retail and wholesale prices. Stock counters are only
# changed through the inventory ledger; products are never hard-deleted,
# they are hidden by clearing `activo`.
class Product(Base):
    __tablename__ = "productos"

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(150), nullable=False, index=True)
    descripcion = Column(Text, nullable=True)

    precio_base = Column(Float, nullable=False, default=0)
    precio_mayorista = Column(Float, nullable=True)

    imagen_principal = Column(String(255), nullable=True)
    categoria_id = Column(Integer, ForeignKey("categorias.id"), nullable=True, index=True)

    # Inventory counters
    stock_disponible = Column(Integer, nullable=False, default=0)
    stock_minimo = Column(Integer, nullable=False, default=5)

    activo = Column(Boolean, nullable=False, default=True, index=True)
    destacado = Column(Boolean, nullable=False, default=False)
    fecha_creacion = Column(DateTime(timezone=True), server_default=func.now())

    categoria = relationship("Category", back_populates="productos")
    variantes = relationship("ProductVariant", back_populates="producto", order_by="ProductVariant.id")
    imagenes = relationship("ProductImage", back_populates="producto", order_by="ProductImage.orden")


# Size / presentation of a product. Its stock is a separate counter that is
# decremented together with the parent product's stock on every sale.
class ProductVariant(Base):
    __tablename__ = "variantes_producto"

    id = Column(Integer, primary_key=True, index=True)
    producto_id = Column(Integer, ForeignKey("productos.id"), nullable=False, index=True)
    nombre_variante = Column(String(100), nullable=False)
    precio_adicional = Column(Float, nullable=False, default=0)
    stock = Column(Integer, nullable=False, default=0)
    activo = Column(Boolean, nullable=False, default=True)

    producto = relationship("Product", back_populates="variantes")


class ProductImage(Base):
    __tablename__ = "imagenes_producto"

    id = Column(Integer, primary_key=True, index=True)
    producto_id = Column(Integer, ForeignKey("productos.id"), nullable=False, index=True)
    url_imagen = Column(String(255), nullable=False)
    orden = Column(Integer, nullable=False, default=0)

    producto = relationship("Product", back_populates="imagenes")
