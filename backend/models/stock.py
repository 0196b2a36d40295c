# backend/models/stock.py
import enum
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from database import Base


class MovementType(str, enum.Enum):
    INFLOW = "entrada"
    OUTFLOW = "salida"


# Append-only inventory audit trail; rows are never updated or deleted
class StockMovement(Base):
    __tablename__ = "movimientos_inventario"

    id = Column(Integer, primary_key=True, index=True)
    producto_id = Column(Integer, ForeignKey("productos.id"), nullable=False, index=True)
    variante_id = Column(Integer, ForeignKey("variantes_producto.id"), nullable=True)

    # Movement classification (entrada / salida)
    tipo = Column(String(10), nullable=False)

    # Always positive; the direction is given by `tipo`
    cantidad = Column(Integer, nullable=False)

    motivo = Column(String(255), nullable=True)
    fecha_movimiento = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    product = relationship("Product")
    variant = relationship("ProductVariant")
