import enum
from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, Text, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base


# Order lifecycle: pendiente -> procesando -> enviado -> entregado, or cancelado
class OrderStatus(str, enum.Enum):
    PENDING = "pendiente"
    PROCESSING = "procesando"
    SHIPPED = "enviado"
    DELIVERED = "entregado"
    CANCELLED = "cancelado"


class Order(Base):
    __tablename__ = "pedidos"

    id = Column(Integer, primary_key=True, index=True)
    usuario_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False, index=True)
    numero_pedido = Column(String(40), unique=True, nullable=False, index=True)
    subtotal = Column(Float, nullable=False)
    total = Column(Float, nullable=False)
    direccion_entrega = Column(String(255), nullable=True)
    notas = Column(Text, nullable=True)
    estado = Column(String(20), nullable=False, default=OrderStatus.PENDING.value, index=True)
    fecha_pedido = Column(DateTime(timezone=True), server_default=func.now())

    usuario = relationship("User")
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan", order_by="OrderItem.id")


# Order line; the unit price is the one charged at sale time, never recomputed
class OrderItem(Base):
    __tablename__ = "detalle_pedidos"

    id = Column(Integer, primary_key=True, index=True)
    pedido_id = Column(Integer, ForeignKey("pedidos.id"), nullable=False, index=True)
    producto_id = Column(Integer, ForeignKey("productos.id"), nullable=False)
    variante_id = Column(Integer, ForeignKey("variantes_producto.id"), nullable=True)
    cantidad = Column(Integer, CheckConstraint("cantidad > 0"), nullable=False)
    precio_unitario = Column(Float, nullable=False)
    subtotal = Column(Float, nullable=False)

    order = relationship("Order", back_populates="items")
    product = relationship("Product")
    variant = relationship("ProductVariant")
