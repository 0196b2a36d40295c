from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


# Cart line as sent by the client. Only JSON types are checked here;
# semantic checks (positive quantity, price present) belong to the order engine.
class OrderItemIn(BaseModel):
    producto_id: Optional[int] = None
    variante_id: Optional[int] = None
    cantidad: Optional[int] = None
    precio_unitario: Optional[float] = Field(default=None, allow_inf_nan=False)


# Input schema for checkout
class OrderCreate(BaseModel):
    usuario_id: int
    items: List[OrderItemIn]
    direccion_entrega: Optional[str] = None
    notas: Optional[str] = None


class OrderCreated(BaseModel):
    success: bool = True
    pedido_id: int
    numero_pedido: str
    message: str


# Output schema for an individual order line item
class OrderItemOut(BaseModel):
    id: int
    producto_id: int
    producto_nombre: str
    variante_id: Optional[int] = None
    nombre_variante: Optional[str] = None
    cantidad: int
    precio_unitario: float
    subtotal: float


# Output schema representing the full order details
class OrderResponse(BaseModel):
    id: int
    usuario_id: int
    numero_pedido: str
    subtotal: float
    total: float
    direccion_entrega: Optional[str] = None
    notas: Optional[str] = None
    estado: str
    fecha_pedido: Optional[datetime] = None
    items: List[OrderItemOut]


# Row of a customer's order history
class OrderSummary(BaseModel):
    id: int
    numero_pedido: str
    total: float
    estado: str
    fecha_pedido: Optional[datetime] = None
    cantidad_items: int


# Schema for updating order status
class OrderStatusUpdate(BaseModel):
    estado: str


class ActionResult(BaseModel):
    success: bool = True
    message: str
