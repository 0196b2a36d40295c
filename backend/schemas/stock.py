# backend/schemas/stock.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, Literal

MovementTypeValue = Literal["entrada", "salida"]


# Manual stock inflow (supplier delivery, return to shelf, ...)
class StockAdd(BaseModel):
    producto_id: int
    variante_id: Optional[int] = None
    cantidad: int = Field(gt=0)
    motivo: Optional[str] = "Reposición de inventario"


class StockAddResponse(BaseModel):
    success: bool = True
    movimiento_id: int
    message: str


# Schema for returning stock movement details
class StockMovementResponse(BaseModel):
    id: int
    producto_id: int
    producto_nombre: Optional[str] = None
    variante_id: Optional[int] = None
    nombre_variante: Optional[str] = None
    tipo: MovementTypeValue
    cantidad: int
    motivo: Optional[str] = None
    fecha_movimiento: Optional[datetime] = None
