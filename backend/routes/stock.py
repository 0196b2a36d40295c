# backend/routes/stock.py
from typing import List
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from database import get_db
from models.stock import StockMovement
from services.inventory import InventoryLedger, DEFAULT_HISTORY_LIMIT
from utils.audit import write_log, client_ip
import schemas.stock as stock_schemas
from schemas.product import ProductOut

router = APIRouter(prefix="/api/inventario", tags=["Stock"])


def _movement_to_out(m: StockMovement) -> stock_schemas.StockMovementResponse:
    return stock_schemas.StockMovementResponse(
        id=m.id,
        producto_id=m.producto_id,
        producto_nombre=m.product.nombre if m.product else None,
        variante_id=m.variante_id,
        nombre_variante=m.variant.nombre_variante if m.variant else None,
        tipo=m.tipo,
        cantidad=m.cantidad,
        motivo=m.motivo,
        fecha_movimiento=m.fecha_movimiento,
    )


# Register a stock inflow (delivery, restock)
@router.post("/agregar", response_model=stock_schemas.StockAddResponse, status_code=status.HTTP_201_CREATED)
def add_stock(payload: stock_schemas.StockAdd, request: Request, db: Session = Depends(get_db)):
    try:
        movement = InventoryLedger(db).credit(
            payload.producto_id, payload.variante_id, payload.cantidad, payload.motivo
        )
        movement_id = movement.id
        db.commit()
    except Exception:
        db.rollback()
        raise

    write_log(db, user_id=None, action="STOCK_IN", resource="inventario", status="SUCCESS",
              ip=client_ip(request),
              meta={"movimiento_id": movement_id, "producto_id": payload.producto_id, "cantidad": payload.cantidad})
    return {"success": True, "movimiento_id": movement_id, "message": "Stock agregado correctamente"}


# Movement history, newest first
@router.get("/movimientos", response_model=List[stock_schemas.StockMovementResponse])
def list_movements(
    limit: int = Query(DEFAULT_HISTORY_LIMIT, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    movements = InventoryLedger(db).history(limit)
    return [_movement_to_out(m) for m in movements]


# Active products at or below their minimum stock
@router.get("/stock-bajo", response_model=List[ProductOut])
def list_low_stock(db: Session = Depends(get_db)):
    return InventoryLedger(db).low_stock()
