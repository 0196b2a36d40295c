# backend/routes/orders.py
import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_db
from models.order import Order
from services.orders import OrderEngine
from utils.audit import write_log, client_ip
from utils.errors import AppError
from schemas.order import (
    OrderCreate, OrderCreated, OrderResponse, OrderItemOut,
    OrderStatusUpdate, ActionResult,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pedidos", tags=["Orders"])


# Map Order model to OrderResponse schema
def _order_to_out(order: Order) -> OrderResponse:
    items = []
    for it in order.items:
        items.append(OrderItemOut(
            id=it.id,
            producto_id=it.producto_id,
            producto_nombre=it.product.nombre if it.product else "Producto eliminado",
            variante_id=it.variante_id,
            nombre_variante=it.variant.nombre_variante if it.variant else None,
            cantidad=it.cantidad,
            precio_unitario=it.precio_unitario,
            subtotal=round(it.subtotal, 2),
        ))
    return OrderResponse(
        id=order.id,
        usuario_id=order.usuario_id,
        numero_pedido=order.numero_pedido,
        subtotal=round(order.subtotal, 2),
        total=round(order.total, 2),
        direccion_entrega=order.direccion_entrega,
        notas=order.notas,
        estado=order.estado,
        fecha_pedido=order.fecha_pedido,
        items=items,
    )


# Checkout: persist the order and debit stock in one transaction
@router.post("", response_model=OrderCreated, status_code=status.HTTP_201_CREATED)
def create_order(payload: OrderCreate, request: Request, db: Session = Depends(get_db)):
    try:
        placed = OrderEngine(db).place_order(
            payload.usuario_id,
            payload.items,
            delivery_address=payload.direccion_entrega,
            notes=payload.notas,
        )
    except AppError as e:
        write_log(db, user_id=None, action="ORDER_CREATE", resource="pedidos", status="FAIL",
                  ip=client_ip(request), meta={"usuario_id": payload.usuario_id, "reason": e.message})
        raise

    # The order is already committed; a failed audit insert must not turn it into an error
    try:
        write_log(db, user_id=payload.usuario_id, action="ORDER_CREATE", resource="pedidos", status="SUCCESS",
                  ip=client_ip(request),
                  meta={"pedido_id": placed.pedido_id, "numero_pedido": placed.numero_pedido, "total": placed.total})
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Audit entry for order %s was not written", placed.numero_pedido)
    return {
        "success": True,
        "pedido_id": placed.pedido_id,
        "numero_pedido": placed.numero_pedido,
        "message": "Pedido creado exitosamente",
    }


# Get details of a specific order
@router.get("/{order_id}", response_model=OrderResponse)
def get_order_detail(order_id: int, db: Session = Depends(get_db)):
    return _order_to_out(OrderEngine(db).get_order(order_id))


@router.put("/{order_id}/estado", response_model=ActionResult)
def update_order_status(order_id: int, payload: OrderStatusUpdate, request: Request, db: Session = Depends(get_db)):
    old_status = OrderEngine(db).update_status(order_id, payload.estado)
    write_log(db, user_id=None, action="ORDER_STATUS_CHANGE", resource="pedidos", status="SUCCESS",
              ip=client_ip(request), meta={"pedido_id": order_id, "old": old_status, "new": payload.estado})
    return {"success": True, "message": f"Estado actualizado a {payload.estado}"}
