# backend/services/orders.py
import logging
import math
import random
import time
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from models.order import Order, OrderItem, OrderStatus
from models.users import User
from services.inventory import InventoryLedger
from utils.errors import (
    AppError, InsufficientStock, InvalidOrderInput, NotFoundError, OrderCreationFailed, ValidationError,
)

logger = logging.getLogger(__name__)

ORDER_NUMBER_ATTEMPTS = 5


@dataclass
class PlacedOrder:
    pedido_id: int
    numero_pedido: str
    total: float


class _Line(NamedTuple):
    producto_id: int
    variante_id: Optional[int]
    cantidad: int
    precio_unitario: float

    @property
    def subtotal(self) -> float:
        return round(self.precio_unitario * self.cantidad, 2)


# Timestamp + small random suffix, e.g. PED-1718042400123-457
def generate_order_number() -> str:
    return f"PED-{int(time.time() * 1000)}-{random.randint(100, 999)}"


def _field(item, name):
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


class OrderEngine:
    """Turns a checkout request into a persisted order.

    The order header, its lines and the stock debits for every line are
    written on one session and committed once; any failure rolls all of it
    back. Past validation the caller only ever sees ``InsufficientStock`` or
    ``OrderCreationFailed``. Prices come from the client cart and are stored
    as sent.
    """

    def __init__(self, db: Session, ledger: Optional[InventoryLedger] = None):
        self.db = db
        self.ledger = ledger or InventoryLedger(db)

    def place_order(self, user_id: int, items: Sequence, delivery_address: Optional[str] = None,
                    notes: Optional[str] = None) -> PlacedOrder:
        lines = self._validate(user_id, items)
        total = round(sum(line.subtotal for line in lines), 2)

        try:
            order = self._insert_header(user_id, total, delivery_address, notes)
            numero = order.numero_pedido
            order_id = order.id

            for line in lines:
                self.db.add(OrderItem(
                    pedido_id=order_id,
                    producto_id=line.producto_id,
                    variante_id=line.variante_id,
                    cantidad=line.cantidad,
                    precio_unitario=line.precio_unitario,
                    subtotal=line.subtotal,
                ))
                self.ledger.debit(line.producto_id, line.variante_id, line.cantidad, f"Venta - pedido {numero}")

            self.db.commit()
        except (InsufficientStock, OrderCreationFailed) as e:
            self.db.rollback()
            logger.warning("Order for user %s rejected: %s", user_id, e.message)
            raise
        except AppError as e:
            # e.g. a product or variant that vanished between cart and checkout
            self.db.rollback()
            logger.warning("Order for user %s failed: %s", user_id, e.message)
            raise OrderCreationFailed() from e
        except Exception as e:
            self.db.rollback()
            logger.exception("Order creation failed for user %s", user_id)
            raise OrderCreationFailed() from e

        logger.info("Order %s created (id=%s, user=%s, total=%.2f)", numero, order_id, user_id, total)
        return PlacedOrder(pedido_id=order_id, numero_pedido=numero, total=total)

    def get_order(self, order_id: int) -> Order:
        order = (
            self.db.query(Order)
            .options(
                joinedload(Order.items).joinedload(OrderItem.product),
                joinedload(Order.items).joinedload(OrderItem.variant),
            )
            .filter(Order.id == order_id)
            .first()
        )
        if not order:
            raise NotFoundError("Pedido no encontrado")
        return order

    def list_user_orders(self, user_id: int) -> List[Order]:
        if self.db.get(User, user_id) is None:
            raise NotFoundError("Usuario no encontrado")
        return (
            self.db.query(Order)
            .options(selectinload(Order.items))
            .filter(Order.usuario_id == user_id)
            .order_by(Order.fecha_pedido.desc(), Order.id.desc())
            .all()
        )

    def update_status(self, order_id: int, estado: str) -> str:
        """Set a new status and return the previous one."""
        allowed = {s.value for s in OrderStatus}
        if estado not in allowed:
            raise ValidationError(f"Estado inválido. Valores permitidos: {', '.join(sorted(allowed))}")

        order = self.db.get(Order, order_id)
        if not order:
            raise NotFoundError("Pedido no encontrado")

        old_status = order.estado
        order.estado = estado
        self.db.commit()
        logger.info("Order %s status %s -> %s", order_id, old_status, estado)
        return old_status

    # ---- helpers ----

    def _validate(self, user_id, items) -> List[_Line]:
        if not items:
            raise InvalidOrderInput("El pedido no contiene productos")

        lines = []
        for position, item in enumerate(items, start=1):
            producto_id = _field(item, "producto_id")
            variante_id = _field(item, "variante_id")
            cantidad = _field(item, "cantidad")
            precio = _field(item, "precio_unitario")

            if not _is_int(producto_id):
                raise InvalidOrderInput(f"Producto faltante en la línea {position}")
            if variante_id is not None and not _is_int(variante_id):
                raise InvalidOrderInput(f"Variante inválida en la línea {position}")
            if not _is_int(cantidad) or cantidad <= 0:
                raise InvalidOrderInput(f"Cantidad inválida en la línea {position}")
            if not _is_number(precio) or precio < 0:
                raise InvalidOrderInput(f"Precio inválido en la línea {position}")

            lines.append(_Line(producto_id, variante_id, cantidad, float(precio)))

        user = self.db.get(User, user_id)
        if user is None or not user.activo:
            raise InvalidOrderInput("Usuario no encontrado o inactivo")
        return lines

    def _number_in_use(self, numero: str) -> bool:
        return self.db.query(Order.id).filter(Order.numero_pedido == numero).first() is not None

    def _insert_header(self, user_id: int, total: float, delivery_address: Optional[str],
                       notes: Optional[str]) -> Order:
        """Flush a new order header under a fresh number, retrying on collisions."""
        for _ in range(ORDER_NUMBER_ATTEMPTS):
            numero = generate_order_number()
            if self._number_in_use(numero):
                logger.warning("Order number %s already used, regenerating", numero)
                continue

            order = Order(
                usuario_id=user_id,
                numero_pedido=numero,
                subtotal=total,
                total=total,
                direccion_entrega=delivery_address,
                notas=notes,
                estado=OrderStatus.PENDING.value,
            )
            self.db.add(order)
            try:
                self.db.flush()
            except IntegrityError:
                # The header is the first write of the transaction, nothing else is lost
                self.db.rollback()
                logger.warning("Order number %s taken concurrently, regenerating", numero)
                continue
            return order
        raise OrderCreationFailed("No se pudo generar un número de pedido único")
