# backend/services/inventory.py
"""
Inventory ledger.

Every change to ``productos.stock_disponible`` and ``variantes_producto.stock``
goes through :class:`InventoryLedger`, which also appends the matching row to
``movimientos_inventario``. The ledger only flushes: committing or rolling back
belongs to the caller, so an order can debit several products inside a single
transaction.

Debits are conditional single-statement updates
(``UPDATE ... SET stock = stock - :q WHERE id = :id AND stock >= :q``). The
affected-row count tells whether the guard held, so two concurrent sales of the
last unit cannot both succeed. With ``ALLOW_NEGATIVE_STOCK`` the guard is
dropped and stock may go below zero, as the old storefront allowed.
"""
import logging
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from config import settings
from models.product import Product, ProductVariant
from models.stock import StockMovement, MovementType
from utils.errors import InsufficientStock, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 100


def _check_quantity(quantity) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValidationError("La cantidad debe ser un entero mayor que cero")


class InventoryLedger:
    def __init__(self, db: Session, allow_negative: Optional[bool] = None):
        self.db = db
        if allow_negative is None:
            allow_negative = settings.ALLOW_NEGATIVE_STOCK
        self.allow_negative = allow_negative

    # ---- mutations ----

    def debit(self, product_id: int, variant_id: Optional[int], quantity: int, reason: Optional[str] = None) -> StockMovement:
        """Take ``quantity`` units out of a product (and its variant, if given)."""
        _check_quantity(quantity)

        stmt = update(Product).where(Product.id == product_id)
        if not self.allow_negative:
            stmt = stmt.where(Product.stock_disponible >= quantity)
        stmt = stmt.values(stock_disponible=Product.stock_disponible - quantity)
        if self._execute(stmt) == 0:
            self._raise_debit_failure(Product, product_id)

        if variant_id is not None:
            stmt = update(ProductVariant).where(
                ProductVariant.id == variant_id,
                ProductVariant.producto_id == product_id,
            )
            if not self.allow_negative:
                stmt = stmt.where(ProductVariant.stock >= quantity)
            stmt = stmt.values(stock=ProductVariant.stock - quantity)
            if self._execute(stmt) == 0:
                self._raise_debit_failure(ProductVariant, variant_id, product_id)

        return self._append(product_id, variant_id, MovementType.OUTFLOW, quantity, reason)

    def credit(self, product_id: int, variant_id: Optional[int], quantity: int, reason: Optional[str] = None) -> StockMovement:
        """Put ``quantity`` units back on the shelf. There is no upper bound."""
        _check_quantity(quantity)

        stmt = (
            update(Product)
            .where(Product.id == product_id)
            .values(stock_disponible=Product.stock_disponible + quantity)
        )
        if self._execute(stmt) == 0:
            raise NotFoundError("Producto no encontrado")

        if variant_id is not None:
            stmt = (
                update(ProductVariant)
                .where(ProductVariant.id == variant_id, ProductVariant.producto_id == product_id)
                .values(stock=ProductVariant.stock + quantity)
            )
            if self._execute(stmt) == 0:
                raise NotFoundError("Variante no encontrada")

        return self._append(product_id, variant_id, MovementType.INFLOW, quantity, reason)

    # ---- queries ----

    def history(self, limit: int = DEFAULT_HISTORY_LIMIT) -> List[StockMovement]:
        """Most recent movements first."""
        if limit <= 0:
            raise ValidationError("El límite debe ser mayor que cero")
        return (
            self.db.query(StockMovement)
            .order_by(StockMovement.fecha_movimiento.desc(), StockMovement.id.desc())
            .limit(limit)
            .all()
        )

    def low_stock(self) -> List[Product]:
        """Active products at or below their minimum stock, emptiest first."""
        return (
            self.db.query(Product)
            .filter(
                Product.activo.is_(True),
                Product.stock_disponible <= Product.stock_minimo,
            )
            .order_by(Product.stock_disponible.asc(), Product.id.asc())
            .all()
        )

    # ---- helpers ----

    def _execute(self, stmt) -> int:
        # ORM objects already in the session are not synchronised; callers
        # read fresh values after commit/rollback expires them.
        result = self.db.execute(stmt.execution_options(synchronize_session=False))
        return result.rowcount

    def _raise_debit_failure(self, model, row_id: int, product_id: Optional[int] = None):
        query = self.db.query(model.id).filter(model.id == row_id)
        if product_id is not None:
            query = query.filter(model.producto_id == product_id)
        if query.first() is None:
            if model is Product:
                raise NotFoundError("Producto no encontrado")
            raise NotFoundError("Variante no encontrada")
        logger.info("Stock guard rejected debit on %s id=%s", model.__tablename__, row_id)
        if model is Product:
            raise InsufficientStock(f"Stock insuficiente para el producto {row_id}")
        raise InsufficientStock(f"Stock insuficiente para la variante {row_id}")

    def _append(self, product_id, variant_id, kind: MovementType, quantity: int, reason) -> StockMovement:
        movement = StockMovement(
            producto_id=product_id,
            variante_id=variant_id,
            tipo=kind.value,
            cantidad=quantity,
            motivo=reason,
        )
        self.db.add(movement)
        self.db.flush()
        return movement
