# Inventory ledger tests: debit/credit counters, movement trail, low-stock query

import pytest

from models.product import Product, ProductVariant
from models.stock import StockMovement
from services.inventory import InventoryLedger
from utils.errors import InsufficientStock, NotFoundError, ValidationError


class TestDebit:

    def test_debit_decrements_product_and_variant(self, db, make_product, make_variant):
        product = make_product(stock=10)
        variant = make_variant(product, stock=4)

        movement = InventoryLedger(db).debit(product.id, variant.id, 3, "Venta mostrador")
        db.commit()

        assert db.get(Product, product.id).stock_disponible == 7
        assert db.get(ProductVariant, variant.id).stock == 1
        assert movement.tipo == "salida"
        assert movement.cantidad == 3
        assert movement.variante_id == variant.id
        assert movement.motivo == "Venta mostrador"

    def test_debit_without_variant_leaves_variants_alone(self, db, make_product, make_variant):
        product = make_product(stock=10)
        variant = make_variant(product, stock=4)

        InventoryLedger(db).debit(product.id, None, 2, "Venta")
        db.commit()

        assert db.get(Product, product.id).stock_disponible == 8
        assert db.get(ProductVariant, variant.id).stock == 4

    def test_debit_can_empty_the_shelf(self, db, make_product):
        product = make_product(stock=2)

        InventoryLedger(db).debit(product.id, None, 2, "Venta")
        db.commit()

        assert db.get(Product, product.id).stock_disponible == 0

    def test_debit_beyond_product_stock_is_rejected(self, db, make_product):
        product = make_product(stock=1)

        with pytest.raises(InsufficientStock):
            InventoryLedger(db).debit(product.id, None, 2, "Venta")
        db.rollback()

        assert db.get(Product, product.id).stock_disponible == 1
        assert db.query(StockMovement).count() == 0

    def test_debit_beyond_variant_stock_is_rejected(self, db, make_product, make_variant):
        product = make_product(stock=10)
        variant = make_variant(product, stock=1)

        with pytest.raises(InsufficientStock):
            InventoryLedger(db).debit(product.id, variant.id, 2, "Venta")
        db.rollback()

        # The product decrement issued before the variant check is undone too
        assert db.get(Product, product.id).stock_disponible == 10
        assert db.get(ProductVariant, variant.id).stock == 1

    def test_negative_stock_allowed_when_enabled(self, db, make_product):
        product = make_product(stock=1)

        InventoryLedger(db, allow_negative=True).debit(product.id, None, 3, "Venta")
        db.commit()

        assert db.get(Product, product.id).stock_disponible == -2

    def test_debit_unknown_product(self, db):
        with pytest.raises(NotFoundError):
            InventoryLedger(db).debit(999, None, 1, "Venta")

    def test_debit_variant_of_another_product(self, db, make_product, make_variant):
        product = make_product(nombre="A")
        other = make_product(nombre="B")
        variant = make_variant(other)

        with pytest.raises(NotFoundError):
            InventoryLedger(db).debit(product.id, variant.id, 1, "Venta")

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, True])
    def test_debit_rejects_invalid_quantity(self, db, make_product, quantity):
        product = make_product()

        with pytest.raises(ValidationError):
            InventoryLedger(db).debit(product.id, None, quantity, "Venta")


class TestCredit:

    def test_credit_increments_and_records_inflow(self, db, make_product, make_variant):
        product = make_product(stock=0)
        variant = make_variant(product, stock=0)

        movement = InventoryLedger(db).credit(product.id, variant.id, 25, "Entrega proveedor")
        db.commit()

        assert db.get(Product, product.id).stock_disponible == 25
        assert db.get(ProductVariant, variant.id).stock == 25
        assert movement.tipo == "entrada"
        assert movement.cantidad == 25

    def test_credit_unknown_product(self, db):
        with pytest.raises(NotFoundError):
            InventoryLedger(db).credit(42, None, 5, "Reposición")

    def test_credit_unknown_variant(self, db, make_product):
        product = make_product()

        with pytest.raises(NotFoundError):
            InventoryLedger(db).credit(product.id, 77, 5, "Reposición")

    def test_credit_rejects_zero(self, db, make_product):
        product = make_product()

        with pytest.raises(ValidationError):
            InventoryLedger(db).credit(product.id, None, 0, "Reposición")


class TestQueries:

    def test_history_is_newest_first_and_bounded(self, db, make_product):
        product = make_product(stock=50)
        ledger = InventoryLedger(db)
        first = ledger.credit(product.id, None, 5, "uno")
        second = ledger.debit(product.id, None, 2, "dos")
        third = ledger.credit(product.id, None, 1, "tres")
        db.commit()

        history = ledger.history()
        assert [m.id for m in history] == [third.id, second.id, first.id]

        assert [m.id for m in ledger.history(limit=2)] == [third.id, second.id]

    def test_history_rejects_non_positive_limit(self, db):
        with pytest.raises(ValidationError):
            InventoryLedger(db).history(limit=0)

    def test_low_stock_returns_products_at_or_below_minimum(self, db, make_product):
        empty = make_product(nombre="Vacío", stock=0, stock_minimo=5)
        at_limit = make_product(nombre="Justo", stock=5, stock_minimo=5)
        make_product(nombre="Holgado", stock=10, stock_minimo=5)

        low = InventoryLedger(db).low_stock()

        assert [p.id for p in low] == [empty.id, at_limit.id]

    def test_low_stock_ignores_inactive_products(self, db, make_product):
        make_product(nombre="Oculto", stock=0, stock_minimo=5, activo=False)
        visible = make_product(nombre="Visible", stock=3, stock_minimo=5)

        assert [p.id for p in InventoryLedger(db).low_stock()] == [visible.id]
