from sqlalchemy import func
from sqlalchemy.orm import Session

from models.order import Order, OrderItem, OrderStatus
from models.product import Product
from models.users import User

TOP_PRODUCTS_LIMIT = 5


class ReportingView:
    """Admin dashboard figures, recomputed on every call."""

    def __init__(self, db: Session):
        self.db = db

    def dashboard(self) -> dict:
        not_cancelled = Order.estado != OrderStatus.CANCELLED.value

        total_orders = self.db.query(func.count(Order.id)).filter(not_cancelled).scalar() or 0
        revenue = self.db.query(func.sum(Order.total)).filter(not_cancelled).scalar() or 0.0

        # Best sellers by units, ignoring cancelled orders
        sold = func.sum(OrderItem.cantidad)
        top_rows = (
            self.db.query(
                Product.id.label("id"),
                Product.nombre.label("nombre"),
                sold.label("total_vendido"),
            )
            .join(OrderItem, OrderItem.producto_id == Product.id)
            .join(Order, Order.id == OrderItem.pedido_id)
            .filter(not_cancelled)
            .group_by(Product.id, Product.nombre)
            .order_by(sold.desc(), Product.id.asc())
            .limit(TOP_PRODUCTS_LIMIT)
            .all()
        )

        customers = self.db.query(func.count(User.id)).filter(User.activo.is_(True)).scalar() or 0
        stock = (
            self.db.query(func.sum(Product.stock_disponible))
            .filter(Product.activo.is_(True))
            .scalar()
        ) or 0

        return {
            "total_pedidos": int(total_orders),
            "ventas_totales": round(float(revenue), 2),
            "productos_mas_vendidos": [
                {"id": r.id, "nombre": r.nombre, "total_vendido": int(r.total_vendido)}
                for r in top_rows
            ],
            "total_clientes": int(customers),
            "stock_total": int(stock),
        }
