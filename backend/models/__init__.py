# Import every model so Base.metadata knows all tables (create_all / Alembic)
from models.users import User, CustomerType  # noqa: F401
from models.product import Category, Product, ProductVariant, ProductImage  # noqa: F401
from models.order import Order, OrderItem, OrderStatus  # noqa: F401
from models.stock import StockMovement, MovementType  # noqa: F401
from models.log import Log  # noqa: F401
