# backend/models/log.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, func
from database import Base


# Audit trail of storefront events: registrations, logins, orders, stock inflows
class Log(Base):
    __tablename__ = "logs"

    id = Column(Integer, primary_key=True, index=True)
    ts = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    # Null for anonymous events (e.g. a login with an unknown email)
    usuario_id = Column(Integer, ForeignKey("usuarios.id"), nullable=True)

    action = Column(String(50), index=True)    # REGISTER, LOGIN, ORDER_CREATE, ...
    resource = Column(String(50), index=True)  # usuarios, pedidos, inventario
    status = Column(String(20), index=True)    # SUCCESS / FAIL
    ip = Column(String(64), nullable=True)

    meta = Column(JSON, nullable=True)
