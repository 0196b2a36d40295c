# backend/models/users.py
import enum
from sqlalchemy import Column, Integer, String, Boolean, DateTime, func
from database import Base


class CustomerType(str, enum.Enum):
    RETAIL = "minorista"
    WHOLESALE = "mayorista"


# Storefront customer account; the password is stored only as a salted hash
class User(Base):
    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String(150), nullable=False)
    email = Column(String(150), unique=True, nullable=False, index=True)
    telefono = Column(String(30), nullable=True)
    password_hash = Column(String(255), nullable=False)
    direccion = Column(String(255), nullable=True)
    ciudad = Column(String(100), nullable=True)
    tipo_cliente = Column(String(20), nullable=False, default=CustomerType.RETAIL.value)
    activo = Column(Boolean, nullable=False, default=True)
    fecha_registro = Column(DateTime(timezone=True), server_default=func.now())
