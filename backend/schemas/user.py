from pydantic import BaseModel, EmailStr, Field, ConfigDict
from typing import Optional, Literal
from datetime import datetime

CustomerTypeValue = Literal["minorista", "mayorista"]


# Registration form sent by the storefront (register.html)
class UserRegister(BaseModel):
    nombre: str = Field(min_length=1)
    email: EmailStr
    telefono: Optional[str] = None
    password: str = Field(min_length=1)
    direccion: Optional[str] = None
    ciudad: Optional[str] = None
    tipo_cliente: CustomerTypeValue = "minorista"


class UserLogin(BaseModel):
    email: str
    password: str


# Public account view; the password hash is never part of it
class UserProfile(BaseModel):
    id: int
    nombre: str
    email: str
    telefono: Optional[str] = None
    direccion: Optional[str] = None
    ciudad: Optional[str] = None
    tipo_cliente: str
    activo: bool
    fecha_registro: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class RegisterResponse(BaseModel):
    success: bool = True
    id: int
    message: str


class LoginResponse(BaseModel):
    success: bool = True
    usuario: UserProfile
    message: str
