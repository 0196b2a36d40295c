# backend/routes/users.py
from typing import List
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from database import get_db
from services.accounts import AccountStore, normalize_email
from services.orders import OrderEngine
from utils.audit import write_log, client_ip
from utils.errors import EmailTaken, InvalidCredentials
from schemas import user as schemas
from schemas.order import OrderSummary

router = APIRouter(prefix="/api/usuarios", tags=["Users"])


# Register a new customer account
@router.post("/registro", response_model=schemas.RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(payload: schemas.UserRegister, request: Request, db: Session = Depends(get_db)):
    try:
        user_id = AccountStore(db).register(payload)
    except EmailTaken:
        write_log(db, user_id=None, action="REGISTER", resource="usuarios", status="FAIL",
                  ip=client_ip(request), meta={"email": normalize_email(payload.email), "reason": "Email exists"})
        raise

    write_log(db, user_id=user_id, action="REGISTER", resource="usuarios", status="SUCCESS",
              ip=client_ip(request), meta={"email": normalize_email(payload.email)})
    return {"success": True, "id": user_id, "message": "Usuario registrado exitosamente"}


# Check credentials; the client keeps the returned profile as its session
@router.post("/login", response_model=schemas.LoginResponse)
def login(payload: schemas.UserLogin, request: Request, db: Session = Depends(get_db)):
    try:
        user = AccountStore(db).authenticate(payload.email, payload.password)
    except InvalidCredentials:
        write_log(db, user_id=None, action="LOGIN", resource="usuarios", status="FAIL",
                  ip=client_ip(request), meta={"email": normalize_email(payload.email)})
        raise

    profile = schemas.UserProfile.model_validate(user)
    write_log(db, user_id=user.id, action="LOGIN", resource="usuarios", status="SUCCESS",
              ip=client_ip(request), meta={"email": user.email})
    return {"success": True, "usuario": profile, "message": "Login exitoso"}


@router.get("/{user_id}", response_model=schemas.UserProfile)
def get_user(user_id: int, db: Session = Depends(get_db)):
    return AccountStore(db).get_profile(user_id)


# Order history of one customer, newest first
@router.get("/{user_id}/pedidos", response_model=List[OrderSummary])
def list_user_orders(user_id: int, db: Session = Depends(get_db)):
    orders = OrderEngine(db).list_user_orders(user_id)
    return [
        OrderSummary(
            id=o.id,
            numero_pedido=o.numero_pedido,
            total=round(o.total, 2),
            estado=o.estado,
            fecha_pedido=o.fecha_pedido,
            cantidad_items=sum(it.cantidad for it in o.items),
        )
        for o in orders
    ]
