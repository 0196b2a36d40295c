# backend/routes/stats.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from pydantic import BaseModel
from typing import List

from database import get_db
from services.reporting import ReportingView

router = APIRouter(
    prefix="/api/estadisticas",
    tags=["Stats"]
)


# === Pydantic Response Schemas ===

class TopProduct(BaseModel):
    id: int
    nombre: str
    total_vendido: int


class DashboardStats(BaseModel):
    total_pedidos: int
    ventas_totales: float
    productos_mas_vendidos: List[TopProduct]
    total_clientes: int
    stock_total: int


# === Endpoint: Dashboard Summary ===

@router.get("/dashboard", response_model=DashboardStats)
def get_dashboard(db: Session = Depends(get_db)):
    return ReportingView(db).dashboard()
