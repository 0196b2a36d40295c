# backend/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from config import settings
from database import init_db
from utils.errors import AppError

# Routers
from routes.products import router as products_router
from routes.categories import router as categories_router
from routes.users import router as users_router
from routes.orders import router as orders_router
from routes.stock import router as stock_router
from routes.stats import router as stats_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("MAC Garden API ready on port %s", settings.PORT)
    yield


app = FastAPI(title="MAC Garden API", version="1.0.0", lifespan=lifespan)

# CORS: the storefront pages are served from a different origin in development
origins = ["*"]
if settings.FRONTEND_URL:
    origins = [settings.FRONTEND_URL]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=bool(settings.FRONTEND_URL),
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error responses: always {"error": "..."} ---

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    else:
        message = "Datos inválidos"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Error interno del servidor"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Error interno del servidor"})


# Router registration
app.include_router(products_router)
app.include_router(categories_router)
app.include_router(users_router)
app.include_router(orders_router)
app.include_router(stock_router)
app.include_router(stats_router)


@app.get("/")
def read_root():
    return {"message": "MAC Garden API funcionando"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT)
