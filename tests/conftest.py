# MAC Garden test suite - shared fixtures
#
# Every test gets a fresh in-memory SQLite database. Service tests use the
# `db` session directly; API tests go through FastAPI's TestClient with the
# get_db dependency pointed at the same database.

import os

# Settings are read at import time, so configure them before loading the app
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ALLOW_NEGATIVE_STOCK"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from database import Base, get_db
from main import app
from models.product import Category, Product, ProductVariant, ProductImage
from models.users import User
from utils.hashing import get_password_hash


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# DATA FACTORIES
# =============================================================================

@pytest.fixture()
def make_category(db):
    def _make(nombre="Plantas", orden=1, activo=True):
        category = Category(nombre=nombre, orden=orden, activo=activo)
        db.add(category)
        db.commit()
        return category
    return _make


@pytest.fixture()
def make_product(db):
    def _make(nombre="Monstera", precio_base=10.0, stock=10, stock_minimo=5,
              activo=True, destacado=False, categoria=None):
        product = Product(
            nombre=nombre,
            descripcion=f"{nombre} de prueba",
            precio_base=precio_base,
            precio_mayorista=round(precio_base * 0.8, 2),
            categoria_id=categoria.id if categoria else None,
            stock_disponible=stock,
            stock_minimo=stock_minimo,
            activo=activo,
            destacado=destacado,
        )
        db.add(product)
        db.commit()
        return product
    return _make


@pytest.fixture()
def make_variant(db):
    def _make(product, nombre_variante="Maceta 15 cm", stock=5, activo=True, precio_adicional=0.0):
        variant = ProductVariant(
            producto_id=product.id,
            nombre_variante=nombre_variante,
            precio_adicional=precio_adicional,
            stock=stock,
            activo=activo,
        )
        db.add(variant)
        db.commit()
        return variant
    return _make


@pytest.fixture()
def make_image(db):
    def _make(product, url="/img/foto.jpg", orden=1):
        image = ProductImage(producto_id=product.id, url_imagen=url, orden=orden)
        db.add(image)
        db.commit()
        return image
    return _make


@pytest.fixture()
def make_user(db):
    def _make(email="cliente@macgarden.do", password="secreto123", nombre="Ana Pérez",
              tipo_cliente="minorista", activo=True):
        user = User(
            nombre=nombre,
            email=email,
            telefono="809-555-0101",
            password_hash=get_password_hash(password),
            direccion="Calle 1 #10",
            ciudad="Santo Domingo",
            tipo_cliente=tipo_cliente,
            activo=activo,
        )
        db.add(user)
        db.commit()
        return user
    return _make
