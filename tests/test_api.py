"""HTTP contract tests for the storefront API via TestClient."""

import json

from sqlalchemy.exc import OperationalError

import routes.orders as orders_routes
from models.log import Log
from models.order import Order
from models.product import Product


REGISTRATION = {
    "nombre": "María Rodríguez",
    "email": "maria@macgarden.do",
    "telefono": "829-555-0123",
    "password": "jardin2024",
    "direccion": "Calle El Sol 5",
    "ciudad": "La Vega",
    "tipo_cliente": "minorista",
}


def _register(client, **overrides):
    return client.post("/api/usuarios/registro", json=dict(REGISTRATION, **overrides))


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "message" in response.json()


class TestUsersApi:

    def test_register(self, client):
        response = _register(client)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert isinstance(body["id"], int)
        assert body["message"]

    def test_register_duplicate_email(self, client):
        _register(client)

        response = _register(client, email="MARIA@macgarden.do")

        assert response.status_code == 400
        assert "error" in response.json()

    def test_register_missing_field_is_400(self, client):
        payload = dict(REGISTRATION)
        del payload["email"]

        response = client.post("/api/usuarios/registro", json=payload)

        assert response.status_code == 400
        assert "error" in response.json()

    def test_register_unknown_customer_type(self, client):
        response = _register(client, tipo_cliente="vip")

        assert response.status_code == 400

    def test_login_returns_profile_without_hash(self, client):
        user_id = _register(client).json()["id"]

        response = client.post("/api/usuarios/login", json={
            "email": "maria@macgarden.do", "password": "jardin2024",
        })

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["usuario"]["id"] == user_id
        assert body["usuario"]["tipo_cliente"] == "minorista"
        assert "password_hash" not in body["usuario"]
        assert "password" not in body["usuario"]

    def test_login_wrong_password(self, client):
        _register(client)

        response = client.post("/api/usuarios/login", json={
            "email": "maria@macgarden.do", "password": "incorrecta",
        })

        assert response.status_code == 401
        assert "error" in response.json()

    def test_login_attempts_are_audited(self, client, db):
        _register(client)
        client.post("/api/usuarios/login", json={"email": "maria@macgarden.do", "password": "mal"})

        db.expire_all()
        actions = {(log.action, log.status) for log in db.query(Log).all()}
        assert ("REGISTER", "SUCCESS") in actions
        assert ("LOGIN", "FAIL") in actions

    def test_get_user(self, client):
        user_id = _register(client).json()["id"]

        response = client.get(f"/api/usuarios/{user_id}")

        assert response.status_code == 200
        assert response.json()["email"] == "maria@macgarden.do"
        assert "password_hash" not in response.json()

    def test_get_missing_user(self, client):
        response = client.get("/api/usuarios/999")

        assert response.status_code == 404
        assert response.json() == {"error": "Usuario no encontrado"}


class TestCatalogApi:

    def test_list_products(self, client, make_product):
        make_product(nombre="Aloe")
        make_product(nombre="Bonsái", destacado=True)
        make_product(nombre="Oculta", activo=False)

        response = client.get("/api/productos")

        assert response.status_code == 200
        assert [p["nombre"] for p in response.json()] == ["Bonsái", "Aloe"]

    def test_product_detail_embeds_variants_and_images(self, client, make_category, make_product,
                                                       make_variant, make_image):
        category = make_category(nombre="Interior")
        product = make_product(nombre="Monstera", categoria=category)
        make_variant(product, nombre_variante="Maceta 15 cm")
        make_variant(product, nombre_variante="Agotada", activo=False)
        make_image(product, url="/img/monstera-1.jpg")

        response = client.get(f"/api/productos/{product.id}")

        assert response.status_code == 200
        body = response.json()
        assert body["nombre"] == "Monstera"
        assert body["categoria_nombre"] == "Interior"
        assert [v["nombre_variante"] for v in body["variantes"]] == ["Maceta 15 cm"]
        assert [i["url_imagen"] for i in body["imagenes"]] == ["/img/monstera-1.jpg"]

    def test_missing_product(self, client):
        response = client.get("/api/productos/404")

        assert response.status_code == 404
        assert response.json() == {"error": "Producto no encontrado"}

    def test_product_variants(self, client, make_product, make_variant):
        product = make_product()
        make_variant(product, nombre_variante="Grande", stock=3)

        response = client.get(f"/api/productos/{product.id}/variantes")

        assert response.status_code == 200
        assert response.json()[0]["nombre_variante"] == "Grande"
        assert response.json()[0]["stock"] == 3

    def test_categories_and_their_products(self, client, make_category, make_product):
        category = make_category(nombre="Macetas")
        make_product(nombre="Maceta barro", categoria=category)

        categories = client.get("/api/categorias").json()
        assert [c["nombre"] for c in categories] == ["Macetas"]

        response = client.get(f"/api/categorias/{category.id}/productos")
        assert [p["nombre"] for p in response.json()] == ["Maceta barro"]

        assert client.get("/api/categorias/999/productos").status_code == 404


class TestOrdersApi:

    def _order_payload(self, user_id, *items):
        return {
            "usuario_id": user_id,
            "items": list(items),
            "direccion_entrega": "Calle 1 #10",
            "notas": "Llamar antes",
        }

    def test_create_and_fetch_order(self, client, db, make_user, make_product):
        user = make_user()
        p1 = make_product(nombre="Monstera", stock=10)
        p2 = make_product(nombre="Pothos", stock=5)

        response = client.post("/api/pedidos", json=self._order_payload(
            user.id,
            {"producto_id": p1.id, "cantidad": 2, "precio_unitario": 10},
            {"producto_id": p2.id, "cantidad": 1, "precio_unitario": 30},
        ))

        assert response.status_code == 201
        created = response.json()
        assert created["success"] is True
        assert created["numero_pedido"].startswith("PED-")

        order = client.get(f"/api/pedidos/{created['pedido_id']}").json()
        assert order["total"] == 50
        assert order["estado"] == "pendiente"
        assert order["notas"] == "Llamar antes"
        assert [(i["producto_nombre"], i["cantidad"], i["subtotal"]) for i in order["items"]] == [
            ("Monstera", 2, 20), ("Pothos", 1, 30),
        ]

        db.expire_all()
        assert db.get(Product, p1.id).stock_disponible == 8
        assert db.get(Product, p2.id).stock_disponible == 4

    def test_zero_quantity_is_400_and_nothing_changes(self, client, db, make_user, make_product):
        user = make_user()
        product = make_product(stock=10)

        response = client.post("/api/pedidos", json=self._order_payload(
            user.id, {"producto_id": product.id, "cantidad": 0, "precio_unitario": 10},
        ))

        assert response.status_code == 400
        assert "error" in response.json()
        db.expire_all()
        assert db.get(Product, product.id).stock_disponible == 10

    def test_insufficient_stock(self, client, make_user, make_product):
        user = make_user()
        product = make_product(stock=1)

        response = client.post("/api/pedidos", json=self._order_payload(
            user.id, {"producto_id": product.id, "cantidad": 5, "precio_unitario": 10},
        ))

        assert response.status_code == 400
        assert "Stock insuficiente" in response.json()["error"]

    def test_non_finite_price_is_rejected(self, client, db, make_user, make_product):
        user = make_user()
        product = make_product(stock=10)
        # json.dumps writes the bare token Infinity, which the request parser accepts
        body = json.dumps(self._order_payload(
            user.id, {"producto_id": product.id, "cantidad": 1, "precio_unitario": float("inf")},
        ))
        assert "Infinity" in body

        response = client.post("/api/pedidos", content=body, headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert "error" in response.json()
        db.expire_all()
        assert db.query(Order).count() == 0
        assert db.get(Product, product.id).stock_disponible == 10
        assert client.get("/api/estadisticas/dashboard").json()["ventas_totales"] == 0.0

    def test_unknown_product_is_a_generic_500(self, client, db, make_user, make_product):
        user = make_user()
        product = make_product(stock=10)

        response = client.post("/api/pedidos", json=self._order_payload(
            user.id,
            {"producto_id": product.id, "cantidad": 1, "precio_unitario": 10},
            {"producto_id": 9999, "cantidad": 1, "precio_unitario": 10},
        ))

        assert response.status_code == 500
        assert response.json() == {"error": "Error creando el pedido"}
        db.expire_all()
        assert db.query(Order).count() == 0
        assert db.get(Product, product.id).stock_disponible == 10

    def test_order_survives_failed_audit_write(self, client, db, make_user, make_product, monkeypatch):
        user = make_user()
        product = make_product(stock=10)

        def broken_write_log(session, **kwargs):
            raise OperationalError("INSERT INTO logs", {}, Exception("disk full"))

        monkeypatch.setattr(orders_routes, "write_log", broken_write_log)

        response = client.post("/api/pedidos", json=self._order_payload(
            user.id, {"producto_id": product.id, "cantidad": 2, "precio_unitario": 10},
        ))

        assert response.status_code == 201
        db.expire_all()
        assert db.query(Order).count() == 1
        assert db.get(Product, product.id).stock_disponible == 8

    def test_user_order_history(self, client, make_user, make_product):
        user = make_user()
        product = make_product(stock=10)
        client.post("/api/pedidos", json=self._order_payload(
            user.id, {"producto_id": product.id, "cantidad": 3, "precio_unitario": 2.5},
        ))

        response = client.get(f"/api/usuarios/{user.id}/pedidos")

        assert response.status_code == 200
        history = response.json()
        assert len(history) == 1
        assert history[0]["total"] == 7.5
        assert history[0]["cantidad_items"] == 3

    def test_update_status(self, client, make_user, make_product):
        user = make_user()
        product = make_product(stock=10)
        order_id = client.post("/api/pedidos", json=self._order_payload(
            user.id, {"producto_id": product.id, "cantidad": 1, "precio_unitario": 10},
        )).json()["pedido_id"]

        response = client.put(f"/api/pedidos/{order_id}/estado", json={"estado": "procesando"})

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert client.get(f"/api/pedidos/{order_id}").json()["estado"] == "procesando"

    def test_update_status_invalid_value(self, client, make_user, make_product):
        user = make_user()
        product = make_product(stock=10)
        order_id = client.post("/api/pedidos", json=self._order_payload(
            user.id, {"producto_id": product.id, "cantidad": 1, "precio_unitario": 10},
        )).json()["pedido_id"]

        response = client.put(f"/api/pedidos/{order_id}/estado", json={"estado": "volando"})

        assert response.status_code == 400

    def test_missing_order(self, client):
        response = client.get("/api/pedidos/31")

        assert response.status_code == 404
        assert response.json() == {"error": "Pedido no encontrado"}


class TestInventoryApi:

    def test_add_stock_and_list_movements(self, client, db, make_product):
        product = make_product(nombre="Sansevieria", stock=2)

        response = client.post("/api/inventario/agregar", json={
            "producto_id": product.id, "cantidad": 8, "motivo": "Entrega vivero",
        })

        assert response.status_code == 201
        assert response.json()["success"] is True
        db.expire_all()
        assert db.get(Product, product.id).stock_disponible == 10

        movements = client.get("/api/inventario/movimientos").json()
        assert movements[0]["tipo"] == "entrada"
        assert movements[0]["cantidad"] == 8
        assert movements[0]["producto_nombre"] == "Sansevieria"
        assert movements[0]["motivo"] == "Entrega vivero"

    def test_add_stock_to_unknown_product(self, client):
        response = client.post("/api/inventario/agregar", json={"producto_id": 999, "cantidad": 1})

        assert response.status_code == 404

    def test_add_stock_rejects_non_positive_quantity(self, client, make_product):
        product = make_product()

        response = client.post("/api/inventario/agregar", json={"producto_id": product.id, "cantidad": 0})

        assert response.status_code == 400

    def test_low_stock(self, client, make_product):
        make_product(nombre="Vacío", stock=0, stock_minimo=5)
        make_product(nombre="Justo", stock=5, stock_minimo=5)
        make_product(nombre="Holgado", stock=10, stock_minimo=5)

        response = client.get("/api/inventario/stock-bajo")

        assert [p["nombre"] for p in response.json()] == ["Vacío", "Justo"]


def test_dashboard(client, make_user, make_product):
    user = make_user()
    product = make_product(nombre="Monstera", stock=10)
    client.post("/api/pedidos", json={
        "usuario_id": user.id,
        "items": [{"producto_id": product.id, "cantidad": 2, "precio_unitario": 15}],
    })

    response = client.get("/api/estadisticas/dashboard")

    assert response.status_code == 200
    assert response.json() == {
        "total_pedidos": 1,
        "ventas_totales": 30.0,
        "productos_mas_vendidos": [{"id": product.id, "nombre": "Monstera", "total_vendido": 2}],
        "total_clientes": 1,
        "stock_total": 8,
    }
