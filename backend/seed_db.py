import os
import sys
import logging

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from sqlalchemy.orm import Session

from database import SessionLocal, init_db
from models.product import Category, Product, ProductVariant, ProductImage

logger = logging.getLogger(__name__)

# Demo catalog: (category, [(name, description, base price, wholesale price, stock, featured, variants)])
CATALOG = [
    ("Plantas de interior", [
        ("Monstera Deliciosa", "Planta tropical de hojas grandes.", 1250.0, 1000.0, 12, True,
         [("Maceta 15 cm", 0.0, 8), ("Maceta 25 cm", 450.0, 4)]),
        ("Pothos Dorado", "Colgante, ideal para poca luz.", 450.0, 350.0, 30, False, []),
        ("Sansevieria", "Lengua de suegra, muy resistente.", 600.0, 480.0, 4, False, []),
    ]),
    ("Macetas", [
        ("Maceta de barro 20 cm", "Barro cocido artesanal.", 300.0, 220.0, 40, False, []),
        ("Maceta autorriego", "Con depósito de agua.", 850.0, 700.0, 3, True,
         [("Blanca", 0.0, 2), ("Negra", 0.0, 1)]),
    ]),
    ("Abonos y sustratos", [
        ("Sustrato universal 10 L", "Mezcla para todo tipo de plantas.", 375.0, 300.0, 25, False, []),
        ("Humus de lombriz 5 kg", "Abono orgánico.", 520.0, 420.0, 0, False, []),
    ]),
]


def seed_catalog(session: Session) -> int:
    """Insert the demo catalog once; returns the number of products created."""
    if session.query(Product.id).first() is not None:
        logger.info("Catalog already populated, skipping seed")
        return 0

    created = 0
    for order, (category_name, products) in enumerate(CATALOG, start=1):
        category = Category(nombre=category_name, orden=order, activo=True)
        session.add(category)
        session.flush()

        for name, description, price, wholesale, stock, featured, variants in products:
            slug = name.lower().replace(" ", "-")
            product = Product(
                nombre=name,
                descripcion=description,
                precio_base=price,
                precio_mayorista=wholesale,
                imagen_principal=f"/img/productos/{slug}.jpg",
                categoria_id=category.id,
                stock_disponible=stock,
                stock_minimo=5,
                activo=True,
                destacado=featured,
            )
            session.add(product)
            session.flush()

            session.add(ProductImage(producto_id=product.id, url_imagen=f"/img/productos/{slug}-1.jpg", orden=1))
            for label, extra, variant_stock in variants:
                session.add(ProductVariant(
                    producto_id=product.id,
                    nombre_variante=label,
                    precio_adicional=extra,
                    stock=variant_stock,
                    activo=True,
                ))
            created += 1

    session.commit()
    logger.info("Seeded %s products in %s categories", created, len(CATALOG))
    return created


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
    session = SessionLocal()
    try:
        seed_catalog(session)
    finally:
        session.close()
