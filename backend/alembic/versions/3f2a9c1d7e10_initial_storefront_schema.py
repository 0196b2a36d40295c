"""Initial storefront schema

Revision ID: 3f2a9c1d7e10
Revises:
Create Date: 2026-10-19 10:12:44.381205

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# Revision identifiers used by Alembic
revision: str = '3f2a9c1d7e10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'categorias',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('nombre', sa.String(length=100), nullable=False),
        sa.Column('descripcion', sa.Text(), nullable=True),
        sa.Column('orden', sa.Integer(), nullable=False),
        sa.Column('activo', sa.Boolean(), nullable=False),
    )
    op.create_index('ix_categorias_id', 'categorias', ['id'])
    op.create_index('ix_categorias_activo', 'categorias', ['activo'])

    op.create_table(
        'usuarios',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('nombre', sa.String(length=150), nullable=False),
        sa.Column('email', sa.String(length=150), nullable=False),
        sa.Column('telefono', sa.String(length=30), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('direccion', sa.String(length=255), nullable=True),
        sa.Column('ciudad', sa.String(length=100), nullable=True),
        sa.Column('tipo_cliente', sa.String(length=20), nullable=False),
        sa.Column('activo', sa.Boolean(), nullable=False),
        sa.Column('fecha_registro', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP')),
    )
    op.create_index('ix_usuarios_id', 'usuarios', ['id'])
    op.create_index('ix_usuarios_email', 'usuarios', ['email'], unique=True)

    op.create_table(
        'productos',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('nombre', sa.String(length=150), nullable=False),
        sa.Column('descripcion', sa.Text(), nullable=True),
        sa.Column('precio_base', sa.Float(), nullable=False),
        sa.Column('precio_mayorista', sa.Float(), nullable=True),
        sa.Column('imagen_principal', sa.String(length=255), nullable=True),
        sa.Column('categoria_id', sa.Integer(), sa.ForeignKey('categorias.id'), nullable=True),
        sa.Column('stock_disponible', sa.Integer(), nullable=False),
        sa.Column('stock_minimo', sa.Integer(), nullable=False),
        sa.Column('activo', sa.Boolean(), nullable=False),
        sa.Column('destacado', sa.Boolean(), nullable=False),
        sa.Column('fecha_creacion', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP')),
    )
    op.create_index('ix_productos_id', 'productos', ['id'])
    op.create_index('ix_productos_nombre', 'productos', ['nombre'])
    op.create_index('ix_productos_categoria_id', 'productos', ['categoria_id'])
    op.create_index('ix_productos_activo', 'productos', ['activo'])

    op.create_table(
        'variantes_producto',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('producto_id', sa.Integer(), sa.ForeignKey('productos.id'), nullable=False),
        sa.Column('nombre_variante', sa.String(length=100), nullable=False),
        sa.Column('precio_adicional', sa.Float(), nullable=False),
        sa.Column('stock', sa.Integer(), nullable=False),
        sa.Column('activo', sa.Boolean(), nullable=False),
    )
    op.create_index('ix_variantes_producto_id', 'variantes_producto', ['id'])
    op.create_index('ix_variantes_producto_producto_id', 'variantes_producto', ['producto_id'])

    op.create_table(
        'imagenes_producto',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('producto_id', sa.Integer(), sa.ForeignKey('productos.id'), nullable=False),
        sa.Column('url_imagen', sa.String(length=255), nullable=False),
        sa.Column('orden', sa.Integer(), nullable=False),
    )
    op.create_index('ix_imagenes_producto_id', 'imagenes_producto', ['id'])
    op.create_index('ix_imagenes_producto_producto_id', 'imagenes_producto', ['producto_id'])

    op.create_table(
        'pedidos',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('usuario_id', sa.Integer(), sa.ForeignKey('usuarios.id'), nullable=False),
        sa.Column('numero_pedido', sa.String(length=40), nullable=False),
        sa.Column('subtotal', sa.Float(), nullable=False),
        sa.Column('total', sa.Float(), nullable=False),
        sa.Column('direccion_entrega', sa.String(length=255), nullable=True),
        sa.Column('notas', sa.Text(), nullable=True),
        sa.Column('estado', sa.String(length=20), nullable=False),
        sa.Column('fecha_pedido', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP')),
    )
    op.create_index('ix_pedidos_id', 'pedidos', ['id'])
    op.create_index('ix_pedidos_usuario_id', 'pedidos', ['usuario_id'])
    op.create_index('ix_pedidos_numero_pedido', 'pedidos', ['numero_pedido'], unique=True)
    op.create_index('ix_pedidos_estado', 'pedidos', ['estado'])

    op.create_table(
        'detalle_pedidos',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('pedido_id', sa.Integer(), sa.ForeignKey('pedidos.id'), nullable=False),
        sa.Column('producto_id', sa.Integer(), sa.ForeignKey('productos.id'), nullable=False),
        sa.Column('variante_id', sa.Integer(), sa.ForeignKey('variantes_producto.id'), nullable=True),
        sa.Column('cantidad', sa.Integer(), nullable=False),
        sa.Column('precio_unitario', sa.Float(), nullable=False),
        sa.Column('subtotal', sa.Float(), nullable=False),
        sa.CheckConstraint('cantidad > 0'),
    )
    op.create_index('ix_detalle_pedidos_id', 'detalle_pedidos', ['id'])
    op.create_index('ix_detalle_pedidos_pedido_id', 'detalle_pedidos', ['pedido_id'])

    op.create_table(
        'movimientos_inventario',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('producto_id', sa.Integer(), sa.ForeignKey('productos.id'), nullable=False),
        sa.Column('variante_id', sa.Integer(), sa.ForeignKey('variantes_producto.id'), nullable=True),
        sa.Column('tipo', sa.String(length=10), nullable=False),
        sa.Column('cantidad', sa.Integer(), nullable=False),
        sa.Column('motivo', sa.String(length=255), nullable=True),
        sa.Column('fecha_movimiento', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP')),
    )
    op.create_index('ix_movimientos_inventario_id', 'movimientos_inventario', ['id'])
    op.create_index('ix_movimientos_inventario_producto_id', 'movimientos_inventario', ['producto_id'])
    op.create_index('ix_movimientos_inventario_fecha_movimiento', 'movimientos_inventario', ['fecha_movimiento'])

    op.create_table(
        'logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('ts', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('usuario_id', sa.Integer(), sa.ForeignKey('usuarios.id'), nullable=True),
        sa.Column('action', sa.String(length=50), nullable=True),
        sa.Column('resource', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=True),
        sa.Column('ip', sa.String(length=64), nullable=True),
        sa.Column('meta', sa.JSON(), nullable=True),
    )
    op.create_index('ix_logs_id', 'logs', ['id'])
    op.create_index('ix_logs_ts', 'logs', ['ts'])
    op.create_index('ix_logs_action', 'logs', ['action'])
    op.create_index('ix_logs_resource', 'logs', ['resource'])
    op.create_index('ix_logs_status', 'logs', ['status'])


def downgrade() -> None:
    """Downgrade schema."""
    # Children first, then the tables they reference
    op.drop_table('logs')
    op.drop_table('movimientos_inventario')
    op.drop_table('detalle_pedidos')
    op.drop_table('pedidos')
    op.drop_table('imagenes_producto')
    op.drop_table('variantes_producto')
    op.drop_table('productos')
    op.drop_table('usuarios')
    op.drop_table('categorias')
