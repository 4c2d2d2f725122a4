"""Create categories and products tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create categories and products tables."""
    # Categories table
    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('image', sa.String(1000), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    # Products table
    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False, index=True),
        sa.Column('slug', sa.String(255), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('price', sa.Numeric(10, 2), nullable=False, index=True),
        sa.Column('sale_price', sa.Numeric(10, 2), nullable=True),
        sa.Column('brand', sa.String(255), nullable=False, index=True),
        sa.Column('color', sa.String(255), nullable=False, index=True),
        sa.Column('sizes', sa.JSON(), nullable=False),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('category_id', sa.Integer(),
                  sa.ForeignKey('categories.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('is_featured', sa.Boolean(), nullable=False, server_default=sa.false(), index=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true(), index=True),
        sa.Column('stock_quantity', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    # Listing pages filter on is_active and order by created_at
    op.create_index(
        'ix_products_is_active_created_at',
        'products',
        ['is_active', 'created_at'],
    )


def downgrade() -> None:
    """Drop categories and products tables."""
    op.drop_index('ix_products_is_active_created_at', table_name='products')
    op.drop_table('products')
    op.drop_table('categories')
