"""Initial schema

Revision ID: 001
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create dining_tables table
    op.create_table(
        'dining_tables',
        sa.Column('number', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('created', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('number')
    )

    # Create table_orders table
    op.create_table(
        'table_orders',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('table_number', sa.Integer(), nullable=False),
        sa.Column('customers_count', sa.Integer(), nullable=False),
        sa.Column('opened', sa.DateTime(timezone=True), nullable=False),
        sa.Column('billed', sa.DateTime(timezone=True), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['table_number'], ['dining_tables.number'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_table_orders_table_number'), 'table_orders', ['table_number'], unique=False)
    op.create_index(
        'uq_table_orders_open_table',
        'table_orders',
        ['table_number'],
        unique=True,
        sqlite_where=sa.text('billed IS NULL'),
        postgresql_where=sa.text('billed IS NULL'),
    )

    # Create ordering_lines table
    op.create_table(
        'ordering_lines',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('order_id', sa.String(length=36), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('item_id', sa.String(), nullable=True),
        sa.Column('item_short_name', sa.String(), nullable=False),
        sa.Column('how_many', sa.Integer(), nullable=False),
        sa.Column('sent_for_preparation', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['order_id'], ['table_orders.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('order_id', 'position')
    )
    op.create_index(op.f('ix_ordering_lines_id'), 'ordering_lines', ['id'], unique=False)


def downgrade() -> None:
    op.drop_table('ordering_lines')
    op.drop_index('uq_table_orders_open_table', table_name='table_orders')
    op.drop_index(op.f('ix_table_orders_table_number'), table_name='table_orders')
    op.drop_table('table_orders')
    op.drop_table('dining_tables')
