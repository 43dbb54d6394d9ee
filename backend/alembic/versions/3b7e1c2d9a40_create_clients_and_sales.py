"""create clients and sales

Revision ID: 3b7e1c2d9a40
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b7e1c2d9a40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Клиенты (ставки)
    op.create_table(
        'clients',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('client_name', sa.String(), nullable=False),
        sa.Column('rate', sa.Numeric(10, 2), nullable=False, server_default='1'),
        sa.Column('no_of_staff', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_clients_id', 'clients', ['id'])
    op.create_index('ix_clients_client_name', 'clients', ['client_name'])

    # Продажи
    op.create_table(
        'sales',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('client_id', sa.Integer(), sa.ForeignKey('clients.id'), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('method', sa.String(), nullable=False),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_sales_id', 'sales', ['id'])
    op.create_index('ix_sales_date', 'sales', ['date'])
    op.create_index('ix_sales_client_id', 'sales', ['client_id'])


def downgrade() -> None:
    op.drop_index('ix_sales_client_id', table_name='sales')
    op.drop_index('ix_sales_date', table_name='sales')
    op.drop_index('ix_sales_id', table_name='sales')
    op.drop_table('sales')
    op.drop_index('ix_clients_client_name', table_name='clients')
    op.drop_index('ix_clients_id', table_name='clients')
    op.drop_table('clients')
