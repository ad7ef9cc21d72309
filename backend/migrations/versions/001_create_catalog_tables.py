"""Create catalog_sku and sku_alias tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Create catalog_sku table (price master)
    op.create_table(
        'catalog_sku',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('sku_code', sa.Text(), nullable=False),
        sa.Column('product_family', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('uom', sa.Text(), nullable=False),
        sa.Column('material', sa.Text(), nullable=True),
        sa.Column('alt_material', sa.Text(), nullable=True),
        sa.Column('gauge', sa.Text(), nullable=True),
        sa.Column('size_od_mm', sa.Float(), nullable=True),
        sa.Column('tolerance_mm', sa.Float(), nullable=True),
        sa.Column('rate', sa.Float(), nullable=False, server_default='0'),
        sa.Column('rate_alt', sa.Float(), nullable=True),
        sa.Column('lead_time_days', sa.Integer(), nullable=False, server_default='7'),
        sa.Column('moq', sa.Float(), nullable=False, server_default='1'),
        sa.Column('hsn_code', sa.Text(), nullable=False, server_default='00000000'),
        sa.Column('coil_length_m', sa.Float(), nullable=True),
        sa.Column('colour', sa.Text(), nullable=True),
        sa.Column('aux_size', sa.Text(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('sku_code', name='uq_catalog_sku_code')
    )

    op.create_index('ix_catalog_sku_family', 'catalog_sku', ['product_family'])

    # Create sku_alias table
    op.create_table(
        'sku_alias',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('alias', sa.Text(), nullable=False),
        sa.Column('sku_code', sa.Text(), nullable=False),
        sa.Column('score_boost', sa.Float(), nullable=False, server_default='0.3'),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('score_boost > 0 AND score_boost <= 1', name='ck_sku_alias_boost_range')
    )

    op.create_index('ix_sku_alias_sku_code', 'sku_alias', ['sku_code'])


def downgrade():
    op.drop_index('ix_sku_alias_sku_code', table_name='sku_alias')
    op.drop_table('sku_alias')

    op.drop_index('ix_catalog_sku_family', table_name='catalog_sku')
    op.drop_table('catalog_sku')
