"""Add characters and reviews tables

Revision ID: 0b1c2d3e4f5a
Revises:
Create Date: 2026-03-02 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
import sqlmodel.sql.sqltypes


# revision identifiers, used by Alembic.
revision = '0b1c2d3e4f5a'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # --- characters ---
    op.create_table(
        'characters',
        sa.Column('slug', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('external_id', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('rarity', sqlmodel.sql.sqltypes.AutoString(length=10), nullable=False),
        sa.Column('element', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('weapon', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('role', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('manufacturer', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('squad', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('burst_type', sqlmodel.sql.sqltypes.AutoString(length=10), nullable=False),
        sa.Column('is_limited', sa.Boolean(), nullable=True),
        sa.Column('limited_event', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('small_image_url', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('card_image_url', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('small_image_width', sa.Integer(), nullable=False),
        sa.Column('small_image_height', sa.Integer(), nullable=False),
        sa.Column('card_image_width', sa.Integer(), nullable=False),
        sa.Column('card_image_height', sa.Integer(), nullable=False),
        sa.Column('skills', sa.JSON(), nullable=False),
        sa.Column('full_image_url', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('full_image_width', sa.Integer(), nullable=True),
        sa.Column('full_image_height', sa.Integer(), nullable=True),
        sa.Column('release_date', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('weapon_name', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('ammo_capacity', sa.Integer(), nullable=True),
        sa.Column('reload_time', sa.Float(), nullable=True),
        sa.Column('control_mode', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('backstory', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('cv', sa.JSON(), nullable=True),
        sa.Column('basic_attack_raw', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('harmony_cubes_raw', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('skills_with_detail', sa.JSON(), nullable=True),
        sa.Column('specialities', sa.JSON(), nullable=True),
        sa.Column('synced_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('slug'),
    )

    # --- reviews ---
    op.create_table(
        'reviews',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('character_slug', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('nickname', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('content', sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['character_slug'], ['characters.slug'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_reviews_character_slug'), 'reviews', ['character_slug'])


def downgrade():
    op.drop_index(op.f('ix_reviews_character_slug'), table_name='reviews')
    op.drop_table('reviews')
    op.drop_table('characters')
