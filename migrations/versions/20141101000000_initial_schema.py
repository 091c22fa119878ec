"""initial schema

Revision ID: 20141101000000
Revises:
Create Date: 2014-11-01 00:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20141101000000'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=190), nullable=False),
        sa.Column('name', sa.String(length=190), nullable=False),
        sa.Column('role', sa.String(length=190), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created', sa.DateTime(timezone=True), nullable=False),
        sa.Column('modified', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )
    op.create_table(
        'vocabulary',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('user.id', ondelete='SET NULL'), nullable=True),
        sa.Column('namespace_uri', sa.String(length=190), nullable=False),
        sa.Column('prefix', sa.String(length=190), nullable=False),
        sa.Column('label', sa.String(length=255), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('namespace_uri'),
        sa.UniqueConstraint('prefix'),
    )
    op.create_index(op.f('ix_vocabulary_owner_id'), 'vocabulary', ['owner_id'], unique=False)
    op.create_table(
        'resource_class',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('user.id', ondelete='SET NULL'), nullable=True),
        sa.Column('vocabulary_id', sa.Integer(), sa.ForeignKey('vocabulary.id', ondelete='CASCADE'), nullable=False),
        sa.Column('local_name', sa.String(length=190), nullable=False),
        sa.Column('label', sa.String(length=255), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('vocabulary_id', 'local_name', name='uq_resource_class_vocabulary_local_name'),
    )
    op.create_index(op.f('ix_resource_class_owner_id'), 'resource_class', ['owner_id'], unique=False)
    op.create_index(op.f('ix_resource_class_vocabulary_id'), 'resource_class', ['vocabulary_id'], unique=False)
    op.create_table(
        'item',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('owner_id', sa.Integer(), sa.ForeignKey('user.id', ondelete='SET NULL'), nullable=True),
        sa.Column('resource_class_id', sa.Integer(), sa.ForeignKey('resource_class.id', ondelete='SET NULL'), nullable=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('is_public', sa.Boolean(), nullable=False),
        sa.Column('created', sa.DateTime(timezone=True), nullable=False),
        sa.Column('modified', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_item_owner_id'), 'item', ['owner_id'], unique=False)
    op.create_index(op.f('ix_item_resource_class_id'), 'item', ['resource_class_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_item_resource_class_id'), table_name='item')
    op.drop_index(op.f('ix_item_owner_id'), table_name='item')
    op.drop_table('item')
    op.drop_index(op.f('ix_resource_class_vocabulary_id'), table_name='resource_class')
    op.drop_index(op.f('ix_resource_class_owner_id'), table_name='resource_class')
    op.drop_table('resource_class')
    op.drop_index(op.f('ix_vocabulary_owner_id'), table_name='vocabulary')
    op.drop_table('vocabulary')
    op.drop_table('user')
