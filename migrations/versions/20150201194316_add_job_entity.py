"""add job entity

Revision ID: 20150201194316
Revises: 20141101000000
Create Date: 2015-02-01 19:43:16

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20150201194316'
down_revision: Union[str, None] = '20141101000000'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'job',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=True),
        sa.Column('pid', sa.String(length=255), nullable=True),
        sa.Column('status', sa.String(length=255), nullable=True),
        sa.Column('class', sa.String(length=255), nullable=False),
        sa.Column('args', sa.JSON(), nullable=True),
        sa.Column('started', sa.DateTime(), nullable=False),
        sa.Column('stopped', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('job') as batch_op:
        batch_op.create_foreign_key(
            'FK_FBD8E0F87E3C61F9', 'user', ['owner_id'], ['id'], ondelete='SET NULL'
        )
    op.create_index('IDX_FBD8E0F87E3C61F9', 'job', ['owner_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('IDX_FBD8E0F87E3C61F9', table_name='job')
    op.drop_table('job')
