"""Add the filled Google Sheet link to students

Revision ID: 7c4e9b1a5d20
Revises: 3a1f0c2d9b7e
Create Date: 2025-03-11 09:40:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '7c4e9b1a5d20'
down_revision: Union[str, Sequence[str], None] = '3a1f0c2d9b7e'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Add the per-student report sheet URL."""
    op.add_column('students', sa.Column('filled_google_sheet', sa.String(), nullable=True))


def downgrade() -> None:
    """Remove the per-student report sheet URL."""
    op.drop_column('students', 'filled_google_sheet')
