"""players

Revision ID: c20261019100000
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'c20261019100000'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    existing = set(inspector.get_table_names())

    if 'player' not in existing:
        op.create_table(
            'player',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('user_id', sa.String(length=64), nullable=False),
            sa.Column('user_name', sa.String(length=64)),
            sa.Column('first_name', sa.String(length=100), nullable=False),
            sa.Column('last_name', sa.String(length=100), nullable=False),
            sa.Column('birth_year', sa.Integer(), nullable=False),
            sa.Column('gov_id', sa.String(length=20), nullable=False),
            sa.Column('gov_id_signature', sa.String(length=40), nullable=False),
            sa.Column('banned', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('created_at', sa.DateTime()),
        )
        op.create_index('ix_player_gov_id_signature', 'player', ['gov_id_signature'])


def downgrade():
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    existing = set(inspector.get_table_names())

    if 'player' in existing:
        op.drop_index('ix_player_gov_id_signature', table_name='player')
        op.drop_table('player')
