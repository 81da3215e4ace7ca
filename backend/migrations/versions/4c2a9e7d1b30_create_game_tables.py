"""create team, round, submission and setting tables

Revision ID: 4c2a9e7d1b30
Revises:
Create Date: 2026-10-18 00:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4c2a9e7d1b30'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    # Tables may already exist when the app created them on start-up
    if 'team' not in existing_tables:
        op.create_table(
            'team',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('name', sa.String(length=128), nullable=False),
            sa.Column('balance', sa.Float(), nullable=False, server_default='2000'),
        )
        op.create_index('ix_team_name', 'team', ['name'], unique=True)

    if 'round' not in existing_tables:
        op.create_table(
            'round',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('theme', sa.Text(), nullable=False),
            sa.Column('actual_value', sa.Float(), nullable=True),
            sa.Column('status', sa.String(length=16), nullable=False, server_default='open'),
        )

    if 'submission' not in existing_tables:
        op.create_table(
            'submission',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('team_id', sa.Integer(), sa.ForeignKey('team.id'), nullable=False),
            sa.Column('round_id', sa.Integer(), sa.ForeignKey('round.id'), nullable=False),
            sa.Column('predicted_value', sa.Float(), nullable=False),
            sa.Column('bid_amount', sa.Float(), nullable=False),
            sa.Column('score', sa.Float(), nullable=False, server_default='0'),
            sa.Column('error_percent', sa.Float(), nullable=True),
            sa.UniqueConstraint('team_id', 'round_id', name='uq_submission_team_round'),
        )
        op.create_index('ix_submission_team_id', 'submission', ['team_id'])
        op.create_index('ix_submission_round_id', 'submission', ['round_id'])

    if 'setting' not in existing_tables:
        op.create_table(
            'setting',
            sa.Column('key', sa.String(length=128), primary_key=True),
            sa.Column('value', sa.Text(), nullable=True),
        )
        op.execute("INSERT INTO setting (key, value) VALUES ('game_title', 'DATA PARADOX')")


def downgrade():
    op.drop_table('submission')
    op.drop_table('round')
    op.drop_table('setting')
    op.drop_index('ix_team_name', table_name='team')
    op.drop_table('team')
