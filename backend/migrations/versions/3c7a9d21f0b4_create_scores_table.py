"""create scores table

Revision ID: 3c7a9d21f0b4
Revises:
Create Date: 2026-02-14 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c7a9d21f0b4'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    if 'scores' in insp.get_table_names():
        return
    op.create_table(
        'scores',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=6), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('wave', sa.Integer(), nullable=False),
        sa.Column('duration', sa.Float(), nullable=False),
        sa.Column('created', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('length(name) BETWEEN 1 AND 6', name='ck_scores_name_length'),
        sa.CheckConstraint('score >= 0', name='ck_scores_score_nonneg'),
        sa.CheckConstraint('wave >= 1', name='ck_scores_wave_min'),
        sa.CheckConstraint('duration > 0', name='ck_scores_duration_pos'),
    )
    op.create_index('ix_scores_score', 'scores', ['score'])


def downgrade():
    op.drop_index('ix_scores_score', table_name='scores')
    op.drop_table('scores')
