"""Initial schema

Revision ID: 001_initial
Revises:
Create Date: 2026-10-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Create initial database schema:
    - short_links table: Links with their cached click counter
    - click_events table: One row per recorded redirect, cascades with its link
    """
    op.create_table(
        'short_links',
        sa.Column('id', sa.Integer(), nullable=False, autoincrement=True),
        sa.Column('short_code', sa.String(length=50), nullable=False),
        sa.Column('destination_url', sa.Text(), nullable=False),
        sa.Column('owner_user_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('click_count', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('click_count >= 0', name='ck_short_links_click_count_non_negative'),
    )
    op.create_index('ix_short_links_short_code', 'short_links', ['short_code'], unique=True)
    op.create_index('ix_short_links_owner_user_id', 'short_links', ['owner_user_id'])

    op.create_table(
        'click_events',
        sa.Column('id', sa.Integer(), nullable=False, autoincrement=True),
        sa.Column('link_id', sa.Integer(), nullable=False),
        sa.Column('ip', sa.Text(), nullable=True),
        sa.Column('user_agent', sa.Text(), nullable=True),
        sa.Column('referer', sa.Text(), nullable=True),
        sa.Column('device_type', sa.String(length=50), nullable=True),
        sa.Column('device_vendor', sa.String(length=100), nullable=True),
        sa.Column('device_model', sa.String(length=100), nullable=True),
        sa.Column('browser', sa.String(length=50), nullable=True),
        sa.Column('browser_version', sa.String(length=50), nullable=True),
        sa.Column('os', sa.String(length=50), nullable=True),
        sa.Column('os_version', sa.String(length=50), nullable=True),
        sa.Column('country', sa.String(length=100), nullable=True),
        sa.Column('region', sa.String(length=100), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('timezone', sa.String(length=100), nullable=True),
        sa.Column('clicked_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['link_id'], ['short_links.id'],
            name='fk_click_events_link_id',
            ondelete='CASCADE',
        ),
    )
    op.create_index('ix_click_events_link_id', 'click_events', ['link_id'])
    op.create_index('ix_click_events_clicked_at', 'click_events', ['clicked_at'])
    op.create_index(
        'ix_click_events_link_id_clicked_at',
        'click_events',
        ['link_id', 'clicked_at'],
    )


def downgrade() -> None:
    """
    Drop all tables and indexes.
    """
    op.drop_index('ix_click_events_link_id_clicked_at', table_name='click_events')
    op.drop_index('ix_click_events_clicked_at', table_name='click_events')
    op.drop_index('ix_click_events_link_id', table_name='click_events')
    op.drop_table('click_events')

    op.drop_index('ix_short_links_owner_user_id', table_name='short_links')
    op.drop_index('ix_short_links_short_code', table_name='short_links')
    op.drop_table('short_links')
