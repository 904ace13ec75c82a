"""initial clinic schema

Revision ID: 0001_initial
Revises:
Create Date: 2025-06-01 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _ts(name: str) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()"))


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password', sa.String(255), nullable=False),
        _ts('created_at'),
    )

    op.create_table(
        'reservations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('patient_name', sa.String(100), nullable=False),
        sa.Column('phone_number', sa.String(100), nullable=False),
        sa.Column('desired_date', sa.Date(), nullable=False),
        sa.Column('desired_time', sa.String(50), nullable=False),
        sa.Column('notes', sa.Text()),
        sa.Column('status', sa.String(50), nullable=False, server_default='pending'),
        _ts('created_at'),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
    )
    op.create_index('ix_reservations_desired_date', 'reservations', ['desired_date'])
    op.create_index('ix_reservations_patient_phone', 'reservations', ['patient_name', 'phone_number'])
    op.create_index('ix_reservations_user_id', 'reservations', ['user_id'])

    op.create_table(
        'blocked_slots',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('slot_date', sa.Date(), nullable=False),
        sa.Column('slot_time', sa.String(50), nullable=False),
        sa.UniqueConstraint('slot_date', 'slot_time', name='uq_blocked_slots_slot_date_slot_time'),
    )

    op.create_table(
        'posts',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('author', sa.String(100), nullable=False),
        sa.Column('password', sa.String(255)),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('image_data', sa.Text()),
        _ts('created_at'),
        _ts('updated_at'),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
    )

    op.create_table(
        'post_comments',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('post_id', sa.Integer(), sa.ForeignKey('posts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('author', sa.String(100), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('likes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('tags', sa.Text()),
        _ts('created_at'),
    )
    op.create_index('ix_post_comments_post_id', 'post_comments', ['post_id'])

    op.create_table(
        'consultations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('author', sa.String(100), nullable=False),
        sa.Column('password', sa.String(255)),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('is_secret', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('is_answered', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('image_data', sa.Text()),
        _ts('created_at'),
        _ts('updated_at'),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
    )

    op.create_table(
        'replies',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            'consultation_id', sa.Integer(), sa.ForeignKey('consultations.id', ondelete='CASCADE'), nullable=False
        ),
        sa.Column('content', sa.Text(), nullable=False),
        _ts('created_at'),
        _ts('updated_at'),
    )
    op.create_index('ix_replies_consultation_id', 'replies', ['consultation_id'])

    op.create_table(
        'notices',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('category', sa.String(100)),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('image_data', sa.Text()),
        _ts('created_at'),
        _ts('updated_at'),
    )

    op.create_table(
        'doctors',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('position', sa.String(100), nullable=False),
        sa.Column('history', sa.Text()),
        sa.Column('image_data', sa.Text()),
        _ts('created_at'),
        _ts('updated_at'),
    )

    op.create_table(
        'about_content',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column('title', sa.Text()),
        sa.Column('subtitle', sa.Text()),
        sa.Column('content', sa.Text()),
        sa.Column('image_data', sa.Text()),
        _ts('updated_at'),
    )

    op.create_table(
        'clinic_photos',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('caption', sa.String(255)),
        sa.Column('image_data', sa.Text(), nullable=False),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        _ts('created_at'),
    )

    op.create_table(
        'case_photos',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('category', sa.String(100)),
        sa.Column('description', sa.Text()),
        sa.Column('before_image_data', sa.Text()),
        sa.Column('after_image_data', sa.Text()),
        _ts('created_at'),
    )

    op.create_table(
        'faqs',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('question', sa.Text(), nullable=False),
        sa.Column('answer', sa.Text(), nullable=False),
        sa.Column('image_data', sa.Text()),
        _ts('created_at'),
    )

    op.create_table(
        'reviews',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('patient_name', sa.String(100), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('is_approved', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('admin_reply', sa.Text()),
        sa.Column('image_data', sa.Text()),
        _ts('created_at'),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_reviews_rating_range'),
    )

    op.create_table(
        'admin_logs',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('action', sa.String(100), nullable=False),
        sa.Column('ip_address', sa.String(100)),
        _ts('created_at'),
    )

    op.create_table(
        'contacts',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(100), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        _ts('created_at'),
    )


def downgrade() -> None:
    for table in (
        'contacts',
        'admin_logs',
        'reviews',
        'faqs',
        'case_photos',
        'clinic_photos',
        'about_content',
        'doctors',
        'notices',
        'replies',
        'consultations',
        'post_comments',
        'posts',
        'blocked_slots',
        'reservations',
        'users',
    ):
        op.drop_table(table)
