"""Initial database schema

Revision ID: 0001
Revises:
Create Date: 2025-10-19 09:00:00.000000

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

CATALOG_TABLES = ('product_types', 'product_categories', 'target_product_audiences', 'product_amenities')


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade database schema."""
    # Create roles and users tables
    op.create_table('roles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )

    op.create_table('users',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('role_id', sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['role_id'], ['roles.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    # Create catalog tables
    for table in CATALOG_TABLES:
        columns = [
            sa.Column('id', sa.Uuid(), nullable=False),
            sa.Column('name', sa.String(length=155), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
        ]
        if table == 'product_amenities':
            columns.append(sa.Column('icon', sa.String(length=255), nullable=True))
        op.create_table(table,
            *columns,
            *_timestamps(),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('name')
        )

    # Create products table
    op.create_table('products',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=155), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('country', sa.String(length=100), nullable=False),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('max_people', sa.Integer(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('videos', sa.JSON(), nullable=False),
        sa.Column('files', sa.JSON(), nullable=False),
        sa.Column('banner', sa.Text(), nullable=True),
        sa.Column('is_approved', sa.Boolean(), nullable=False),
        sa.Column('product_type_id', sa.Uuid(), nullable=False),
        sa.Column('product_category_id', sa.Uuid(), nullable=False),
        sa.Column('target_product_audience_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('price >= 0', name='ck_product_price_non_negative'),
        sa.CheckConstraint('max_people > 0', name='ck_product_max_people_positive'),
        sa.CheckConstraint('duration > 0', name='ck_product_duration_positive'),
        sa.ForeignKeyConstraint(['product_type_id'], ['product_types.id']),
        sa.ForeignKeyConstraint(['product_category_id'], ['product_categories.id']),
        sa.ForeignKeyConstraint(['target_product_audience_id'], ['target_product_audiences.id']),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_products_name'), 'products', ['name'], unique=False)
    op.create_index(op.f('ix_products_product_type_id'), 'products', ['product_type_id'], unique=False)
    op.create_index(op.f('ix_products_user_id'), 'products', ['user_id'], unique=False)

    op.create_table('product_amenity_links',
        sa.Column('product_id', sa.Uuid(), nullable=False),
        sa.Column('product_amenity_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['product_amenity_id'], ['product_amenities.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('product_id', 'product_amenity_id')
    )

    # Create tours and tour_dates tables
    op.create_table('tours',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('product_id', sa.Uuid(), nullable=False),
        sa.Column('departure_point', sa.Text(), nullable=False),
        sa.Column('available_dates', sa.JSON(), nullable=False),
        sa.Column('itinerary', sa.JSON(), nullable=False),
        sa.Column('highlight', sa.Text(), nullable=False),
        sa.Column('included', sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_tours_product_id'), 'tours', ['product_id'], unique=True)

    op.create_table('tour_dates',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('tour_id', sa.Uuid(), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['tour_id'], ['tours.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tour_id', 'date', name='uq_tour_date_per_tour')
    )
    op.create_index(op.f('ix_tour_dates_tour_id'), 'tour_dates', ['tour_id'], unique=False)

    # Create bookings table
    op.create_table('bookings',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('product_id', sa.Uuid(), nullable=False),
        sa.Column('tour_date_id', sa.Uuid(), nullable=True),
        sa.Column('tickets', sa.Integer(), nullable=False),
        sa.Column('total', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('payment_method', sa.String(length=50), nullable=False),
        sa.Column('transaction_id', sa.String(length=255), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('tickets > 0', name='ck_booking_tickets_positive'),
        sa.CheckConstraint('total >= 0', name='ck_booking_total_non_negative'),
        sa.CheckConstraint("status IN ('completed', 'in-process', 'canceled')", name='ck_booking_status_valid'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
        sa.ForeignKeyConstraint(['tour_date_id'], ['tour_dates.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_bookings_user_id'), 'bookings', ['user_id'], unique=False)
    op.create_index(op.f('ix_bookings_product_id'), 'bookings', ['product_id'], unique=False)
    op.create_index(op.f('ix_bookings_transaction_id'), 'bookings', ['transaction_id'], unique=False)
    op.create_index(op.f('ix_bookings_status'), 'bookings', ['status'], unique=False)

    # Create feedback tables
    op.create_table('ratings',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('product_id', sa.Uuid(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('review', sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('rating BETWEEN 1 AND 5', name='ck_rating_range'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_ratings_product_id'), 'ratings', ['product_id'], unique=False)

    op.create_table('comments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('product_id', sa.Uuid(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_comments_product_id'), 'comments', ['product_id'], unique=False)

    op.create_table('faqs',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('product_id', sa.Uuid(), nullable=True),
        sa.Column('question', sa.Text(), nullable=False),
        sa.Column('answer', sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['product_id'], ['products.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_faqs_product_id'), 'faqs', ['product_id'], unique=False)


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_index(op.f('ix_faqs_product_id'), table_name='faqs')
    op.drop_table('faqs')
    op.drop_index(op.f('ix_comments_product_id'), table_name='comments')
    op.drop_table('comments')
    op.drop_index(op.f('ix_ratings_product_id'), table_name='ratings')
    op.drop_table('ratings')

    op.drop_index(op.f('ix_bookings_status'), table_name='bookings')
    op.drop_index(op.f('ix_bookings_transaction_id'), table_name='bookings')
    op.drop_index(op.f('ix_bookings_product_id'), table_name='bookings')
    op.drop_index(op.f('ix_bookings_user_id'), table_name='bookings')
    op.drop_table('bookings')

    op.drop_index(op.f('ix_tour_dates_tour_id'), table_name='tour_dates')
    op.drop_table('tour_dates')
    op.drop_index(op.f('ix_tours_product_id'), table_name='tours')
    op.drop_table('tours')

    op.drop_table('product_amenity_links')
    op.drop_index(op.f('ix_products_user_id'), table_name='products')
    op.drop_index(op.f('ix_products_product_type_id'), table_name='products')
    op.drop_index(op.f('ix_products_name'), table_name='products')
    op.drop_table('products')

    for table in reversed(CATALOG_TABLES):
        op.drop_table(table)

    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
    op.drop_table('roles')
