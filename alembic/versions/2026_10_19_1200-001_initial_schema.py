"""initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 12:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ENUM

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

seat_type = ENUM('STANDARD', 'VIP', 'COUPLE', name='seat_type', create_type=False)
movie_status = ENUM('COMING_SOON', 'NOW_SHOWING', 'ENDED', name='movie_status', create_type=False)
showtime_status = ENUM('SCHEDULED', 'CANCELLED', 'FINISHED', name='showtime_status', create_type=False)
booking_status = ENUM('PENDING', 'CONFIRMED', 'EXPIRED', 'CANCELLED', name='booking_status', create_type=False)
promotion_status = ENUM('ACTIVE', 'INACTIVE', 'EXPIRED', name='promotion_status', create_type=False)
wallet_status = ENUM('AVAILABLE', 'USED', 'EXPIRED', name='wallet_status', create_type=False)
discount_type = ENUM('PERCENTAGE', 'FIXED_AMOUNT', name='discount_type', create_type=False)

ENUMS = [
    seat_type,
    movie_status,
    showtime_status,
    booking_status,
    promotion_status,
    wallet_status,
    discount_type,
]


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    bind = op.get_bind()
    for enum_type in ENUMS:
        enum_type.create(bind, checkfirst=True)

    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=200), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    # Create theaters, rooms and seats tables
    op.create_table(
        'theaters',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('address', sa.Text(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_theaters_city'), 'theaters', ['city'], unique=False)

    op.create_table(
        'rooms',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('theater_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['theater_id'], ['theaters.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_rooms_theater_id'), 'rooms', ['theater_id'], unique=False)

    op.create_table(
        'seats',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('room_id', sa.Integer(), nullable=False),
        sa.Column('row_name', sa.String(length=5), nullable=False),
        sa.Column('seat_number', sa.Integer(), nullable=False),
        sa.Column('seat_type', seat_type, nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False, server_default='true'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['room_id'], ['rooms.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('room_id', 'row_name', 'seat_number', name='uq_room_row_number')
    )
    op.create_index(op.f('ix_seats_room_id'), 'seats', ['room_id'], unique=False)

    # Create movies and showtimes tables
    op.create_table(
        'movies',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('release_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('age_rating', sa.String(length=10), nullable=True),
        sa.Column('status', movie_status, nullable=False, server_default='COMING_SOON'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_movies_title'), 'movies', ['title'], unique=False)
    op.create_index(op.f('ix_movies_status'), 'movies', ['status'], unique=False)

    op.create_table(
        'showtimes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('movie_id', sa.Integer(), nullable=False),
        sa.Column('room_id', sa.Integer(), nullable=False),
        sa.Column('show_date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('base_price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('status', showtime_status, nullable=False, server_default='SCHEDULED'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['movie_id'], ['movies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['room_id'], ['rooms.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_showtimes_movie_id'), 'showtimes', ['movie_id'], unique=False)
    op.create_index(op.f('ix_showtimes_room_id'), 'showtimes', ['room_id'], unique=False)
    op.create_index(op.f('ix_showtimes_show_date'), 'showtimes', ['show_date'], unique=False)

    # Create bookings and booking_seats tables
    op.create_table(
        'bookings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('booking_code', sa.String(length=20), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('showtime_id', sa.Integer(), nullable=False),
        sa.Column('number_of_seats', sa.Integer(), nullable=False),
        sa.Column('seat_amount', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('food_amount', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('discount_amount', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('total_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('final_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('status', booking_status, nullable=False, server_default='PENDING'),
        sa.Column('notes', sa.String(length=500), nullable=True),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cancellation_reason', sa.String(length=500), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['showtime_id'], ['showtimes.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('booking_code')
    )
    op.create_index(op.f('ix_bookings_user_id'), 'bookings', ['user_id'], unique=False)
    op.create_index(op.f('ix_bookings_showtime_id'), 'bookings', ['showtime_id'], unique=False)
    op.create_index(op.f('ix_bookings_status'), 'bookings', ['status'], unique=False)
    # Serves the expiry sweep: status = 'PENDING' AND created_at < cutoff
    op.create_index('ix_bookings_status_created_at', 'bookings', ['status', 'created_at'], unique=False)

    op.create_table(
        'booking_seats',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('booking_id', sa.Integer(), nullable=False),
        sa.Column('seat_id', sa.Integer(), nullable=False),
        sa.Column('showtime_id', sa.Integer(), nullable=False),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('released_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['booking_id'], ['bookings.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['seat_id'], ['seats.id']),
        sa.ForeignKeyConstraint(['showtime_id'], ['showtimes.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('booking_id', 'seat_id', name='uq_booking_seat')
    )
    op.create_index(op.f('ix_booking_seats_booking_id'), 'booking_seats', ['booking_id'], unique=False)
    op.create_index(op.f('ix_booking_seats_seat_id'), 'booking_seats', ['seat_id'], unique=False)
    op.create_index(op.f('ix_booking_seats_showtime_id'), 'booking_seats', ['showtime_id'], unique=False)

    # Create vouchers and coupons tables with their wallet entries
    op.create_table(
        'vouchers',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('voucher_code', sa.String(length=50), nullable=False),
        sa.Column('pin_code', sa.String(length=10), nullable=False),
        sa.Column('value', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.Column('min_purchase_amount', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('expiry_date', sa.Date(), nullable=True),
        sa.Column('status', promotion_status, nullable=False, server_default='ACTIVE'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('voucher_code')
    )
    op.create_index(op.f('ix_vouchers_expiry_date'), 'vouchers', ['expiry_date'], unique=False)
    op.create_index(op.f('ix_vouchers_status'), 'vouchers', ['status'], unique=False)

    op.create_table(
        'user_vouchers',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('voucher_id', sa.Integer(), nullable=False),
        sa.Column('status', wallet_status, nullable=False, server_default='AVAILABLE'),
        sa.Column('redeemed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('used_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('used_for_booking_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['voucher_id'], ['vouchers.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_user_vouchers_user_id'), 'user_vouchers', ['user_id'], unique=False)
    op.create_index(op.f('ix_user_vouchers_voucher_id'), 'user_vouchers', ['voucher_id'], unique=False)

    op.create_table(
        'coupons',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('coupon_code', sa.String(length=50), nullable=False),
        sa.Column('pin_code', sa.String(length=10), nullable=False),
        sa.Column('discount_type', discount_type, nullable=False),
        sa.Column('discount_value', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('max_discount_amount', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('min_purchase_amount', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.Column('usage_limit', sa.Integer(), nullable=True),
        sa.Column('usage_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('start_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('expiry_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', promotion_status, nullable=False, server_default='ACTIVE'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('coupon_code')
    )
    op.create_index(op.f('ix_coupons_expiry_at'), 'coupons', ['expiry_at'], unique=False)
    op.create_index(op.f('ix_coupons_status'), 'coupons', ['status'], unique=False)

    op.create_table(
        'user_coupons',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('coupon_id', sa.Integer(), nullable=False),
        sa.Column('status', wallet_status, nullable=False, server_default='AVAILABLE'),
        sa.Column('redeemed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('used_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('used_for_booking_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.ForeignKeyConstraint(['coupon_id'], ['coupons.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_user_coupons_user_id'), 'user_coupons', ['user_id'], unique=False)
    op.create_index(op.f('ix_user_coupons_coupon_id'), 'user_coupons', ['coupon_id'], unique=False)


def downgrade() -> None:
    op.drop_table('user_coupons')
    op.drop_table('coupons')
    op.drop_table('user_vouchers')
    op.drop_table('vouchers')
    op.drop_table('booking_seats')
    op.drop_table('bookings')
    op.drop_table('showtimes')
    op.drop_table('movies')
    op.drop_table('seats')
    op.drop_table('rooms')
    op.drop_table('theaters')
    op.drop_table('users')

    bind = op.get_bind()
    for enum_type in reversed(ENUMS):
        enum_type.drop(bind, checkfirst=True)
