"""SQLAlchemy ORM models."""

from cinebox.models.base import Base
from cinebox.models.booking import Booking, BookingStatus
from cinebox.models.booking_seat import BookingSeat
from cinebox.models.coupon import Coupon, DiscountType, UserCoupon
from cinebox.models.movie import Movie, MovieStatus
from cinebox.models.promotion import PromotionStatus, WalletStatus
from cinebox.models.room import Room
from cinebox.models.seat import Seat, SeatType
from cinebox.models.showtime import Showtime, ShowtimeStatus
from cinebox.models.theater import Theater
from cinebox.models.user import User
from cinebox.models.voucher import UserVoucher, Voucher

__all__ = [
    "Base",
    "Booking",
    "BookingSeat",
    "BookingStatus",
    "Coupon",
    "DiscountType",
    "Movie",
    "MovieStatus",
    "PromotionStatus",
    "Room",
    "Seat",
    "SeatType",
    "Showtime",
    "ShowtimeStatus",
    "Theater",
    "User",
    "UserCoupon",
    "UserVoucher",
    "Voucher",
    "WalletStatus",
]
