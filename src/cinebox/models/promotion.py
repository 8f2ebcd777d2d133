"""Status enums shared by vouchers and coupons."""

import enum


class PromotionStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    EXPIRED = "EXPIRED"


class WalletStatus(str, enum.Enum):
    """Status of a promotion redeemed into a user's wallet."""

    AVAILABLE = "AVAILABLE"
    USED = "USED"
    EXPIRED = "EXPIRED"
