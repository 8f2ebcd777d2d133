"""Domain exceptions for booking state transitions."""


class BookingError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class BookingNotFoundError(BookingError):
    def __init__(self, booking_id: int):
        self.booking_id = booking_id
        super().__init__(f"Booking {booking_id} not found", status_code=404)


class InvalidBookingTransition(BookingError):
    def __init__(self, booking_code: str, current: str, target: str):
        self.booking_code = booking_code
        self.current = current
        self.target = target
        super().__init__(
            f"Booking {booking_code} cannot move from {current} to {target}",
            status_code=409,
        )


class BookingExpiredError(BookingError):
    """Raised when a booking is confirmed after its seat hold lapsed."""

    def __init__(self, booking_id: int, booking_code: str):
        self.booking_id = booking_id
        self.booking_code = booking_code
        super().__init__(
            f"Booking {booking_code} has expired. Please book again.",
            status_code=410,
        )
