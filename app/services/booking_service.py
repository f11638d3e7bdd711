# app/services/booking_service.py

from datetime import date
from asyncpg import Connection, ForeignKeyViolationError

from app.core.exceptions import NotFound, ValidationError
from app.repositories.booking_repo import BookingRepository
from app.repositories.car_repo import CarRepository


CAR_NOT_FOUND = "Car not found"
BOOKING_NOT_FOUND = "Booking not found"
CAR_FOREIGN_KEY = "bookings_car_id_fkey"


def _is_car_reference(e: ForeignKeyViolationError) -> bool:
    if getattr(e, "constraint_name", None) == CAR_FOREIGN_KEY:
        return True
    return "(car_id)" in (getattr(e, "detail", None) or "")


class BookingService:
    def __init__(self, conn: Connection, booking_repo: BookingRepository, car_repo: CarRepository):
        self.conn = conn
        self.booking_repo = booking_repo
        self.car_repo = car_repo

    async def create_booking(self, user_id: int, car_id, travel_date) -> dict:
        """Book ``car_id`` for ``user_id``; ``user_id`` must come from verified claims.

        The car lookup and the insert share one transaction, and the car row is
        held with FOR KEY SHARE so it cannot be deleted in between. Double
        booking the same car on the same date is allowed.
        """
        if isinstance(car_id, bool) or not isinstance(car_id, int) or car_id <= 0:
            raise ValidationError("car_id and travel_date are required")
        if not isinstance(travel_date, date):
            raise ValidationError("car_id and travel_date are required")

        async with self.conn.transaction():
            car = await self.car_repo.get_by_id_for_share(car_id)
            if car is None:
                raise NotFound(CAR_NOT_FOUND)

            try:
                return await self.booking_repo.create(user_id=user_id, car_id=car_id, travel_date=travel_date)
            except ForeignKeyViolationError as e:
                # a dangling user_id is a server fault, not a missing car
                if not _is_car_reference(e):
                    raise
                raise NotFound(CAR_NOT_FOUND) from e

    async def list_bookings_for_user(self, user_id: int) -> list[dict]:
        return await self.booking_repo.list_for_user(user_id)

    async def get_booking_for_user(self, user_id: int, booking_id: int) -> dict:
        # someone else's booking and a missing one are the same answer
        booking = await self.booking_repo.get_for_user(booking_id=booking_id, user_id=user_id)
        if booking is None:
            raise NotFound(BOOKING_NOT_FOUND)
        return booking
