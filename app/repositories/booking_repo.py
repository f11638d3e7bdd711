from datetime import date
from typing import List, Optional
from asyncpg import Connection


class BookingRepository:
    """Bookings are always read through the owner's id."""

    def __init__(self, conn: Connection):
        self.conn = conn

    async def create(self, user_id: int, car_id: int, travel_date: date) -> dict:
        sql = """
            INSERT INTO bookings (user_id, car_id, travel_date)
            VALUES ($1, $2, $3)
            RETURNING id, user_id, car_id, travel_date;
        """
        rec = await self.conn.fetchrow(sql, user_id, car_id, travel_date)
        if not rec:
            raise Exception("Failed to insert booking.")
        return dict(rec)

    async def list_for_user(self, user_id: int) -> List[dict]:
        sql = """
            SELECT
                b.id,
                b.travel_date,
                c.name AS car_name,
                c.details AS car_details,
                c.price AS car_price
            FROM bookings b
            JOIN cars c ON b.car_id = c.id
            WHERE b.user_id = $1
            ORDER BY b.id DESC;
        """
        rows = await self.conn.fetch(sql, user_id)
        return [dict(r) for r in rows]

    async def get_for_user(self, booking_id: int, user_id: int) -> Optional[dict]:
        sql = """
            SELECT
                b.id,
                b.travel_date,
                c.name AS car_name,
                c.details AS car_details,
                c.price AS car_price,
                u.name AS user_name,
                u.email AS user_email
            FROM bookings b
            JOIN cars c ON b.car_id = c.id
            JOIN users u ON b.user_id = u.id
            WHERE b.id = $1 AND b.user_id = $2;
        """
        rec = await self.conn.fetchrow(sql, booking_id, user_id)
        return dict(rec) if rec else None
