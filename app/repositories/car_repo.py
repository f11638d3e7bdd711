from decimal import Decimal
from asyncpg import Connection


class CarRepository:
    """Read/insert access to the ``cars`` catalog."""

    def __init__(self, conn: Connection):
        self.conn = conn

    # ------------------ Retrieval Methods ------------------ #

    async def list_all(self) -> list[dict]:
        sql = "SELECT id, name, details, price FROM cars ORDER BY id;"
        records = await self.conn.fetch(sql)
        return [dict(record) for record in records]

    async def get_by_id(self, car_id: int) -> dict | None:
        sql = "SELECT id, name, details, price FROM cars WHERE id = $1;"
        record = await self.conn.fetchrow(sql, car_id)
        return dict(record) if record else None

    # ------------------ Lock Methods ------------------ #

    async def get_by_id_for_share(self, car_id: int) -> dict | None:
        # blocks DELETE of the row until the surrounding transaction ends
        sql = "SELECT id, name, details, price FROM cars WHERE id = $1 FOR KEY SHARE;"
        record = await self.conn.fetchrow(sql, car_id)
        return dict(record) if record else None

    # ------------------ Creation ------------------ #

    async def create(self, name: str, details: str, price: Decimal) -> dict:
        sql = """
            INSERT INTO cars (name, details, price)
            VALUES ($1, $2, $3)
            RETURNING id, name, details, price;
        """
        record = await self.conn.fetchrow(sql, name, details, price)
        return dict(record)
