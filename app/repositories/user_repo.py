import logging
from typing import Optional
from asyncpg import Connection, UniqueViolationError

from app.core.exceptions import DuplicateEmail

# the digest lives in the legacy ``password`` column
USER_COLUMNS = "id, name, email, password AS password_hash"


class UserRepository:

    def __init__(self, conn: Connection):
        self.conn = conn

    async def get_by_email(self, email: str) -> Optional[dict]:
        sql = f"SELECT {USER_COLUMNS} FROM users WHERE email = $1;"
        record = await self.conn.fetchrow(sql, email)
        return dict(record) if record else None

    async def create(self, name: str, email: str, password_hash: str) -> dict:
        sql = """
            INSERT INTO users (name, email, password)
            VALUES ($1, $2, $3)
            RETURNING id, name, email;
        """
        try:
            record = await self.conn.fetchrow(sql, name, email, password_hash)
        except UniqueViolationError as e:
            logging.warning("Registration rejected: email already registered")
            raise DuplicateEmail() from e
        return dict(record)
