"""
Tests for the asyncpg repositories, against a mocked connection.
"""

import logging
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from asyncpg import UniqueViolationError

from app.core.exceptions import DuplicateEmail
from app.repositories.booking_repo import BookingRepository
from app.repositories.car_repo import CarRepository
from app.repositories.user_repo import UserRepository


def _conn(fetchrow=None, fetch=None):
    conn = MagicMock()
    conn.fetchrow = AsyncMock(return_value=fetchrow)
    conn.fetch = AsyncMock(return_value=fetch or [])
    return conn


class TestUserRepository:
    @pytest.mark.asyncio
    async def test_create_writes_hash_to_password_column(self):
        conn = _conn(fetchrow={"id": 1, "name": "Ana", "email": "ana@x.com"})

        user = await UserRepository(conn).create("Ana", "ana@x.com", "$2b$10$digest")

        assert user == {"id": 1, "name": "Ana", "email": "ana@x.com"}
        sql, *args = conn.fetchrow.await_args.args
        assert "INSERT INTO users (name, email, password)" in sql
        assert "password" not in sql.split("RETURNING")[1]
        assert args == ["Ana", "ana@x.com", "$2b$10$digest"]

    @pytest.mark.asyncio
    async def test_duplicate_email_raises_and_logs(self, caplog):
        conn = _conn()
        conn.fetchrow.side_effect = UniqueViolationError("duplicate key value violates unique constraint")

        with caplog.at_level(logging.WARNING):
            with pytest.raises(DuplicateEmail):
                await UserRepository(conn).create("Ana", "ana@x.com", "$2b$10$digest")

        assert "email already registered" in caplog.text
        assert "$2b$10$digest" not in caplog.text

    @pytest.mark.asyncio
    async def test_get_by_email_exposes_password_hash(self):
        conn = _conn(fetchrow={"id": 1, "name": "Ana", "email": "ana@x.com", "password_hash": "h"})

        user = await UserRepository(conn).get_by_email("ana@x.com")

        assert user["password_hash"] == "h"
        sql, email = conn.fetchrow.await_args.args
        assert "password AS password_hash" in sql
        assert email == "ana@x.com"

    @pytest.mark.asyncio
    async def test_get_by_email_missing(self):
        assert await UserRepository(_conn()).get_by_email("nobody@x.com") is None


class TestCarRepository:
    @pytest.mark.asyncio
    async def test_lock_query_holds_key_share(self):
        conn = _conn(fetchrow={"id": 1, "name": "Civic", "details": "sedan", "price": Decimal("20000")})

        car = await CarRepository(conn).get_by_id_for_share(1)

        assert car["name"] == "Civic"
        sql, car_id = conn.fetchrow.await_args.args
        assert sql.rstrip(";").endswith("FOR KEY SHARE")
        assert car_id == 1

    @pytest.mark.asyncio
    async def test_list_all_ordered_by_id(self):
        conn = _conn(fetch=[{"id": 1}, {"id": 2}])

        cars = await CarRepository(conn).list_all()

        assert [c["id"] for c in cars] == [1, 2]
        assert "ORDER BY id" in conn.fetch.await_args.args[0]


class TestBookingRepository:
    @pytest.mark.asyncio
    async def test_get_for_user_filters_in_sql(self):
        conn = _conn()

        assert await BookingRepository(conn).get_for_user(booking_id=5, user_id=3) is None

        sql, booking_id, user_id = conn.fetchrow.await_args.args
        assert "WHERE b.id = $1 AND b.user_id = $2" in sql
        assert (booking_id, user_id) == (5, 3)

    @pytest.mark.asyncio
    async def test_list_for_user_filters_in_sql(self):
        conn = _conn(fetch=[{"id": 2, "car_name": "Civic"}])

        rows = await BookingRepository(conn).list_for_user(3)

        assert rows == [{"id": 2, "car_name": "Civic"}]
        sql, user_id = conn.fetch.await_args.args
        assert "WHERE b.user_id = $1" in sql
        assert "ORDER BY b.id DESC" in sql
        assert user_id == 3

    @pytest.mark.asyncio
    async def test_create_returns_row(self):
        row = {"id": 9, "user_id": 3, "car_id": 1, "travel_date": date(2025, 1, 1)}
        conn = _conn(fetchrow=row)

        assert await BookingRepository(conn).create(3, 1, date(2025, 1, 1)) == row
        assert conn.fetchrow.await_args.args[1:] == (3, 1, date(2025, 1, 1))
