import os

os.environ.setdefault("SECRET_KEY", "test-secret")

from contextlib import asynccontextmanager
from copy import deepcopy
from decimal import Decimal

import pytest
from asyncpg import ForeignKeyViolationError
from fastapi.testclient import TestClient

from app.api.v1 import deps
from app.core.config import Settings
from app.core.exceptions import DuplicateEmail
from app.main import create_app
from app.services.booking_service import BookingService


def foreign_key_violation(column: str, value) -> ForeignKeyViolationError:
    """Build the error Postgres raises for ``bookings.<column>``."""
    table = "cars" if column == "car_id" else "users"
    e = ForeignKeyViolationError(
        f'insert or update on table "bookings" violates foreign key constraint "bookings_{column}_fkey"'
    )
    e.constraint_name = f"bookings_{column}_fkey"
    e.detail = f'Key ({column})=({value}) is not present in table "{table}".'
    return e


class InMemoryStore:
    """Three tables with the same constraints the Postgres schema has."""

    def __init__(self):
        self.users: dict[int, dict] = {}
        self.cars: dict[int, dict] = {}
        self.bookings: dict[int, dict] = {}
        self._ids = {"users": 0, "cars": 0, "bookings": 0}

    def next_id(self, table: str) -> int:
        self._ids[table] += 1
        return self._ids[table]


class FakeConnection:
    def __init__(self, store: InMemoryStore):
        self.store = store

    @asynccontextmanager
    async def transaction(self):
        snapshot = deepcopy(self.store.bookings)
        try:
            yield
        except Exception:
            self.store.bookings = snapshot
            raise


class FakeUserRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def get_by_email(self, email):
        for user in self.store.users.values():
            if user["email"] == email:
                return dict(user)
        return None

    async def create(self, name, email, password_hash):
        if await self.get_by_email(email):
            raise DuplicateEmail()
        user_id = self.store.next_id("users")
        self.store.users[user_id] = {"id": user_id, "name": name, "email": email, "password_hash": password_hash}
        return {"id": user_id, "name": name, "email": email}


class FakeCarRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def list_all(self):
        return [dict(self.store.cars[k]) for k in sorted(self.store.cars)]

    async def get_by_id(self, car_id):
        car = self.store.cars.get(car_id)
        return dict(car) if car else None

    async def get_by_id_for_share(self, car_id):
        return await self.get_by_id(car_id)

    async def create(self, name, details, price):
        car_id = self.store.next_id("cars")
        self.store.cars[car_id] = {"id": car_id, "name": name, "details": details, "price": Decimal(price)}
        return dict(self.store.cars[car_id])


class FakeBookingRepository:
    def __init__(self, store: InMemoryStore):
        self.store = store

    async def create(self, user_id, car_id, travel_date):
        if car_id not in self.store.cars:
            raise foreign_key_violation("car_id", car_id)
        if user_id not in self.store.users:
            raise foreign_key_violation("user_id", user_id)
        booking_id = self.store.next_id("bookings")
        row = {"id": booking_id, "user_id": user_id, "car_id": car_id, "travel_date": travel_date}
        self.store.bookings[booking_id] = row
        return dict(row)

    def _joined(self, booking):
        car = self.store.cars[booking["car_id"]]
        user = self.store.users[booking["user_id"]]
        return {
            "id": booking["id"],
            "travel_date": booking["travel_date"],
            "car_name": car["name"],
            "car_details": car["details"],
            "car_price": car["price"],
            "user_name": user["name"],
            "user_email": user["email"],
        }

    async def list_for_user(self, user_id):
        rows = [b for b in self.store.bookings.values() if b["user_id"] == user_id]
        rows.sort(key=lambda b: b["id"], reverse=True)
        result = []
        for b in rows:
            joined = self._joined(b)
            joined.pop("user_name")
            joined.pop("user_email")
            result.append(joined)
        return result

    async def get_for_user(self, booking_id, user_id):
        booking = self.store.bookings.get(booking_id)
        if booking is None or booking["user_id"] != user_id:
            return None
        return self._joined(booking)


@pytest.fixture
def settings():
    return Settings(SECRET_KEY="test-secret", BCRYPT_ROUNDS=4)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def app(settings, store):
    app = create_app(settings)
    app.dependency_overrides[deps.get_user_repo] = lambda: FakeUserRepository(store)
    app.dependency_overrides[deps.get_car_repo] = lambda: FakeCarRepository(store)
    app.dependency_overrides[deps.get_booking_service] = lambda: BookingService(
        FakeConnection(store), FakeBookingRepository(store), FakeCarRepository(store)
    )
    return app


@pytest.fixture
def client(app):
    # no lifespan: the asyncpg pool is never opened
    return TestClient(app)


@pytest.fixture
def register_and_login(client):
    def _register_and_login(name="Ana", email="ana@x.com", password="secret"):
        resp = client.post("/register", json={"name": name, "email": email, "password": password})
        assert resp.status_code == 201
        resp = client.post("/login", json={"email": email, "password": password})
        assert resp.status_code == 200
        return {"Authorization": f"Bearer {resp.json()['token']}"}
    return _register_and_login
