# app/db/seed.py
import asyncio
import random
from datetime import date, timedelta
from decimal import Decimal
from faker import Faker
from tqdm import tqdm

from app.core.config import get_settings
from app.core.security import build_password_hasher
from app.db.session import connect_db_pool, close_db_pool

fake = Faker()

NUM_USERS = 50
NUM_CARS = 40
NUM_BOOKINGS = 5_000
BATCH_BOOKINGS = 1000
SEED_PASSWORD = "rental123"

CAR_MAKES = ["Civic", "Corolla", "Model 3", "Golf", "Octavia", "Sportage", "Tucson", "Qashqai"]
CAR_KINDS = ["sedan", "hatchback", "SUV", "estate", "EV"]

MIN_PRICE = 8_000
MAX_PRICE = 60_000


async def insert_user(conn, name: str, email: str, password_hash: str):
    sql = """
    INSERT INTO users (name, email, password)
    VALUES ($1, $2, $3)
    RETURNING id;
    """
    rec = await conn.fetchrow(sql, name, email, password_hash)
    return rec["id"]


async def insert_car(conn, name: str, details: str, price: Decimal):
    sql = """
    INSERT INTO cars (name, details, price)
    VALUES ($1, $2, $3)
    RETURNING id;
    """
    rec = await conn.fetchrow(sql, name, details, price)
    return rec["id"]


def random_travel_date(days_ahead: int = 180) -> date:
    return date.today() + timedelta(days=random.randint(0, days_ahead))


async def seed():
    settings = get_settings()
    hasher = build_password_hasher(settings)
    pool = await connect_db_pool(settings)

    async with pool.acquire() as conn:
        print("Creating users...")
        # one hash for everybody; bcrypt per user would dominate the run
        password_hash = hasher.hash(SEED_PASSWORD)
        user_ids = []
        for _ in range(NUM_USERS):
            uid = await insert_user(conn, fake.name(), fake.unique.email(), password_hash)
            user_ids.append(uid)

        print("Creating cars...")
        car_ids = []
        for _ in range(NUM_CARS):
            name = random.choice(CAR_MAKES)
            details = f"{random.choice(CAR_KINDS)}, {fake.color_name().lower()}, {random.randint(2015, 2025)}"
            price = Decimal(random.randint(MIN_PRICE, MAX_PRICE))
            car_ids.append(await insert_car(conn, name, details, price))

        if not car_ids or not user_ids:
            raise RuntimeError("No cars or users created, aborting seed")

        booking_sql = """
        INSERT INTO bookings (user_id, car_id, travel_date)
        VALUES ($1, $2, $3)
        """
        batch = []
        for _ in tqdm(range(NUM_BOOKINGS), desc="Generating bookings"):
            batch.append((random.choice(user_ids), random.choice(car_ids), random_travel_date()))
            if len(batch) >= BATCH_BOOKINGS:
                await conn.executemany(booking_sql, batch)
                batch.clear()

        if batch:
            await conn.executemany(booking_sql, batch)

        print(f"Seed complete. Every seeded user logs in with password '{SEED_PASSWORD}'.")

    await close_db_pool(pool)


if __name__ == "__main__":
    asyncio.run(seed())
