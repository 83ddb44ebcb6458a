"""Seed script to populate database with an admin account and a starter week grid."""
import asyncio
from datetime import time

from sqlalchemy import select

from lineup.core.security import hash_password
from lineup.db.base import Base
from lineup.db.engine import async_session_factory, engine
from lineup.models.producer_role import ProducerRole
from lineup.models.schedule_slot import ScheduleSlot
from lineup.models.user import User, UserRole
from lineup.models.worker import Worker
import lineup.models  # noqa: F401

ADMIN_EMAIL = "admin@lineup-radio.org"

# (day_of_week, start, end, show, host); Sunday = 0
MASTER_GRID = [
    (day, time(7, 0), time(9, 0), "Morning", "Dana") for day in range(0, 5)
] + [
    (day, time(9, 0), time(12, 0), "Midday", None) for day in range(0, 5)
] + [
    (5, time(10, 0), time(12, 0), "Friday Magazine", "Noa"),
]


async def seed():
    print("Seeding database...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as db:
        result = await db.execute(select(User).where(User.email == ADMIN_EMAIL))
        if result.scalar_one_or_none():
            print("Seed data already exists, skipping.")
            return

        db.add(User(
            email=ADMIN_EMAIL,
            hashed_password=hash_password("admin123"),
            role=UserRole.ADMIN,
            is_active=True,
            display_name="Admin",
        ))

        for order, name in enumerate(["Editor", "Producer", "Assistant producer"]):
            db.add(ProducerRole(name=name, display_order=order))

        db.add(Worker(name="Dana", department="producers", position="Senior producer"))
        db.add(Worker(name="Noa", department="producers"))

        for day, start, end, show, host in MASTER_GRID:
            db.add(ScheduleSlot(
                day_of_week=day,
                start_time=start,
                end_time=end,
                show_name=show,
                host_name=host,
                color="green",
                is_master=True,
                is_recurring=True,
            ))

        await db.commit()
        print("Seed data created:")
        print(f"  Admin: {ADMIN_EMAIL} / admin123")
        print(f"  Master slots: {len(MASTER_GRID)}")


if __name__ == "__main__":
    asyncio.run(seed())
