"""Script to seed practitioners for local development."""

import asyncio

from sqlalchemy.dialects.postgresql import insert

from dentwise.database import engine
from dentwise.models.doctors import doctors

SEED_DOCTORS = [
    {
        "name": "Dr. Sarah Chen",
        "email": "sarah.chen@dentwise.dev",
        "phone": "+1 555 0101",
        "speciality": "General Dentistry",
        "bio": "Routine check-ups, cleanings and fillings.",
        "image_url": "https://images.dentwise.dev/doctors/sarah-chen.png",
        "gender": "FEMALE",
    },
    {
        "name": "Dr. Michael Rodriguez",
        "email": "michael.rodriguez@dentwise.dev",
        "phone": "+1 555 0102",
        "speciality": "Orthodontics",
        "bio": "Braces, aligners and bite correction.",
        "image_url": "https://images.dentwise.dev/doctors/michael-rodriguez.png",
        "gender": "MALE",
    },
    {
        "name": "Dr. Priya Patel",
        "email": "priya.patel@dentwise.dev",
        "phone": "+1 555 0103",
        "speciality": "Pediatric Dentistry",
        "bio": "Dental care for children and teens.",
        "image_url": "https://images.dentwise.dev/doctors/priya-patel.png",
        "gender": "FEMALE",
    },
]


async def seed_doctors() -> None:
    """Insert seed practitioners, skipping ones that already exist."""
    async with engine.begin() as conn:
        result = await conn.execute(
            insert(doctors)
            .values(SEED_DOCTORS)
            .on_conflict_do_nothing(index_elements=[doctors.c.email])
            .returning(doctors.c.name)
        )
        created = result.scalars().all()

    await engine.dispose()
    print(f"✓ Seeded {len(created)} doctor(s)")


if __name__ == "__main__":
    asyncio.run(seed_doctors())
