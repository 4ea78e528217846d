"""
Resume Builder Database Seeder

Creates a demo user with two resumes:
- A public "modern" resume with every section filled in
- A private, empty draft
"""

import sys
sys.path.insert(0, ".")

from app.db.session import SessionLocal, engine
from app.db.base import Base
from app.models.user import User
from app.models.resume import Resume
from app.core.security import get_password_hash

DEMO_EMAIL = "demo@resumebuilder.dev"


def seed_database():
    """Seed the database with demo data."""

    # Create all tables
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        # Check if already seeded
        existing = db.query(User).filter(User.email == DEMO_EMAIL).first()
        if existing:
            print("Database already seeded. Skipping...")
            return

        print("Seeding database...")

        # 1. Create the demo user
        demo_user = User(
            name="Alex Rivera",
            email=DEMO_EMAIL,
            hashed_password=get_password_hash("demo12345"),
        )
        db.add(demo_user)
        db.flush()  # Get IDs

        # 2. A complete, shareable resume
        showcase = Resume(
            user_id=demo_user.id,
            title="Backend Engineer",
            public=True,
            template="modern",
            accent_color="#0ea5e9",
            professional_summary=(
                "Backend engineer with 5 years building Python APIs and data "
                "pipelines, focused on reliability and clean service boundaries."
            ),
            skills=["Python", "FastAPI", "PostgreSQL", "Docker", "AWS"],
            personal_info={
                "image": "",
                "full_name": "Alex Rivera",
                "profession": "Backend Engineer",
                "email": DEMO_EMAIL,
                "phone": "+1 555 0100",
                "location": "Austin, TX",
                "linkedin": "linkedin.com/in/alexrivera",
                "website": "alexrivera.dev",
            },
            experience=[
                {
                    "company": "Northwind Logistics",
                    "position": "Senior Backend Engineer",
                    "start_date": "2022-03",
                    "end_date": None,
                    "description": "Led the rewrite of the shipment tracking API, cutting p95 latency by 40%.",
                    "is_current": True,
                },
                {
                    "company": "Brightline Analytics",
                    "position": "Software Engineer",
                    "start_date": "2019-06",
                    "end_date": "2022-02",
                    "description": "Built ETL jobs moving 2TB/day into the reporting warehouse.",
                    "is_current": False,
                },
            ],
            projects=[
                {
                    "name": "feedcheck",
                    "type": "Open source",
                    "description": "CLI that validates RSS and Atom feeds against the specs.",
                },
            ],
            education=[
                {
                    "institution": "University of Texas at Austin",
                    "degree": "B.S.",
                    "field": "Computer Science",
                    "graduation_date": "2019-05",
                    "gpa": "3.7",
                },
            ],
        )
        db.add(showcase)

        # 3. An empty private draft
        draft = Resume(user_id=demo_user.id, title="Draft")
        db.add(draft)

        # Commit all changes
        db.commit()

        print("✅ Database seeded successfully!")
        print("\n📋 Created Users:")
        print(f"   - {DEMO_EMAIL} (password: demo12345)")
        print("\n📄 Resumes:")
        print(f"   - #{showcase.id} Backend Engineer [PUBLIC, modern]")
        print(f"   - #{draft.id} Draft [PRIVATE, classic]")

    except Exception as e:
        db.rollback()
        print(f"❌ Error seeding database: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
