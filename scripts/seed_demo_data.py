from careersync.config import load_settings
from careersync.db import init_db
from careersync.models.db_models import Job, User


def main():
    SessionLocal = init_db(load_settings())
    db = SessionLocal()

    try:
        user = db.query(User).filter(User.email == "test@example.com").first()
        if user:
            print(" Demo data already exists")
            return

        db.add(
            User(
                email="test@example.com",
                name="Test User",
                hashed_password="dev",
                skills=["Python", "SQL", "REST APIs"],
                experience_level="mid",
            )
        )
        db.add_all(
            [
                Job(
                    title="Backend Engineer",
                    company_name="Acme Labs",
                    description="Design and operate the public REST API.",
                    requirements="5+ years building web services.",
                    skills=["Python", "SQL", "APIs"],
                    location="Remote",
                    category="engineering",
                    experience_level="mid",
                ),
                Job(
                    title="Data Analyst",
                    company_name="Northwind",
                    description="Own reporting for the sales organisation.",
                    requirements="Strong SQL and dashboarding skills.",
                    skills=["SQL", "Tableau"],
                    location="Berlin",
                    category="data",
                    experience_level="entry",
                ),
            ]
        )
        db.commit()
        print(" Demo data created")
    finally:
        db.close()


if __name__ == "__main__":
    main()
