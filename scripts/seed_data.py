#!/usr/bin/env python3
"""
Development Seed Script

Creates a vendor with an admin login, colleges, trainers, requirements,
matches, sessions and a few documents. Safe to re-run: does nothing when
the admin account already exists.

Usage: python scripts/seed_data.py
Login: admin@trainermatch.dev / admin12345
"""
import sys
sys.path.insert(0, '.')

from datetime import datetime, timedelta

from sqlalchemy import select

from trainermatch.core.auth import hash_password
from trainermatch.core.logging_config import setup_logging
from trainermatch.db.mongodb import COLLECTIONS, get_collection, init_mongo_indexes
from trainermatch.db.postgres import get_db_session, init_db
from trainermatch.models import (
    PROPOSAL_SENT_STATUS, College, CollegeActivity, CollegeActivityType, Contact, Match, MatchStatus,
    Requirement, RequirementStatus, SessionStatus, Trainer, TrainingSession, User, UserRole, Vendor
)

ADMIN_EMAIL = "admin@trainermatch.dev"
ADMIN_PASSWORD = "admin12345"

COLLEGES = [
    ("Stanford University", "Stanford, CA"),
    ("MIT", "Cambridge, MA"),
    ("University of Toronto", "Toronto"),
    ("National University of Singapore", "Singapore"),
]

TRAINERS = [
    ("Alice Johnson", "alice@example.com", ["Python", "Data Science", "Machine Learning"], 80, "New York, NY"),
    ("Bob Smith", "bob@example.com", ["Java", "Spring Boot", "Microservices"], 70, "San Francisco, CA"),
    ("Charlie Brown", "charlie@example.com", ["React", "Next.js", "TypeScript"], 60, "Austin, TX"),
    ("Diana Prince", "diana@example.com", ["AWS", "Cloud Computing", "DevOps"], 90, "Seattle, WA"),
    ("Evan Wright", "evan@example.com", ["Cybersecurity", "Ethical Hacking"], 85, "Chicago, IL"),
]

REQUIREMENTS = [
    ("Python Bootcamp", ["python", "data science"], RequirementStatus.OPEN),
    ("Java Advanced", ["java", "threading"], RequirementStatus.OPEN),
    ("React Workshop", ["react", "frontend"], RequirementStatus.COMPLETED),
    ("AWS Certification Prep", ["aws", "cloud"], RequirementStatus.IN_PROGRESS),
    ("Mobile App Dev", ["flutter", "mobile"], RequirementStatus.DRAFT),
    ("Agile Methodologies", [], RequirementStatus.OPEN),
]

DOCUMENTS = [
    ("Q1 Training Proposal", "PROPOSAL", "Proposals"),
    ("Invoice #1001", "INVOICE", "Invoices"),
    ("MIT NDA", "CONTRACT", "MIT"),
    ("Training Materials v1", "OTHER", "Materials"),
]


def main():
    setup_logging()
    init_db()
    now = datetime.utcnow()

    with get_db_session() as db:
        if db.scalar(select(User.id).where(User.email == ADMIN_EMAIL)):
            print("Seed data already present, nothing to do.")
            return

        vendor = Vendor(name="Acme Training Co", description="Seeded vendor organization")
        db.add(vendor)
        db.flush()

        db.add(User(email=ADMIN_EMAIL, password_hash=hash_password(ADMIN_PASSWORD),
                    role=UserRole.VENDOR_ADMIN, vendor_id=vendor.id))

        colleges = []
        for i, (name, location) in enumerate(COLLEGES):
            college = College(
                name=name, location=location, vendor_id=vendor.id,
                contacts=[Contact(name=f"{name} Placement Office", email=None)],
                activities=[CollegeActivity(type=CollegeActivityType.STATUS_CHANGE,
                                            description="College created and Proposal Sent to Draft.",
                                            performed_by="System")],
            )
            # The first college waits on a proposal, so the follow-up sweep has work
            if i == 0:
                college.status = PROPOSAL_SENT_STATUS
                college.updated_at = now - timedelta(days=5)
            db.add(college)
            colleges.append(college)

        trainers = []
        for name, email, skills, rate, location in TRAINERS:
            trainer = Trainer(name=name, email=email, skills=skills, tags=skills,
                              hourly_rate=rate, location=location)
            db.add(trainer)
            trainers.append(trainer)
        db.flush()

        requirements = []
        for i, (title, tags, status) in enumerate(REQUIREMENTS):
            requirement = Requirement(
                title=title, tags=tags, status=status, vendor_id=vendor.id,
                college_id=colleges[i % len(colleges)].id,
                created_at=now - timedelta(days=30 * i),
                budget_min=50, budget_max=120,
            )
            db.add(requirement)
            requirements.append(requirement)
        db.flush()

        # Spread matches over the last few months for the analytics charts
        for i, requirement in enumerate(requirements):
            for j, trainer in enumerate(trainers[:3]):
                db.add(Match(
                    requirement_id=requirement.id,
                    trainer_id=trainer.id,
                    score=round(0.9 - 0.15 * j, 2),
                    status=MatchStatus.ACCEPTED if j == 0 else MatchStatus.PENDING,
                    created_at=now - timedelta(days=30 * i + j),
                ))

        for i, trainer in enumerate(trainers[:3]):
            start = now + timedelta(days=7 * (i + 1))
            db.add(TrainingSession(
                title=f"{requirements[i].title} - Session 1",
                status=SessionStatus.SCHEDULED,
                start_time=start, end_time=start + timedelta(hours=2),
                location="Main Hall",
                college_id=colleges[i].id, trainer_id=trainer.id,
                requirement_id=requirements[i].id,
            ))

    init_mongo_indexes()
    documents = get_collection(COLLECTIONS["documents"])
    documents.insert_many([
        {
            "title": title, "type": doc_type, "url": f"/static/uploads/seed-{i}.pdf",
            "folder_name": folder, "college_id": colleges[i % len(colleges)].id,
            "trainer_id": None, "requirement_id": requirements[i].id,
            "created_at": now - timedelta(days=i),
        }
        for i, (title, doc_type, folder) in enumerate(DOCUMENTS)
    ])

    print("Seed complete")
    print(f"    Vendor: {vendor.name}")
    print(f"    Login: {ADMIN_EMAIL} / {ADMIN_PASSWORD}")


if __name__ == "__main__":
    main()
