"""Referential integrity declared on the relational schema (ON DELETE rules)."""

from datetime import datetime

import pytest
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError

from trainermatch.db.postgres import execute_raw_sql
from trainermatch.models import (
    College, CollegeActivity, Contact, Match, Proposal, Rating, Requirement, Trainer, TrainerAvailability,
    TrainingSession, User, UserRole, Vendor
)


def count(db, model):
    return db.scalar(select(func.count()).select_from(model))


class TestVendorDeletion:

    def test_cascades_to_colleges_and_requirements(self, db, vendor, college, make_requirement):
        db.add(Contact(name="Dean", college_id=college.id))
        make_requirement()
        db.commit()

        db.execute(delete(Vendor).where(Vendor.id == vendor.id))
        db.commit()

        assert count(db, College) == 0
        assert count(db, Contact) == 0
        assert count(db, Requirement) == 0

    def test_users_are_detached_not_deleted(self, db, vendor, vendor_admin):
        db.execute(delete(Vendor).where(Vendor.id == vendor.id))
        db.commit()
        db.expire_all()

        user = db.get(User, vendor_admin.id)
        assert user is not None
        assert user.vendor_id is None


class TestCollegeDeletion:

    def test_contacts_and_timeline_cascade(self, db, college, make_requirement):
        db.add_all([
            Contact(name="Dean", college_id=college.id),
            CollegeActivity(college_id=college.id, type="NOTE", description="Called the dean"),
        ])
        requirement = make_requirement(college_id=college.id)
        db.commit()

        db.execute(delete(College).where(College.id == college.id))
        db.commit()
        db.expire_all()

        assert count(db, Contact) == 0
        assert count(db, CollegeActivity) == 0
        assert db.get(Requirement, requirement.id).college_id is None


class TestTrainerDeletion:

    def test_dependents_cascade_and_sessions_are_kept(self, db, make_trainer, make_requirement):
        trainer = make_trainer("Alice")
        requirement = make_requirement()
        db.add_all([
            Match(requirement_id=requirement.id, trainer_id=trainer.id, score=0.9),
            Proposal(requirement_id=requirement.id, trainer_id=trainer.id),
            Rating(trainer_id=trainer.id, score=5),
            TrainerAvailability(trainer_id=trainer.id, date=datetime(2025, 5, 1),
                                start_time=datetime(2025, 5, 1, 9), end_time=datetime(2025, 5, 1, 12)),
            TrainingSession(title="Kickoff", trainer_id=trainer.id,
                            start_time=datetime(2025, 5, 2, 9), end_time=datetime(2025, 5, 2, 11)),
        ])
        db.commit()

        db.execute(delete(Trainer).where(Trainer.id == trainer.id))
        db.commit()
        db.expire_all()

        assert count(db, Match) == 0
        assert count(db, Proposal) == 0
        assert count(db, Rating) == 0
        assert count(db, TrainerAvailability) == 0
        session = db.scalar(select(TrainingSession))
        assert session.trainer_id is None

    def test_user_deletion_unlinks_profile(self, db, trainer_user):
        user, trainer = trainer_user

        db.execute(delete(User).where(User.id == user.id))
        db.commit()
        db.expire_all()

        assert db.get(Trainer, trainer.id).user_id is None


class TestRequirementDeletion:

    def test_matches_cascade_and_sessions_are_kept(self, db, college, make_requirement, make_trainer):
        requirement = make_requirement(college_id=college.id)
        trainer = make_trainer("Bob")
        db.add_all([
            Match(requirement_id=requirement.id, trainer_id=trainer.id, score=0.5),
            TrainingSession(title="Kickoff", requirement_id=requirement.id, college_id=college.id,
                            start_time=datetime(2025, 5, 2, 9), end_time=datetime(2025, 5, 2, 11)),
        ])
        db.commit()

        db.execute(delete(Requirement).where(Requirement.id == requirement.id))
        db.commit()
        db.expire_all()

        assert count(db, Match) == 0
        session = db.scalar(select(TrainingSession))
        assert session.requirement_id is None
        assert session.college_id == college.id


class TestConstraints:

    def test_match_pair_is_unique(self, db, make_requirement, make_trainer):
        requirement, trainer = make_requirement(), make_trainer("Alice")
        db.add(Match(requirement_id=requirement.id, trainer_id=trainer.id, score=0.5))
        db.commit()

        db.add(Match(requirement_id=requirement.id, trainer_id=trainer.id, score=0.6))
        with pytest.raises(IntegrityError):
            db.commit()
        db.rollback()

    def test_requirement_needs_existing_vendor(self, db):
        db.add(Requirement(title="Orphan", vendor_id="no-such-vendor"))
        with pytest.raises(IntegrityError):
            db.commit()
        db.rollback()

    def test_user_email_is_unique(self, db, make_user):
        make_user(UserRole.VENDOR_USER, email="dup@example.com")

        db.add(User(email="dup@example.com", role=UserRole.TRAINER))
        with pytest.raises(IntegrityError):
            db.commit()
        db.rollback()


class TestRawSql:

    def test_rows_come_back_as_dicts(self, vendor):
        assert execute_raw_sql("SELECT name FROM vendors WHERE id = :id", {"id": vendor.id}) == [
            {"name": "Acme Training"}
        ]
