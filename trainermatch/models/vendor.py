"""Tenant organizations: vendors, the colleges they work with, contacts and the college timeline."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from trainermatch.models.base import Base, new_id, utcnow
from trainermatch.models.enums import DEFAULT_COLLEGE_STATUS


class Vendor(Base):
    """A tenant organization posting training requirements."""

    __tablename__ = "vendors"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    users: Mapped[List["User"]] = relationship(back_populates="vendor", passive_deletes=True)
    colleges: Mapped[List["College"]] = relationship(
        back_populates="vendor", cascade="all, delete-orphan", passive_deletes=True
    )
    requirements: Mapped[List["Requirement"]] = relationship(
        back_populates="vendor", cascade="all, delete-orphan", passive_deletes=True
    )


class College(Base):
    """A college in a vendor's sales pipeline."""

    __tablename__ = "colleges"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(String(100), default=DEFAULT_COLLEGE_STATUS, nullable=False)
    last_action: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    vendor_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    vendor: Mapped["Vendor"] = relationship(back_populates="colleges")
    contacts: Mapped[List["Contact"]] = relationship(
        back_populates="college", cascade="all, delete-orphan", passive_deletes=True
    )
    requirements: Mapped[List["Requirement"]] = relationship(back_populates="college", passive_deletes=True)
    activities: Mapped[List["CollegeActivity"]] = relationship(
        back_populates="college",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CollegeActivity.created_at.desc()",
    )


class Contact(Base):
    __tablename__ = "contacts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    college_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("colleges.id", ondelete="CASCADE"), nullable=False, index=True
    )

    college: Mapped["College"] = relationship(back_populates="contacts")


class CollegeActivity(Base):
    """One entry in a college's pipeline timeline."""

    __tablename__ = "college_activities"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    college_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("colleges.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    performed_by: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    college: Mapped["College"] = relationship(back_populates="activities")
