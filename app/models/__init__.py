"""
SQLAlchemy models for the billing backend.
"""
from __future__ import annotations

import enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class SubscriptionStatus(str, enum.Enum):
    ACTIVE = "active"
    TRIALING = "trialing"
    PAST_DUE = "past_due"
    CANCELLED = "cancelled"


class CycleType(str, enum.Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    email = Column(Text, nullable=False, unique=True, index=True)
    name = Column(Text, nullable=False)
    hashed_password = Column(Text)
    email_verified = Column(Boolean, default=False, nullable=False)
    locale = Column(Text, nullable=False, default="en")
    timezone = Column(Text)
    is_admin = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    teams = relationship("Team", back_populates="user")


class Team(Base):
    __tablename__ = "teams"

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    is_personal = Column(Boolean, nullable=False)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="RESTRICT", onupdate="RESTRICT"),
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    user = relationship("User", back_populates="teams")
    subscriptions = relationship("Subscription", back_populates="team")


class Plan(Base):
    __tablename__ = "plans"
    __table_args__ = (CheckConstraint("price >= 0", name="ck_plans_price_non_negative"),)

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    # Minor currency units.
    price = Column(Integer, nullable=False)


class Subscription(Base):
    __tablename__ = "subscriptions"

    id = Column(Integer, primary_key=True)
    status = Column(
        Enum(SubscriptionStatus, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=SubscriptionStatus.ACTIVE,
    )
    team_id = Column(Integer, ForeignKey("teams.id"), nullable=False)
    plan_id = Column(Integer, ForeignKey("plans.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    team = relationship("Team", back_populates="subscriptions")
    plan = relationship("Plan")
    orders = relationship("Order", back_populates="subscription")


class SubscriptionActivation(Base):
    __tablename__ = "subscription_activations"

    id = Column(Integer, primary_key=True)
    activation_date = Column(DateTime(timezone=True), nullable=False)
    cycle_type = Column(
        Enum(CycleType, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    cycle_number = Column(Integer, nullable=False)
    amount_paid = Column(Integer, nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    paid_for = Column(Boolean, default=False, nullable=False)
    subscription_id = Column(Integer, ForeignKey("subscriptions.id"), nullable=False)
    subscription_activation_id = Column(
        Integer, ForeignKey("subscription_activations.id"), nullable=False
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    subscription = relationship("Subscription", back_populates="orders")
    activation = relationship("SubscriptionActivation")
