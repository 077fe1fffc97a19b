# models.py
import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    AGENT = "agent"


class GadgetStatus(str, enum.Enum):
    AVAILABLE = "Available"
    DEPLOYED = "Deployed"
    DESTROYED = "Destroyed"
    DECOMMISSIONED = "Decommissioned"


VALID_STATUSES = [status.value for status in GadgetStatus]


def _new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserDB(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(128), nullable=False)
    role = Column(String(20), nullable=False, default=UserRole.AGENT.value)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)


class GadgetDB(Base):
    __tablename__ = "gadgets"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    codename = Column(String(255), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, index=True, default=GadgetStatus.AVAILABLE.value)
    mission_success_probability = Column(Integer, nullable=False)
    self_destruct_code = Column(String(9), nullable=True)
    decommissioned_at = Column(DateTime(timezone=True), nullable=True)
    self_destruct_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
