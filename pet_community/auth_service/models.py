from sqlalchemy import Column, String, DateTime, Enum
from datetime import datetime
import enum
import uuid

from .db import Base


class Role(str, enum.Enum):
    PET_OWNER = "PET_OWNER"
    SERVICE_PROVIDER = "SERVICE_PROVIDER"


class User(Base):
    __tablename__ = "users"
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String, unique=True, index=True, nullable=False)
    # Salted hash only; never serialized out of the service layer
    password = Column(String, nullable=False)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    avatar = Column(String, nullable=True)
    role = Column(Enum(Role, name="user_role"), nullable=False, default=Role.PET_OWNER)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
