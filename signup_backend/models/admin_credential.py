from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint
from sqlalchemy.sql import func
from signup_backend.models import Base

SINGLETON_ID = 1


class AdminCredential(Base):
    """The one admin password row. Its presence means setup has happened."""

    __tablename__ = "admin_credentials"
    __table_args__ = (CheckConstraint("id = 1", name="ck_admin_credentials_singleton"),)

    id = Column(Integer, primary_key=True, autoincrement=False, default=SINGLETON_ID)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
