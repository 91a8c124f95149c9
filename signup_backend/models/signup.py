from sqlalchemy import Column, Integer, String, DateTime, Index
from sqlalchemy.sql import func
from signup_backend.models import Base


class Signup(Base):
    __tablename__ = "signups"
    __table_args__ = (
        Index("ix_signups_email", "email", unique=True),
        Index("ix_signups_created_at", "created_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    # Stored trimmed and lower-cased; uniqueness is enforced by the store
    email = Column(String(254), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
