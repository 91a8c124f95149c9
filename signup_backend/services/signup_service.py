from typing import Any, List
import csv
import io
import logging

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from signup_backend.core.errors import ClientInputError, ConflictError, InternalError
from signup_backend.models.signup import Signup
from signup_backend.repositories.unit_of_work import AbstractUnitOfWork
from signup_backend.schemas.signup import SignupCreate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("first_name", "last_name", "email")
CSV_HEADER = "ID,First Name,Last Name,Email,Subscribed Date\n"
CSV_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class SignupService:
    """Service for email signup business logic."""

    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    def parse_submission(self, data: Any) -> SignupCreate:
        """Validate a decoded JSON body and return the sanitized signup.

        Raises:
            ClientInputError: If a field is missing/empty or the email is invalid
        """
        if not isinstance(data, dict) or not all(
            isinstance(data.get(field), str) and data.get(field)
            for field in REQUIRED_FIELDS
        ):
            raise ClientInputError("All fields are required")

        try:
            return SignupCreate(
                first_name=data["first_name"],
                last_name=data["last_name"],
                email=data["email"],
            )
        except ValidationError:
            raise ClientInputError("Invalid email address")

    async def subscribe(self, data: Any) -> Signup:
        """Store a new signup.

        Uniqueness of the email is left to the store's constraint so that
        concurrent duplicate submissions cannot both be inserted.

        Raises:
            ClientInputError: If the submission is invalid
            ConflictError: If the email is already subscribed
            InternalError: If the store fails for any other reason
        """
        signup_data = self.parse_submission(data)

        try:
            async with self.uow:
                signup = await self.uow.signups.create_signup(
                    first_name=signup_data.first_name,
                    last_name=signup_data.last_name,
                    email=signup_data.email,
                )
        except IntegrityError:
            logger.info("Duplicate signup rejected")
            raise ConflictError("This email is already subscribed")
        except SQLAlchemyError as e:
            logger.error(f"Database error while saving signup: {e}", exc_info=True)
            raise InternalError("Failed to save signup")

        logger.info(f"New signup stored with id {signup.id}")
        return signup

    async def list_signups(self) -> List[Signup]:
        """All signups, newest first."""
        return await self.uow.signups.list_newest_first()

    async def export_csv(self) -> str:
        """Render all signups as CSV, newest first.

        Text fields are quoted with embedded quotes doubled; the id is left
        unquoted.
        """
        signups = await self.list_signups()

        buffer = io.StringIO()
        buffer.write(CSV_HEADER)
        writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
        for signup in signups:
            writer.writerow(
                [
                    signup.id,
                    signup.first_name,
                    signup.last_name,
                    signup.email,
                    signup.created_at.strftime(CSV_DATE_FORMAT),
                ]
            )
        return buffer.getvalue()
