import pytest
from sqlalchemy.exc import IntegrityError

from signup_backend.models.admin_credential import AdminCredential
from signup_backend.models.signup import Signup
from signup_backend.repositories.admin_credential_repository import (
    AdminCredentialRepository,
)
from signup_backend.repositories.signup_repository import SignupRepository


class TestSignupModel:
    @pytest.mark.asyncio
    async def test_create_signup(self, async_session):
        repo = SignupRepository(async_session)
        signup = await repo.create_signup(
            first_name="Ada", last_name="Lovelace", email="ada@example.com"
        )
        await async_session.commit()

        assert signup.id is not None
        assert signup.created_at is not None
        assert [s.email for s in await repo.list_newest_first()] == ["ada@example.com"]
        assert await repo.count() == 1

    @pytest.mark.asyncio
    async def test_email_is_unique(self, async_session):
        async_session.add(Signup(first_name="A", last_name="A", email="dup@example.com"))
        await async_session.commit()

        async_session.add(Signup(first_name="B", last_name="B", email="dup@example.com"))
        with pytest.raises(IntegrityError):
            await async_session.commit()
        await async_session.rollback()

        assert await SignupRepository(async_session).count() == 1


class TestAdminCredentialModel:
    @pytest.mark.asyncio
    async def test_singleton_lifecycle(self, async_session):
        repo = AdminCredentialRepository(async_session)
        assert await repo.singleton_exists() is False
        assert await repo.get_singleton() is None

        await repo.create_singleton("hash-value")
        await async_session.commit()

        assert await repo.singleton_exists() is True
        credential = await repo.get_singleton()
        assert credential.id == 1
        assert credential.password_hash == "hash-value"

    @pytest.mark.asyncio
    async def test_only_one_row_allowed(self, async_session):
        async_session.add(AdminCredential(id=2, password_hash="other"))
        with pytest.raises(IntegrityError):
            await async_session.commit()
