import base64

import pytest

from signup_backend.core.security import (
    hash_password,
    parse_basic_credentials,
    verify_password,
)


class TestPasswordHashing:
    """Test the admin password hash format."""

    def test_hash_is_base64_sha256(self):
        assert hash_password("password") == "XohImNooBHFR0OVvjcYpJ3NgPQ1qq73WKhHvch0VQtg="

    def test_hash_is_deterministic(self):
        assert hash_password("s3cret-password") == hash_password("s3cret-password")
        assert hash_password("s3cret-password") != hash_password("s3cret-Password")

    def test_hash_of_unicode_password(self):
        hashed = hash_password("pässwörd")
        assert len(base64.b64decode(hashed)) == 32

    def test_verify_password(self):
        hashed = hash_password("correct horse battery")
        assert verify_password("correct horse battery", hashed) is True
        assert verify_password("correct horse", hashed) is False
        assert verify_password("", hashed) is False


def encode(value: str) -> str:
    return "Basic " + base64.b64encode(value.encode("utf-8")).decode("ascii")


class TestBasicCredentials:
    """Test Authorization header parsing."""

    def test_username_and_password(self):
        assert parse_basic_credentials(encode("admin:secret")) == ("admin", "secret")

    def test_password_keeps_everything_after_first_colon(self):
        assert parse_basic_credentials(encode("admin:a:b:c")) == ("admin", "a:b:c")

    def test_empty_username_allowed(self):
        assert parse_basic_credentials(encode(":secret")) == ("", "secret")

    def test_scheme_is_case_insensitive(self):
        token = base64.b64encode(b"admin:secret").decode("ascii")
        assert parse_basic_credentials(f"basic {token}") == ("admin", "secret")

    @pytest.mark.parametrize(
        "header",
        [
            None,
            "",
            "Basic",
            "Basic ",
            "Bearer YWRtaW46c2VjcmV0",
            "Basic not-base64!!",
            encode("no-colon-here"),
        ],
    )
    def test_invalid_headers(self, header):
        assert parse_basic_credentials(header) is None

    def test_non_utf8_payload(self):
        token = base64.b64encode(b"admin:\xff\xfe").decode("ascii")
        assert parse_basic_credentials(f"Basic {token}") is None
