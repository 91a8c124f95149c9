from typing import Optional, Tuple
import base64
import binascii
import hashlib
import hmac


def hash_password(password: str) -> str:
    """Base64 of the SHA-256 digest of the UTF-8 password.

    Unsalted and single-pass. Stored hashes depend on this exact format, so
    moving to a salted KDF needs a migration of the credential row.
    """
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Verify a password against its stored hash."""
    return hmac.compare_digest(
        hash_password(plain_password).encode("ascii"),
        password_hash.encode("ascii", errors="replace"),
    )


def parse_basic_credentials(authorization: Optional[str]) -> Optional[Tuple[str, str]]:
    """Split an ``Authorization: Basic ...`` header into (username, password).

    Returns None for a missing header, another scheme or an undecodable value.
    """
    if not authorization:
        return None

    scheme, _, encoded = authorization.partition(" ")
    if scheme.lower() != "basic" or not encoded.strip():
        return None

    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None

    username, sep, password = decoded.partition(":")
    if not sep:
        return None
    return username, password
