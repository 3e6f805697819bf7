"""Password policy, hashing and reset tokens."""

import re
import secrets
import string
from dataclasses import dataclass

import bcrypt

BCRYPT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72

MIN_PASSWORD_LENGTH = 8

PASSWORD_SYMBOLS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"

PASSWORD_REQUIREMENTS = (
    "Password must be at least 8 characters with at least 1 capital letter, "
    "1 number, and 1 special character"
)

RESET_TOKEN_LENGTH = 64
RESET_TOKEN_ALPHABET = string.ascii_letters + string.digits

_UPPERCASE_RE = re.compile(r"[A-Z]")
_DIGIT_RE = re.compile(r"[0-9]")


@dataclass(frozen=True)
class PasswordCheck:
    """Outcome of a password policy check."""

    valid: bool
    reason: str | None = None


def validate_password(password: str) -> PasswordCheck:
    """Check a password against the policy.

    Rules are checked in order (length, uppercase, digit, symbol) and only
    the first failing rule is reported.

    Args:
        password: Candidate plaintext password

    Returns:
        PasswordCheck with the first failing rule's message, if any
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        return PasswordCheck(False, "Password must be at least 8 characters long")
    if not _UPPERCASE_RE.search(password):
        return PasswordCheck(False, "Password must contain at least 1 capital letter")
    if not _DIGIT_RE.search(password):
        return PasswordCheck(False, "Password must contain at least 1 number")
    if not any(ch in PASSWORD_SYMBOLS for ch in password):
        return PasswordCheck(
            False, "Password must contain at least 1 special character"
        )
    return PasswordCheck(True)


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash a password with a fresh salt.

    Args:
        password: Plaintext password

    Returns:
        bcrypt hash string (60 characters)
    """
    hashed = bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    """Check a plaintext password against a stored hash.

    Never raises: a missing or malformed hash simply does not match.

    Args:
        password: Plaintext password
        password_hash: Stored bcrypt hash

    Returns:
        True if the password matches
    """
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except ValueError:
        return False


def generate_reset_token() -> str:
    """Generate a 64 character alphanumeric password reset token."""
    return "".join(
        secrets.choice(RESET_TOKEN_ALPHABET) for _ in range(RESET_TOKEN_LENGTH)
    )
