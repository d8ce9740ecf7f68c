"""Password rules shared by every operation that stores a new password."""

from typing import Final

from greeny_auth.core.exceptions import PasswordPolicyError

# bcrypt ignores every byte past the 72nd.
MAX_PASSWORD_BYTES: Final = 72


def password_byte_length(password: str) -> int:
    return len(password.encode("utf-8"))


def ensure_password_storable(password: str) -> str:
    """Returns ``password`` unchanged if bcrypt can hash all of it.

    Raises:
        PasswordPolicyError: If the UTF-8 encoding exceeds 72 bytes.
    """
    if password_byte_length(password) > MAX_PASSWORD_BYTES:
        raise PasswordPolicyError()
    return password
