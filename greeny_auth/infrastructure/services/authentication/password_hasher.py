from typing import Optional

from passlib.context import CryptContext
from passlib.exc import PasswordSizeError
from structlog import get_logger

from greeny_auth.core.config.settings import settings
from greeny_auth.core.exceptions import PasswordPolicyError
from greeny_auth.domain.interfaces.services import IPasswordHasher
from greeny_auth.domain.value_objects.password import MAX_PASSWORD_BYTES, password_byte_length

logger = get_logger(__name__)


class BcryptPasswordHasher(IPasswordHasher):
    """Password hashing with bcrypt through passlib.

    bcrypt only reads the first 72 bytes of its input. Hashing refuses longer
    passwords instead of truncating them, and a longer candidate never
    matches a stored digest.

    Attributes:
        pwd_context (CryptContext): Passlib context for bcrypt password hashing.
    """

    def __init__(self, rounds: Optional[int] = None):
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds or settings.BCRYPT_WORK_FACTOR,
            bcrypt__truncate_error=True,
        )

    def hash(self, plaintext: str) -> str:
        """Hashes ``plaintext``.

        Raises:
            PasswordPolicyError: If ``plaintext`` exceeds 72 bytes in UTF-8.
        """
        try:
            return self.pwd_context.hash(plaintext)
        except PasswordSizeError as e:
            raise PasswordPolicyError() from e

    def matches(self, plaintext: str, digest: str) -> bool:
        """Verifies a password against a stored digest.

        A missing or unrecognisable digest never matches.
        """
        if not digest:
            return False
        if password_byte_length(plaintext) > MAX_PASSWORD_BYTES:
            logger.debug("Candidate password longer than bcrypt input limit")
            return False
        try:
            return self.pwd_context.verify(plaintext, digest)
        except ValueError:
            logger.warning("Stored password digest is not a bcrypt hash")
            return False
