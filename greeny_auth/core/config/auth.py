"""Token signing and password hashing settings.
"""

import logging

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class AuthSettings(BaseSettings):
    """Defines settings for JWT signing and bcrypt hashing.

    Access and refresh tokens are both signed with ``JWT_SECRET_KEY`` using an
    HMAC algorithm. The refresh token lives much longer than the access token;
    its own ``exp`` claim is the only thing that decides whether it is still
    usable, the refresh-token store keeps no TTL.

    Security Note:
        - JWT_SECRET_KEY must be a random string of at least 32 characters and
          must never be logged or committed to version control.
        - BCRYPT_WORK_FACTOR below 10 is only acceptable in test suites.
    """

    JWT_SECRET_KEY: SecretStr = SecretStr("")
    JWT_ALGORITHM: str = Field(default="HS512", pattern="^HS(256|384|512)$")
    JWT_ISSUER: str = "greeny-auth"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(ge=1, default=30)
    REFRESH_TOKEN_EXPIRE_DAYS: int = Field(ge=1, default=7)

    BCRYPT_WORK_FACTOR: int = Field(ge=4, le=31, default=12)

    @field_validator("JWT_SECRET_KEY")
    @classmethod
    def validate_secret_length(cls, value: SecretStr) -> SecretStr:
        """Rejects signing secrets shorter than 32 characters.

        An empty secret is let through here so that ``validate_required_fields``
        can report it together with every other missing variable.
        """
        secret = value.get_secret_value()
        if secret and len(secret) < 32:
            logger.error("JWT_SECRET_KEY is shorter than 32 characters.")
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters long.")
        return value
