import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from structlog import get_logger

from greeny_auth.core.config.settings import settings
from greeny_auth.core.exceptions import InvalidTokenError
from greeny_auth.domain.entities.member import Role
from greeny_auth.domain.interfaces.services import ITokenSigner
from greeny_auth.domain.value_objects.identity import Principal
from greeny_auth.domain.value_objects.token import TokenPair

logger = get_logger(__name__)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class JwtTokenSigner(ITokenSigner):
    """Signs and checks JWT access and refresh tokens with an HMAC secret.

    Access token claims: ``sub`` (member id), ``email``, ``auth`` (role),
    ``typ``, ``iss``, ``iat``, ``exp`` and a random ``jti``. Refresh tokens
    only carry ``typ``, ``iss``, ``iat``, ``exp`` and ``jti``, so they reveal
    nothing about their owner; the ``jti`` makes every minted token unique
    even when two are issued within the same second.

    Attributes:
        algorithm (str): HMAC algorithm, ``HS512`` by default.
        issuer (str): Value of the ``iss`` claim, checked on decode.
        access_token_ttl (timedelta): Access token lifetime.
        refresh_token_ttl (timedelta): Refresh token lifetime.
    """

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        issuer: Optional[str] = None,
        access_token_ttl: Optional[timedelta] = None,
        refresh_token_ttl: Optional[timedelta] = None,
    ):
        self._secret_key = secret_key or settings.JWT_SECRET_KEY.get_secret_value()
        self.algorithm = algorithm or settings.JWT_ALGORITHM
        self.issuer = issuer or settings.JWT_ISSUER
        self.access_token_ttl = access_token_ttl or timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )
        self.refresh_token_ttl = refresh_token_ttl or timedelta(
            days=settings.REFRESH_TOKEN_EXPIRE_DAYS
        )

    def issue(self, principal: Principal) -> TokenPair:
        now = datetime.now(timezone.utc)
        pair = TokenPair(
            access_token=self._sign_access(principal, now),
            refresh_token=self._encode(
                {"typ": REFRESH_TOKEN_TYPE}, now, self.refresh_token_ttl
            ),
        )
        logger.debug("Token pair created", member_id=principal.identity_id)
        return pair

    def sign_access(self, principal: Principal) -> str:
        return self._sign_access(principal, datetime.now(timezone.utc))

    def verify(self, token: str) -> bool:
        try:
            self._decode(token, verify_exp=True)
        except jwt.ExpiredSignatureError:
            logger.debug("Token expired")
            return False
        except jwt.PyJWTError as e:
            logger.debug("Token rejected", error_type=type(e).__name__)
            return False
        return True

    def parse(self, token: str) -> Principal:
        try:
            payload = self._decode(token, verify_exp=False)
        except jwt.PyJWTError as e:
            logger.warning("Access token could not be parsed", error_type=type(e).__name__)
            raise InvalidTokenError() from e

        if payload.get("typ") != ACCESS_TOKEN_TYPE:
            raise InvalidTokenError("Not an access token")

        try:
            return Principal(
                identity_id=int(payload["sub"]),
                email=payload["email"],
                role=Role(payload["auth"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidTokenError("Access token is missing identity claims") from e

    def _sign_access(self, principal: Principal, now: datetime) -> str:
        claims = {
            "sub": principal.subject,
            "email": principal.email,
            "auth": principal.role.value,
            "typ": ACCESS_TOKEN_TYPE,
        }
        return self._encode(claims, now, self.access_token_ttl)

    def _encode(self, claims: Dict[str, Any], now: datetime, ttl: timedelta) -> str:
        payload = {
            **claims,
            "iss": self.issuer,
            "iat": now,
            "exp": now + ttl,
            "jti": secrets.token_urlsafe(16),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def _decode(self, token: str, verify_exp: bool) -> Dict[str, Any]:
        return jwt.decode(
            token,
            self._secret_key,
            algorithms=[self.algorithm],
            issuer=self.issuer,
            options={"verify_exp": verify_exp, "require": ["exp", "iat", "iss"]},
        )
