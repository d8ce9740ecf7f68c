from __future__ import annotations

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from greeny_auth.core.exceptions import AuthenticationError
from greeny_auth.domain.interfaces import ITokenSigner
from greeny_auth.domain.value_objects.identity import Principal
from greeny_auth.infrastructure.dependency_injection.auth_dependencies import get_token_signer

__all__ = [
    "get_current_principal",
    "CurrentPrincipal",
]


# ---------------------------------------------------------------------------
# Type-annotated dependency shortcuts
# ---------------------------------------------------------------------------


BearerCredentials = Annotated[
    Optional[HTTPAuthorizationCredentials], Depends(HTTPBearer(auto_error=False))
]
TokenSigner = Annotated[ITokenSigner, Depends(get_token_signer)]


def _auth_fail(detail: str) -> HTTPException:
    """Consistently shaped *401* UNAUTHORIZED response."""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


# ---------------------------------------------------------------------------
# Public dependencies
# ---------------------------------------------------------------------------


def get_current_principal(credentials: BearerCredentials, token_signer: TokenSigner) -> Principal:
    """Return the :class:`Principal` the bearer access token was issued to.

    The token must verify (signature and expiry) before its claims are read.
    The principal is then passed explicitly to the domain services.
    """
    if credentials is None:
        raise _auth_fail("Not authenticated")
    token = credentials.credentials
    if not token_signer.verify(token):
        raise _auth_fail("Invalid or expired access token")
    try:
        return token_signer.parse(token)
    except AuthenticationError as exc:
        raise _auth_fail(str(exc)) from exc


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
