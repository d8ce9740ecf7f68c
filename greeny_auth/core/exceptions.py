from __future__ import annotations

"""Centralized, structured exception hierarchy for greeny-auth.

Every failure the authentication core can report is one of the classes
below. Each carries a machine-readable ``code`` for programmatic handling and
a human-readable ``message`` for logging and API responses.

The hierarchy follows the failure taxonomy of the service:

- ``NotFoundError``: an identity, credential, profile or stored refresh token
  is absent. Maps to ``404 Not Found``.
- ``ConflictError``: an email is already bound to an incompatible login path.
  Maps to ``409 Conflict``.
- ``AuthenticationError``: wrong password, refresh-token owner mismatch or an
  unreadable token. Maps to ``401 Unauthorized``.
- ``ValidationError``: input the domain refuses, such as a password bcrypt
  cannot hash in full. Maps to ``422 Unprocessable Entity``.

A malformed bearer header is deliberately *not* an exception: the token
status check reports it as "invalid".
"""

from typing import Final

__all__: Final = [
    "GreenyError",
    "NotFoundError",
    "MemberNotFoundError",
    "CredentialNotFoundError",
    "ProfileNotFoundError",
    "RefreshTokenNotFoundError",
    "ConflictError",
    "EmailAlreadyExistsError",
    "AuthenticationError",
    "LoginFailureError",
    "RefreshTokenOwnerMismatchError",
    "InvalidTokenError",
    "PasswordMismatchError",
    "DatabaseError",
    "ValidationError",
    "PasswordPolicyError",
]


class GreenyError(Exception):
    """Base exception class for all custom errors in greeny-auth.

    Attributes:
        message (str): A human-readable error message, suitable for logging.
        code (str): A unique, machine-readable error code.
    """

    message: str
    code: str = "generic_error"

    def __init__(self, message: str, code: str = "generic_error"):
        self.message = message
        self.code = code
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Not found (404)
# ---------------------------------------------------------------------------


class NotFoundError(GreenyError):
    """Raised when a record the operation depends on does not exist."""

    def __init__(self, message: str = "Resource not found", code: str = "not_found"):
        super().__init__(message, code)


class MemberNotFoundError(NotFoundError):
    """Raised when no identity is registered under the given email or id."""

    def __init__(self, message: str = "Member not found", code: str = "member_not_found"):
        super().__init__(message, code)


class CredentialNotFoundError(NotFoundError):
    """Raised when a password operation targets an identity without a credential.

    Social-path identities never own a credential, so password recovery,
    password change and the auto-login lookup all end here for them.
    """

    def __init__(
        self,
        message: str = "General member credential not found",
        code: str = "credential_not_found",
    ):
        super().__init__(message, code)


class ProfileNotFoundError(NotFoundError):
    def __init__(self, message: str = "Member profile not found", code: str = "profile_not_found"):
        super().__init__(message, code)


class RefreshTokenNotFoundError(NotFoundError):
    """Raised when reissue finds no stored refresh token for the identity."""

    def __init__(
        self, message: str = "Refresh token not found", code: str = "refresh_token_not_found"
    ):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Conflict (409)
# ---------------------------------------------------------------------------


class ConflictError(GreenyError):
    def __init__(self, message: str = "Conflict", code: str = "conflict"):
        super().__init__(message, code)


class EmailAlreadyExistsError(ConflictError):
    """Raised when an email is already registered.

    Covers both a duplicate general sign-up and a social sign-in attempt for
    an email that belongs to a password account.
    """

    def __init__(self, email: str, code: str = "email_already_exists"):
        self.email = email
        super().__init__(f"Email already exists: {email}", code)


# ---------------------------------------------------------------------------
# Authentication failures (401)
# ---------------------------------------------------------------------------


class AuthenticationError(GreenyError):
    """Raised for general authentication failures.

    This exception is the base for more specific authentication-related
    errors. It maps to a `401 Unauthorized` HTTP status code.
    """

    def __init__(self, message: str = "Authentication failed", code: str = "authentication_error"):
        super().__init__(message, code)


class LoginFailureError(AuthenticationError):
    """Raised when login credentials do not check out.

    The message is identical for every cause so that a caller cannot tell
    which part of the credentials was wrong.
    """

    def __init__(self, message: str = "Login failed", code: str = "login_failure"):
        super().__init__(message, code)


class RefreshTokenOwnerMismatchError(AuthenticationError):
    """Raised when a valid refresh token differs from the one stored for its owner.

    This signals a replayed or stolen token and is always fatal: no new
    access token is issued and the stored value is left untouched.
    """

    def __init__(
        self,
        message: str = "Refresh token does not belong to this member",
        code: str = "refresh_token_owner_mismatch",
    ):
        super().__init__(message, code)


class InvalidTokenError(AuthenticationError):
    def __init__(self, message: str = "Invalid token", code: str = "invalid_token"):
        super().__init__(message, code)


class PasswordMismatchError(AuthenticationError):
    """Raised when the current password given for a password change is wrong."""

    def __init__(
        self, message: str = "Current password does not match", code: str = "password_mismatch"
    ):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Persistence (500)
# ---------------------------------------------------------------------------


class DatabaseError(GreenyError):
    """Raised for low-level database interaction errors.

    Wraps driver errors raised inside a registry unit of work after the
    transaction has been rolled back.
    """

    def __init__(self, message: str = "Database error", code: str = "database_error"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Validation (422)
# ---------------------------------------------------------------------------


class ValidationError(GreenyError):
    def __init__(self, message: str = "Invalid input", code: str = "validation_error"):
        super().__init__(message, code)


class PasswordPolicyError(ValidationError):
    """Raised when a password cannot be accepted as a credential.

    bcrypt reads at most 72 bytes, so a longer password would be stored
    truncated and every password sharing its first 72 bytes would match.
    """

    def __init__(
        self,
        message: str = "Password must be at most 72 bytes in UTF-8",
        code: str = "password_policy_error",
    ):
        super().__init__(message, code)
