from __future__ import annotations

"""Request-payload Pydantic models for authentication and member endpoints."""

from pydantic import BaseModel, EmailStr, Field, field_validator

from greeny_auth.domain.value_objects.password import MAX_PASSWORD_BYTES, password_byte_length

# ---------------------------------------------------------------------------
# Shared / primitive types ---------------------------------------------------
# ---------------------------------------------------------------------------

PASSWORD_FIELD = dict(min_length=8, max_length=MAX_PASSWORD_BYTES)


def _check_password_bytes(value: str) -> str:
    """``max_length`` counts characters; bcrypt's limit is in UTF-8 bytes."""
    if password_byte_length(value) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes in UTF-8")
    return value


# ---------------------------------------------------------------------------
# Concrete request models ----------------------------------------------------
# ---------------------------------------------------------------------------


class SignUpRequest(BaseModel):
    """Payload expected by ``POST /auth/sign-up``."""

    email: EmailStr = Field(..., examples=["greeny@example.com"])
    password: str = Field(..., examples=["Str0ngP@ssw0rd"], **PASSWORD_FIELD)
    name: str = Field(..., min_length=1, max_length=50, examples=["Kim Greeny"])
    phone: str = Field(..., pattern=r"^[0-9-]{9,20}$", examples=["010-1234-5678"])
    birth: str = Field(..., pattern=r"^\d{4}-?\d{2}-?\d{2}$", examples=["1999-01-31"])

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return _check_password_bytes(value)


class SignInRequest(BaseModel):
    """Payload expected by ``POST /auth/sign-in``."""

    email: EmailStr = Field(..., examples=["greeny@example.com"])
    password: str = Field(..., examples=["Str0ngP@ssw0rd"])
    auto_login: bool = Field(False, description="Keep the member signed in")


class AgreementRequest(BaseModel):
    """Payload expected by ``POST /auth/agreement``."""

    email: EmailStr = Field(..., examples=["greeny@example.com"])
    personal_info: bool = Field(..., description="Consent to personal information handling")
    third_party: bool = Field(..., description="Consent to third-party data sharing")


class ReissueRequest(BaseModel):
    """Payload expected by ``POST /auth/reissue``."""

    access_token: str = Field(..., min_length=1)
    refresh_token: str = Field(..., min_length=1)


class ChangePasswordRequest(BaseModel):
    """Payload expected by ``PUT /members/me/password``."""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., **PASSWORD_FIELD)

    @field_validator("new_password")
    @classmethod
    def new_password_fits_bcrypt(cls, value: str) -> str:
        return _check_password_bytes(value)
