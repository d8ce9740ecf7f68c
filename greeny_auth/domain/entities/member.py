from datetime import datetime, timezone  # For timestamp fields
from enum import Enum  # For type-safe role and provider enumerations
from typing import Optional  # For optional fields

from sqlalchemy import DateTime, text  # For SQL expressions and explicit DateTime type
from sqlalchemy import Enum as SAEnum  # Portable enum column (PostgreSQL and SQLite)
from sqlmodel import Column, Field, SQLModel, String  # For ORM and table definition


class Role(str, Enum):
    """Represents the role of a member within the marketplace.

    Roles are assigned at creation time and only changed by administrative
    action, which is outside this service.
    """

    USER = "ROLE_USER"
    ADMIN = "ROLE_ADMIN"


class Provider(str, Enum):
    """The federated identity providers a social member can come from.

    The OAuth handshake with each provider happens before this service is
    called; only the provider name is recorded here.
    """

    KAKAO = "KAKAO"
    NAVER = "NAVER"
    GOOGLE = "GOOGLE"


class Member(SQLModel, table=True):
    """The canonical identity record and aggregate root.

    A member row holds only what both login paths share. Exactly one of
    ``MemberGeneral`` or ``MemberSocial`` points at every member, decided at
    creation and never changed afterwards.

    Attributes:
        id: The unique identifier for the member (primary key).
        email: A unique, lowercase email address. Immutable.
        role: The member's role.
        created_at: The timestamp of when the member was created.
    """

    __tablename__ = "members"

    id: Optional[int] = Field(
        default=None,  # Auto-incremented by database
        primary_key=True,
        description="The unique identifier for the member.",
    )
    email: str = Field(
        sa_column=Column(String, unique=True, index=True, nullable=False),
        description="Unique, lowercase email address used as the login key.",
    )
    role: Role = Field(
        default=Role.USER,
        sa_column=Column(SAEnum(Role, name="role"), nullable=False),
        description="The member's role.",
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(
            DateTime(timezone=True),
            server_default=text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        description="The timestamp of when the member was created.",
    )


class MemberGeneral(SQLModel, table=True):
    """The password credential of a general (password-based) member.

    Attributes:
        member_id: The member this credential belongs to (unique).
        password: The bcrypt digest of the member's password.
        is_auto: Whether the member asked to stay signed in.
    """

    __tablename__ = "member_generals"

    id: Optional[int] = Field(default=None, primary_key=True)
    member_id: int = Field(foreign_key="members.id", unique=True, nullable=False)
    password: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Bcrypt-hashed password.",
    )
    is_auto: bool = Field(default=False, nullable=False)


class MemberSocial(SQLModel, table=True):
    """The link between a social member and the provider it signed in with."""

    __tablename__ = "member_socials"

    id: Optional[int] = Field(default=None, primary_key=True)
    member_id: int = Field(foreign_key="members.id", unique=True, nullable=False)
    provider: Provider = Field(
        sa_column=Column(SAEnum(Provider, name="provider"), nullable=False),
    )


class MemberProfile(SQLModel, table=True):
    """Personal details captured at general sign-up."""

    __tablename__ = "member_profiles"

    id: Optional[int] = Field(default=None, primary_key=True)
    member_id: int = Field(foreign_key="members.id", unique=True, nullable=False)
    name: str = Field(max_length=50)
    phone: str = Field(max_length=20)
    birth: str = Field(max_length=10)


class MemberAgreement(SQLModel, table=True):
    """The member's answers to the personal-information and third-party consents.

    Only the existence of this row gates token issuance; the flag values are
    recorded for downstream business rules.
    """

    __tablename__ = "member_agreements"

    id: Optional[int] = Field(default=None, primary_key=True)
    member_id: int = Field(foreign_key="members.id", unique=True, nullable=False)
    personal_info: bool = Field(default=False, nullable=False)
    third_party: bool = Field(default=False, nullable=False)
