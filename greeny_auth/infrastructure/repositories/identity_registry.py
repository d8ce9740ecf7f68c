"""Identity registry implementation using SQLAlchemy.

This module persists identities across the ``members`` table and its four
child tables, and rebuilds the :class:`Identity` tagged union on every read:
a member with a ``member_generals`` row becomes a general account, a member
with a ``member_socials`` row becomes a social account.

Every mutating method commits exactly once. Any failure rolls the session
back, so a half-created identity is never observable.
"""

from typing import Optional, Type, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel
from structlog import get_logger

from greeny_auth.core.exceptions import CredentialNotFoundError, DatabaseError, EmailAlreadyExistsError
from greeny_auth.core.logging import mask_email
from greeny_auth.domain.entities.member import (
    Member,
    MemberAgreement,
    MemberGeneral,
    MemberProfile,
    MemberSocial,
    Provider,
    Role,
)
from greeny_auth.domain.interfaces.repositories import IIdentityRegistry
from greeny_auth.domain.value_objects.identity import (
    Credential,
    GeneralAccount,
    Identity,
    SocialAccount,
    normalize_email,
)

logger = get_logger(__name__)

Row = TypeVar("Row", bound=SQLModel)


class IdentityRegistry(IIdentityRegistry):
    """SQLAlchemy implementation of the identity registry.

    Attributes:
        db_session (AsyncSession): The request-scoped session all reads and
            writes go through.
    """

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_by_email(self, email: str) -> Optional[Identity]:
        email_value = normalize_email(email)
        result = await self.db_session.execute(select(Member).where(Member.email == email_value))
        member = result.scalars().first()

        logger.debug(
            "Member lookup by email completed",
            email=mask_email(email_value),
            found=member is not None,
        )
        if member is None:
            return None
        return await self._to_identity(member)

    async def get_by_id(self, identity_id: int) -> Optional[Identity]:
        member = await self.db_session.get(Member, identity_id)
        if member is None:
            return None
        return await self._to_identity(member)

    async def exists_by_email(self, email: str) -> bool:
        result = await self.db_session.execute(
            select(Member.id).where(Member.email == normalize_email(email))
        )
        return result.first() is not None

    async def get_profile(self, identity_id: int) -> Optional[MemberProfile]:
        return await self._child(MemberProfile, identity_id)

    async def get_agreement(self, identity_id: int) -> Optional[MemberAgreement]:
        return await self._child(MemberAgreement, identity_id)

    async def has_agreement(self, identity_id: int) -> bool:
        return await self.get_agreement(identity_id) is not None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create_general(
        self, email: str, password_hash: str, name: str, phone: str, birth: str
    ) -> Identity:
        email_value = normalize_email(email)
        try:
            member = await self._add_member(email_value)
            general = MemberGeneral(member_id=member.id, password=password_hash, is_auto=False)
            self.db_session.add(general)
            self.db_session.add(
                MemberProfile(member_id=member.id, name=name, phone=phone, birth=birth)
            )
            await self.db_session.commit()
        except IntegrityError as e:
            await self.db_session.rollback()
            logger.warning("Duplicate email on general sign-up", email=mask_email(email_value))
            raise EmailAlreadyExistsError(email_value) from e
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error("Error creating general member", error=str(e), error_type=type(e).__name__)
            raise DatabaseError("Failed to create general member") from e

        logger.info("General member persisted", member_id=member.id)
        return Identity(
            id=member.id,
            email=member.email,
            role=member.role,
            account=GeneralAccount(
                Credential(identity_id=member.id, password_hash=password_hash, auto_login=False)
            ),
        )

    async def create_social(self, email: str, provider: Provider) -> Identity:
        email_value = normalize_email(email)
        try:
            member = await self._add_member(email_value)
            self.db_session.add(MemberSocial(member_id=member.id, provider=provider))
            await self.db_session.commit()
        except IntegrityError as e:
            await self.db_session.rollback()
            logger.warning("Duplicate email on social sign-up", email=mask_email(email_value))
            raise EmailAlreadyExistsError(email_value) from e
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error("Error creating social member", error=str(e), error_type=type(e).__name__)
            raise DatabaseError("Failed to create social member") from e

        logger.info("Social member persisted", member_id=member.id, provider=provider.value)
        return Identity(
            id=member.id,
            email=member.email,
            role=member.role,
            account=SocialAccount(provider),
        )

    async def update_password(self, identity_id: int, password_hash: str) -> None:
        general = await self._require_general(identity_id)
        general.password = password_hash
        await self._commit("update_password", general)

    async def update_auto_login(self, identity_id: int, auto_login: bool) -> None:
        general = await self._require_general(identity_id)
        general.is_auto = auto_login
        await self._commit("update_auto_login", general)

    async def save_agreement(
        self, identity_id: int, personal_info: bool, third_party: bool
    ) -> MemberAgreement:
        agreement = await self.get_agreement(identity_id)
        if agreement is None:
            agreement = MemberAgreement(member_id=identity_id)
        agreement.personal_info = personal_info
        agreement.third_party = third_party
        await self._commit("save_agreement", agreement)
        return agreement

    async def delete(self, identity_id: int) -> None:
        try:
            for table in (MemberGeneral, MemberSocial, MemberProfile, MemberAgreement):
                await self.db_session.execute(delete(table).where(table.member_id == identity_id))
            await self.db_session.execute(delete(Member).where(Member.id == identity_id))
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error("Error deleting member", member_id=identity_id, error=str(e))
            raise DatabaseError("Failed to delete member") from e
        logger.info("Member deleted", member_id=identity_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _add_member(self, email: str) -> Member:
        member = Member(email=email, role=Role.USER)
        self.db_session.add(member)
        await self.db_session.flush()
        return member

    async def _child(self, table: Type[Row], identity_id: int) -> Optional[Row]:
        result = await self.db_session.execute(select(table).where(table.member_id == identity_id))
        return result.scalars().first()

    async def _require_general(self, identity_id: int) -> MemberGeneral:
        general = await self._child(MemberGeneral, identity_id)
        if general is None:
            raise CredentialNotFoundError()
        return general

    async def _commit(self, operation: str, row: SQLModel) -> None:
        self.db_session.add(row)
        try:
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error("Registry write failed", operation=operation, error=str(e))
            raise DatabaseError(f"Failed to {operation.replace('_', ' ')}") from e

    async def _to_identity(self, member: Member) -> Identity:
        general = await self._child(MemberGeneral, member.id)
        if general is not None:
            account = GeneralAccount(
                Credential(
                    identity_id=member.id,
                    password_hash=general.password,
                    auto_login=general.is_auto,
                )
            )
        else:
            social = await self._child(MemberSocial, member.id)
            if social is None:
                logger.error("Member has neither credential nor social link", member_id=member.id)
                raise DatabaseError("Member has no login path")
            account = SocialAccount(social.provider)

        return Identity(id=member.id, email=member.email, role=member.role, account=account)
