"""Member self-service operations: profile lookup, password change, withdrawal.

Every operation receives the acting member's id explicitly; it is resolved
from the bearer token by the API layer.
"""

from structlog import get_logger

from greeny_auth.core.exceptions import (
    CredentialNotFoundError,
    MemberNotFoundError,
    PasswordMismatchError,
    ProfileNotFoundError,
)
from greeny_auth.domain.interfaces import IIdentityRegistry, IPasswordHasher, IRefreshTokenStore
from greeny_auth.domain.value_objects.identity import Identity, SocialAccount
from greeny_auth.domain.value_objects.member_info import MemberInfo
from greeny_auth.domain.value_objects.password import ensure_password_storable

logger = get_logger(__name__)


class MemberService:
    def __init__(
        self,
        registry: IIdentityRegistry,
        token_store: IRefreshTokenStore,
        password_hasher: IPasswordHasher,
    ):
        self.registry = registry
        self.token_store = token_store
        self.password_hasher = password_hasher

    async def get_member_info(self, identity_id: int) -> MemberInfo:
        """Describes the member: profile details, or the provider for social members.

        Raises:
            MemberNotFoundError: If the identity does not exist.
            ProfileNotFoundError: If a general member has lost its profile row.
        """
        identity = await self._get_identity(identity_id)

        if isinstance(identity.account, SocialAccount):
            return MemberInfo(provider=identity.account.provider.value)

        profile = await self.registry.get_profile(identity.id)
        if profile is None:
            raise ProfileNotFoundError()
        return MemberInfo(
            email=identity.email,
            name=profile.name,
            phone=profile.phone,
            birth=profile.birth,
        )

    async def change_password(
        self, identity_id: int, current_password: str, new_password: str
    ) -> None:
        """Replaces the password after checking the current one.

        Raises:
            MemberNotFoundError: If the identity does not exist.
            CredentialNotFoundError: If the member signs in through a provider.
            PasswordMismatchError: If ``current_password`` is wrong.
            PasswordPolicyError: If ``new_password`` exceeds 72 bytes in UTF-8.
        """
        identity = await self._get_identity(identity_id)
        credential = identity.credential
        if credential is None:
            raise CredentialNotFoundError()

        if not self.password_hasher.matches(current_password, credential.password_hash):
            logger.warning("Password change with wrong current password", member_id=identity.id)
            raise PasswordMismatchError()

        ensure_password_storable(new_password)
        await self.registry.update_password(identity.id, self.password_hasher.hash(new_password))
        logger.info("Password changed", member_id=identity.id)

    async def withdraw(self, identity_id: int) -> None:
        """Deletes the member and every record tied to it.

        The stored refresh token goes first so that no session outlives the
        account.

        Raises:
            MemberNotFoundError: If the identity does not exist.
        """
        identity = await self._get_identity(identity_id)
        await self.token_store.delete(identity.email)
        await self.registry.delete(identity.id)
        logger.info("Member withdrawn", member_id=identity.id)

    async def _get_identity(self, identity_id: int) -> Identity:
        identity = await self.registry.get_by_id(identity_id)
        if identity is None:
            raise MemberNotFoundError()
        return identity
