"""Authentication orchestration for general and social members.

This module holds every business rule about sessions: which login path
applies to an email, when tokens are issued or withheld, and how a refresh
token is reused, rotated or rejected. Persistence, hashing and signing are
reached only through the domain interfaces.

Session state machine (per email)::

    NoSession                       --publish-->  ActiveSession
    ActiveSession, refresh valid    --reuse---->  ActiveSession (refresh kept)
    ActiveSession, refresh invalid  --publish-->  ActiveSession (refresh rotated)
    ActiveSession, owner mismatch   --reissue-->  RefreshTokenOwnerMismatchError

Refresh-token reads and writes are not serialized across concurrent requests
for the same email; the last writer wins.
"""

from typing import Optional

from structlog import get_logger

from greeny_auth.core.exceptions import (
    CredentialNotFoundError,
    EmailAlreadyExistsError,
    LoginFailureError,
    MemberNotFoundError,
    RefreshTokenNotFoundError,
    RefreshTokenOwnerMismatchError,
)
from greeny_auth.core.logging import mask_email
from greeny_auth.domain.entities.member import Provider
from greeny_auth.domain.interfaces import (
    IIdentityRegistry,
    IPasswordHasher,
    IRefreshTokenStore,
    ITokenSigner,
)
from greeny_auth.domain.value_objects.identity import Identity, Principal, normalize_email
from greeny_auth.domain.value_objects.password import ensure_password_storable
from greeny_auth.domain.value_objects.token import TokenResponse

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


class AuthOrchestrator:
    """Sign-up, sign-in, consent capture, reissue and password recovery.

    Attributes:
        registry (IIdentityRegistry): Identity records.
        token_store (IRefreshTokenStore): Active refresh token per email.
        token_signer (ITokenSigner): Mints and checks tokens.
        password_hasher (IPasswordHasher): Hashes and verifies passwords.
    """

    def __init__(
        self,
        registry: IIdentityRegistry,
        token_store: IRefreshTokenStore,
        token_signer: ITokenSigner,
        password_hasher: IPasswordHasher,
    ):
        self.registry = registry
        self.token_store = token_store
        self.token_signer = token_signer
        self.password_hasher = password_hasher

    # ------------------------------------------------------------------
    # Sign-up and sign-in
    # ------------------------------------------------------------------

    async def sign_up(
        self, email: str, password: str, name: str, phone: str, birth: str
    ) -> Identity:
        """Registers a general (password) member.

        Identity, credential and profile are created in one unit of work.
        No tokens are issued; the member signs in afterwards.

        Raises:
            EmailAlreadyExistsError: If any identity already uses ``email``.
            PasswordPolicyError: If ``password`` exceeds 72 bytes in UTF-8.
        """
        ensure_password_storable(password)
        email = normalize_email(email)
        if await self.registry.exists_by_email(email):
            logger.info("Sign-up rejected, email taken", email=mask_email(email))
            raise EmailAlreadyExistsError(email)

        identity = await self.registry.create_general(
            email=email,
            password_hash=self.password_hasher.hash(password),
            name=name,
            phone=phone,
            birth=birth,
        )
        logger.info("General member signed up", member_id=identity.id)
        return identity

    async def sign_in_general(self, email: str, password: str, auto_login: bool) -> TokenResponse:
        """Signs in a general member with email and password.

        Args:
            email: Login email.
            password: Plaintext password to verify.
            auto_login: The member's "keep me signed in" choice. Written back
                only when it differs from the stored flag.

        Returns:
            TokenResponse: A full token pair, with the refresh token reused
            when a valid one is already stored.

        Raises:
            MemberNotFoundError: If no identity uses ``email``.
            LoginFailureError: If the password is wrong or the identity has no
                password credential. The two cases are indistinguishable.
        """
        identity = await self._get_identity(email)
        credential = identity.credential

        if credential is None or not self.password_hasher.matches(
            password, credential.password_hash
        ):
            logger.warning("Invalid credentials for member", member_id=identity.id)
            raise LoginFailureError()

        if credential.auto_login != auto_login:
            await self.registry.update_auto_login(identity.id, auto_login)
            logger.debug("Auto-login flag changed", member_id=identity.id, auto_login=auto_login)

        return await self._authorize(identity.email, identity.subject)

    async def sign_in_social(self, email: str, provider: Provider) -> TokenResponse:
        """Signs in a member whose provider login already resolved to ``email``.

        A first-time social member is registered and receives no tokens:
        consent must be captured through :meth:`agreement_in_sign_up` first.
        A returning social member receives a token pair.

        Raises:
            EmailAlreadyExistsError: If ``email`` belongs to a general member.
                A social login never takes over a password account.
        """
        email = normalize_email(email)
        identity = await self.registry.get_by_email(email)

        if identity is None:
            created = await self.registry.create_social(email, provider)
            logger.info(
                "Social member registered, awaiting consent",
                member_id=created.id,
                provider=provider.value,
            )
            return TokenResponse.without_tokens(email=created.email)

        if identity.is_general:
            logger.warning(
                "Social sign-in for a general member email", email=mask_email(email)
            )
            raise EmailAlreadyExistsError(email)

        if not await self.registry.has_agreement(identity.id):
            # A returning social member always passed the consent step, so this
            # only backfills rows lost outside this service.
            await self.registry.save_agreement(identity.id, False, False)
            logger.warning("Backfilled missing agreement", member_id=identity.id)

        return await self._authorize(identity.email, identity.subject)

    async def agreement_in_sign_up(
        self, email: str, personal_info: bool, third_party: bool
    ) -> TokenResponse:
        """Records consent and, for social members, opens their first session.

        General members get a token-less response: they sign in separately.
        Social members get their first token pair here.

        Raises:
            MemberNotFoundError: If no identity uses ``email``.
        """
        identity = await self._get_identity(email)
        await self.registry.save_agreement(identity.id, personal_info, third_party)
        logger.info(
            "Agreement recorded",
            member_id=identity.id,
            personal_info=personal_info,
            third_party=third_party,
        )

        if identity.is_general:
            return TokenResponse.without_tokens()

        return await self._authorize(identity.email, identity.subject)

    # ------------------------------------------------------------------
    # Token lifecycle
    # ------------------------------------------------------------------

    async def reissue(self, access_token: str, refresh_token: str) -> TokenResponse:
        """Trades an (expired) access token plus refresh token for a new access token.

        The access token is parsed without its expiry being enforced; that is
        the whole point of reissue.

        - Presented refresh token invalid or expired: the stored entry is
          dropped and a brand-new pair is published.
        - Presented refresh token valid and equal to the stored one: a new
          access token is signed and the refresh token is returned unchanged.

        Raises:
            InvalidTokenError: If the access token cannot be parsed.
            RefreshTokenNotFoundError: If no refresh token is stored for the
                member while the presented one is valid.
            RefreshTokenOwnerMismatchError: If the presented refresh token is
                valid but is not the stored one. The store is left untouched.
        """
        principal = self.token_signer.parse(access_token)
        email = principal.email

        if not self.token_signer.verify(refresh_token):
            await self.token_store.delete(email)
            logger.info("Presented refresh token invalid, rotating", member_id=principal.identity_id)
            return await self._publish(principal)

        stored = await self.token_store.get(email)
        if stored is None:
            logger.warning("No refresh token stored on reissue", member_id=principal.identity_id)
            raise RefreshTokenNotFoundError()
        if stored != refresh_token:
            logger.warning(
                "Refresh token owner mismatch on reissue", member_id=principal.identity_id
            )
            raise RefreshTokenOwnerMismatchError()

        logger.debug("Access token reissued", member_id=principal.identity_id)
        return TokenResponse(
            access_token=self.token_signer.sign_access(principal),
            refresh_token=refresh_token,
        )

    def get_token_status(self, authorization: Optional[str]) -> bool:
        """Tells whether an ``Authorization`` header holds a currently valid token.

        A missing or malformed header is reported as invalid, never raised.
        """
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            return False
        token = authorization[len(BEARER_PREFIX):].strip()
        return bool(token) and self.token_signer.verify(token)

    async def sign_out(self, email: str) -> None:
        """Drops the stored refresh token for ``email``, if there is one."""
        await self.token_store.delete(normalize_email(email))
        logger.info("Member signed out", email=mask_email(email))

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------

    async def find_password(self, email: str, new_password: str) -> None:
        """Overwrites the password of a general member.

        The caller is responsible for having proven ownership of ``email``.
        Stored tokens are left as they are.

        Raises:
            MemberNotFoundError: If no identity uses ``email``.
            CredentialNotFoundError: If the identity is a social member.
            PasswordPolicyError: If ``new_password`` exceeds 72 bytes in UTF-8.
        """
        identity = await self._get_identity(email)
        if identity.credential is None:
            raise CredentialNotFoundError()
        ensure_password_storable(new_password)

        await self.registry.update_password(identity.id, self.password_hasher.hash(new_password))
        logger.info("Password reset", member_id=identity.id)

    async def get_auto_login_info(self, identity_id: int) -> bool:
        """Returns the stored auto-login flag of a general member.

        Raises:
            MemberNotFoundError: If the identity does not exist.
            CredentialNotFoundError: If the identity is a social member.
        """
        identity = await self.registry.get_by_id(identity_id)
        if identity is None:
            raise MemberNotFoundError()
        if identity.credential is None:
            raise CredentialNotFoundError()
        return identity.credential.auto_login

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _get_identity(self, email: str) -> Identity:
        identity = await self.registry.get_by_email(normalize_email(email))
        if identity is None:
            raise MemberNotFoundError()
        return identity

    async def _authorize(self, email: str, subject: str) -> TokenResponse:
        """Issues tokens for an identity every login path has already vetted.

        The identity is looked up again and its id compared with ``subject``
        before the stored refresh token decides between reuse and publish.
        """
        identity = await self._get_identity(email)
        if identity.subject != subject:
            logger.warning("Identity subject mismatch on authorize", member_id=identity.id)
            raise LoginFailureError()

        principal = identity.to_principal()
        stored = await self.token_store.get(identity.email)

        if stored is not None:
            if self.token_signer.verify(stored):
                logger.debug("Reusing stored refresh token", member_id=identity.id)
                return TokenResponse(
                    access_token=self.token_signer.sign_access(principal),
                    refresh_token=stored,
                )
            await self.token_store.delete(identity.email)
            logger.debug("Stored refresh token expired, dropped", member_id=identity.id)

        return await self._publish(principal)

    async def _publish(self, principal: Principal) -> TokenResponse:
        pair = self.token_signer.issue(principal)
        await self.token_store.save(principal.email, pair.refresh_token)
        logger.info("Token pair published", member_id=principal.identity_id)
        return TokenResponse.from_pair(pair)
