import pytest

from greeny_auth.core.exceptions import (
    CredentialNotFoundError,
    EmailAlreadyExistsError,
    InvalidTokenError,
    LoginFailureError,
    MemberNotFoundError,
    PasswordPolicyError,
    RefreshTokenNotFoundError,
    RefreshTokenOwnerMismatchError,
)
from greeny_auth.domain.entities.member import Provider
from tests.factories import (
    create_expired_pair,
    create_fake_email,
    create_fake_principal,
    create_fake_sign_up,
)


async def _signed_up(orchestrator, **overrides):
    data = create_fake_sign_up(**overrides)
    identity = await orchestrator.sign_up(**data)
    return identity, data


# ---------------------------------------------------------------------------
# sign_up
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_sign_up_creates_general_identity_with_hashed_password(orchestrator, registry):
    identity, data = await _signed_up(orchestrator)

    assert identity.is_general
    assert identity.credential.password_hash != data["password"]
    assert identity.credential.auto_login is False
    profile = await registry.get_profile(identity.id)
    assert profile.name == data["name"]


@pytest.mark.asyncio
async def test_sign_up_twice_with_same_email_fails(orchestrator, registry):
    await _signed_up(orchestrator, email="a@x.com")

    with pytest.raises(EmailAlreadyExistsError):
        await _signed_up(orchestrator, email="a@x.com")

    assert len(registry.identities) == 1


@pytest.mark.asyncio
async def test_sign_up_rejects_password_bcrypt_would_truncate(orchestrator, registry):
    with pytest.raises(PasswordPolicyError):
        await _signed_up(orchestrator, password="가" * 30)

    assert registry.identities == {}


@pytest.mark.asyncio
async def test_sign_up_treats_email_case_insensitively(orchestrator):
    await _signed_up(orchestrator, email="Greeny@Example.com")

    with pytest.raises(EmailAlreadyExistsError):
        await _signed_up(orchestrator, email="greeny@example.com")


# ---------------------------------------------------------------------------
# sign_in_general
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_sign_in_after_sign_up_returns_token_pair(orchestrator, token_store, token_signer):
    identity, data = await _signed_up(orchestrator)

    response = await orchestrator.sign_in_general(data["email"], data["password"], False)

    assert response.access_token and response.refresh_token
    assert token_store.tokens[identity.email] == response.refresh_token
    assert token_signer.parse(response.access_token).identity_id == identity.id


@pytest.mark.asyncio
async def test_sign_in_with_wrong_password_issues_nothing(orchestrator, token_store):
    _, data = await _signed_up(orchestrator)

    with pytest.raises(LoginFailureError):
        await orchestrator.sign_in_general(data["email"], data["password"] + "-wrong", False)

    assert token_store.saves == 0
    assert token_store.tokens == {}


@pytest.mark.asyncio
async def test_sign_in_unknown_email_fails_not_found(orchestrator):
    with pytest.raises(MemberNotFoundError):
        await orchestrator.sign_in_general(create_fake_email(), "whatever123", False)


@pytest.mark.asyncio
async def test_social_member_cannot_sign_in_with_password(orchestrator):
    email = create_fake_email()
    await orchestrator.sign_in_social(email, Provider.KAKAO)

    with pytest.raises(LoginFailureError):
        await orchestrator.sign_in_general(email, "whatever123", False)


@pytest.mark.asyncio
async def test_repeated_sign_in_keeps_flag_and_reuses_refresh_token(orchestrator, registry):
    identity, data = await _signed_up(orchestrator)

    first = await orchestrator.sign_in_general(data["email"], data["password"], False)
    second = await orchestrator.sign_in_general(data["email"], data["password"], False)

    assert registry.auto_login_writes == 0
    assert (await registry.get_by_id(identity.id)).credential.auto_login is False
    assert second.refresh_token == first.refresh_token
    assert second.access_token


@pytest.mark.asyncio
async def test_sign_in_writes_auto_login_flag_only_when_it_changes(orchestrator, registry):
    identity, data = await _signed_up(orchestrator)

    await orchestrator.sign_in_general(data["email"], data["password"], True)
    await orchestrator.sign_in_general(data["email"], data["password"], True)

    assert registry.auto_login_writes == 1
    assert await orchestrator.get_auto_login_info(identity.id) is True


@pytest.mark.asyncio
async def test_sign_in_rotates_expired_stored_refresh_token(orchestrator, token_store):
    identity, data = await _signed_up(orchestrator)
    expired = create_expired_pair(identity.to_principal())
    token_store.tokens[identity.email] = expired.refresh_token

    response = await orchestrator.sign_in_general(data["email"], data["password"], False)

    assert response.refresh_token != expired.refresh_token
    assert token_store.tokens[identity.email] == response.refresh_token


# ---------------------------------------------------------------------------
# sign_in_social and agreement_in_sign_up
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_first_social_sign_in_withholds_tokens_until_agreement(orchestrator, registry, token_store):
    response = await orchestrator.sign_in_social("new@x.com", Provider.NAVER)

    assert not response.has_tokens
    assert response.email == "new@x.com"
    assert token_store.tokens == {}
    identity = await registry.get_by_email("new@x.com")
    assert identity.is_social
    assert not await registry.has_agreement(identity.id)

    agreed = await orchestrator.agreement_in_sign_up("new@x.com", True, True)

    assert agreed.access_token and agreed.refresh_token
    assert token_store.tokens["new@x.com"] == agreed.refresh_token
    agreement = await registry.get_agreement(identity.id)
    assert agreement.personal_info and agreement.third_party


@pytest.mark.asyncio
async def test_social_sign_in_for_general_email_fails_conflict(orchestrator):
    _, data = await _signed_up(orchestrator)

    with pytest.raises(EmailAlreadyExistsError):
        await orchestrator.sign_in_social(data["email"], Provider.GOOGLE)


@pytest.mark.asyncio
async def test_returning_social_member_gets_tokens(orchestrator, registry):
    email = create_fake_email()
    await orchestrator.sign_in_social(email, Provider.KAKAO)
    first = await orchestrator.agreement_in_sign_up(email, True, False)

    again = await orchestrator.sign_in_social(email, Provider.KAKAO)

    assert again.access_token
    assert again.refresh_token == first.refresh_token


@pytest.mark.asyncio
async def test_returning_social_member_without_agreement_is_backfilled(orchestrator, registry):
    email = create_fake_email()
    await orchestrator.sign_in_social(email, Provider.KAKAO)
    identity = await registry.get_by_email(email)

    response = await orchestrator.sign_in_social(email, Provider.KAKAO)

    assert response.has_tokens
    agreement = await registry.get_agreement(identity.id)
    assert agreement.personal_info is False
    assert agreement.third_party is False


@pytest.mark.asyncio
async def test_agreement_for_general_member_issues_no_tokens(orchestrator, registry, token_store):
    identity, data = await _signed_up(orchestrator)

    response = await orchestrator.agreement_in_sign_up(data["email"], True, False)

    assert not response.has_tokens
    assert token_store.tokens == {}
    assert await registry.has_agreement(identity.id)


@pytest.mark.asyncio
async def test_agreement_for_unknown_email_fails(orchestrator):
    with pytest.raises(MemberNotFoundError):
        await orchestrator.agreement_in_sign_up(create_fake_email(), True, True)


@pytest.mark.asyncio
async def test_authorize_rejects_subject_of_another_identity(orchestrator):
    identity, _ = await _signed_up(orchestrator)

    with pytest.raises(LoginFailureError):
        await orchestrator._authorize(identity.email, str(identity.id + 100))


# ---------------------------------------------------------------------------
# reissue
# ---------------------------------------------------------------------------


async def _signed_in(orchestrator):
    identity, data = await _signed_up(orchestrator)
    response = await orchestrator.sign_in_general(data["email"], data["password"], False)
    return identity, response


@pytest.mark.asyncio
async def test_reissue_with_stored_refresh_token_keeps_it(orchestrator, token_signer):
    identity, tokens = await _signed_in(orchestrator)

    response = await orchestrator.reissue(tokens.access_token, tokens.refresh_token)

    assert response.refresh_token == tokens.refresh_token
    assert response.access_token != tokens.access_token
    assert token_signer.parse(response.access_token).email == identity.email


@pytest.mark.asyncio
async def test_reissue_accepts_expired_access_token(orchestrator):
    identity, tokens = await _signed_in(orchestrator)
    expired_access = create_expired_pair(identity.to_principal()).access_token

    response = await orchestrator.reissue(expired_access, tokens.refresh_token)

    assert response.refresh_token == tokens.refresh_token


@pytest.mark.asyncio
async def test_reissue_with_expired_refresh_token_rotates_pair(orchestrator, token_store):
    identity, tokens = await _signed_in(orchestrator)
    expired_refresh = create_expired_pair(identity.to_principal()).refresh_token

    response = await orchestrator.reissue(tokens.access_token, expired_refresh)

    assert response.access_token and response.refresh_token
    assert response.refresh_token not in (tokens.refresh_token, expired_refresh)
    assert token_store.tokens[identity.email] == response.refresh_token


@pytest.mark.asyncio
async def test_reissue_with_foreign_refresh_token_fails_and_leaves_store(
    orchestrator, token_store, token_signer
):
    identity, tokens = await _signed_in(orchestrator)
    other_refresh = token_signer.issue(identity.to_principal()).refresh_token

    with pytest.raises(RefreshTokenOwnerMismatchError):
        await orchestrator.reissue(tokens.access_token, other_refresh)

    assert token_store.tokens[identity.email] == tokens.refresh_token


@pytest.mark.asyncio
async def test_reissue_without_stored_refresh_token_fails(orchestrator, token_store):
    identity, tokens = await _signed_in(orchestrator)
    await token_store.delete(identity.email)

    with pytest.raises(RefreshTokenNotFoundError):
        await orchestrator.reissue(tokens.access_token, tokens.refresh_token)


@pytest.mark.asyncio
async def test_reissue_with_unreadable_access_token_fails(orchestrator):
    _, tokens = await _signed_in(orchestrator)

    with pytest.raises(InvalidTokenError):
        await orchestrator.reissue("not-a-jwt", tokens.refresh_token)


# ---------------------------------------------------------------------------
# token status, sign-out, password recovery, auto-login
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_token_status_reports_valid_bearer(orchestrator):
    _, tokens = await _signed_in(orchestrator)

    assert orchestrator.get_token_status(f"Bearer {tokens.access_token}") is True


@pytest.mark.parametrize(
    "header",
    [None, "", "Bearer ", "Basic abc", "bearer abc", "Bearer not-a-jwt"],
)
def test_token_status_reports_bad_headers_as_invalid(orchestrator, header):
    assert orchestrator.get_token_status(header) is False


def test_token_status_reports_expired_token_as_invalid(orchestrator):
    expired = create_expired_pair(create_fake_principal())

    assert orchestrator.get_token_status(f"Bearer {expired.access_token}") is False


@pytest.mark.asyncio
async def test_sign_out_drops_stored_refresh_token(orchestrator, token_store):
    identity, _ = await _signed_in(orchestrator)

    await orchestrator.sign_out(identity.email)

    assert not await token_store.exists(identity.email)


@pytest.mark.asyncio
async def test_find_password_replaces_credential(orchestrator, token_store):
    identity, data = await _signed_up(orchestrator)

    await orchestrator.find_password(data["email"], "a-brand-new-password")

    with pytest.raises(LoginFailureError):
        await orchestrator.sign_in_general(data["email"], data["password"], False)
    response = await orchestrator.sign_in_general(data["email"], "a-brand-new-password", False)
    assert response.has_tokens


@pytest.mark.asyncio
async def test_find_password_rejects_password_bcrypt_would_truncate(orchestrator):
    _, data = await _signed_up(orchestrator)

    with pytest.raises(PasswordPolicyError):
        await orchestrator.find_password(data["email"], "가" * 30)

    response = await orchestrator.sign_in_general(data["email"], data["password"], False)
    assert response.has_tokens


@pytest.mark.asyncio
async def test_find_password_for_social_member_fails(orchestrator):
    email = create_fake_email()
    await orchestrator.sign_in_social(email, Provider.GOOGLE)

    with pytest.raises(CredentialNotFoundError):
        await orchestrator.find_password(email, "a-brand-new-password")


@pytest.mark.asyncio
async def test_find_password_for_unknown_email_fails(orchestrator):
    with pytest.raises(MemberNotFoundError):
        await orchestrator.find_password(create_fake_email(), "a-brand-new-password")


@pytest.mark.asyncio
async def test_auto_login_info_defaults_to_false(orchestrator):
    identity, _ = await _signed_up(orchestrator)

    assert await orchestrator.get_auto_login_info(identity.id) is False


@pytest.mark.asyncio
async def test_auto_login_info_for_social_member_fails(orchestrator, registry):
    email = create_fake_email()
    await orchestrator.sign_in_social(email, Provider.NAVER)
    identity = await registry.get_by_email(email)

    with pytest.raises(CredentialNotFoundError):
        await orchestrator.get_auto_login_info(identity.id)


@pytest.mark.asyncio
async def test_auto_login_info_for_missing_member_fails(orchestrator):
    with pytest.raises(MemberNotFoundError):
        await orchestrator.get_auto_login_info(404)


@pytest.mark.asyncio
async def test_wrong_password_never_reaches_signer_or_store(orchestrator, token_signer, token_store, mocker):
    _, data = await _signed_up(orchestrator)
    issue = mocker.spy(token_signer, "issue")
    save = mocker.spy(token_store, "save")

    with pytest.raises(LoginFailureError):
        await orchestrator.sign_in_general(data["email"], "definitely-wrong", False)

    issue.assert_not_called()
    save.assert_not_called()
