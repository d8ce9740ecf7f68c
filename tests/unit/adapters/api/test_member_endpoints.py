import httpx
import pytest
from fastapi import status

from greeny_auth.domain.entities.member import Provider
from tests.factories import create_fake_email, create_fake_sign_up


async def _session(client: httpx.AsyncClient) -> tuple[dict, dict]:
    data = create_fake_sign_up()
    await client.post("/api/v1/auth/sign-up", json=data)
    response = await client.post(
        "/api/v1/auth/sign-in", json={"email": data["email"], "password": data["password"]}
    )
    return data, {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.mark.asyncio
async def test_me_returns_profile_for_general_member(async_client: httpx.AsyncClient):
    data, headers = await _session(async_client)

    response = await async_client.get("/api/v1/members/me", headers=headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "email": data["email"].lower(),
        "name": data["name"],
        "phone": data["phone"],
        "birth": data["birth"],
    }


@pytest.mark.asyncio
async def test_me_returns_provider_for_social_member(async_client: httpx.AsyncClient, orchestrator):
    email = create_fake_email()
    await orchestrator.sign_in_social(email, Provider.GOOGLE)
    tokens = await orchestrator.agreement_in_sign_up(email, True, True)

    response = await async_client.get(
        "/api/v1/members/me", headers={"Authorization": f"Bearer {tokens.access_token}"}
    )

    assert response.json() == {"provider": "GOOGLE"}


@pytest.mark.asyncio
async def test_change_password(async_client: httpx.AsyncClient):
    data, headers = await _session(async_client)

    wrong = await async_client.put(
        "/api/v1/members/me/password",
        headers=headers,
        json={"current_password": "not-the-password", "new_password": "new-password-1"},
    )
    right = await async_client.put(
        "/api/v1/members/me/password",
        headers=headers,
        json={"current_password": data["password"], "new_password": "new-password-1"},
    )

    assert wrong.status_code == status.HTTP_401_UNAUTHORIZED
    assert wrong.json()["code"] == "password_mismatch"
    assert right.status_code == status.HTTP_204_NO_CONTENT


@pytest.mark.asyncio
async def test_change_password_rejects_password_longer_than_72_utf8_bytes(async_client: httpx.AsyncClient):
    data, headers = await _session(async_client)

    response = await async_client.put(
        "/api/v1/members/me/password",
        headers=headers,
        json={"current_password": data["password"], "new_password": "가" * 30},
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
async def test_withdraw_then_me_is_not_found(async_client: httpx.AsyncClient):
    _, headers = await _session(async_client)

    deleted = await async_client.delete("/api/v1/members/me", headers=headers)
    after = await async_client.get("/api/v1/members/me", headers=headers)

    assert deleted.status_code == status.HTTP_204_NO_CONTENT
    assert after.status_code == status.HTTP_404_NOT_FOUND
