"""Test the admin user management endpoints"""
import asyncio

import pytest
from fastapi import status


@pytest.mark.asyncio
async def test_list_users_as_admin(client, admin_headers, user_headers):
    response = await client.get("/api/users", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()
    assert [user["username"] for user in data] == ["admin", "alice"]
    assert data[0] == {"username": "admin", "role": "admin", "joined": None}
    assert data[1]["joined"] is not None
    assert all("password" not in user and "password_hash" not in user for user in data)


@pytest.mark.asyncio
async def test_list_users_as_regular_user_is_forbidden(client, user_headers):
    response = await client.get("/api/users", headers=user_headers)

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.content == b""


@pytest.mark.asyncio
@pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer garbage"}])
async def test_list_users_without_valid_token_is_forbidden(client, headers):
    response = await client.get("/api/users", headers=headers)

    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_add_user(client, admin_headers):
    response = await client.post(
        "/api/users",
        json={"username": "carol", "password": "pw", "role": "admin"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json() == {"message": "User added"}
    users = (await client.get("/api/users", headers=admin_headers)).json()
    assert {"username": "carol", "role": "admin"}.items() <= users[-1].items()


@pytest.mark.asyncio
async def test_add_user_defaults_to_user_role(client, admin_headers):
    await client.post("/api/users", json={"username": "carol", "password": "pw"}, headers=admin_headers)

    login = await client.post("/api/login", json={"username": "carol", "password": "pw"})

    assert login.json()["role"] == "user"


@pytest.mark.asyncio
async def test_add_existing_user_fails(client, admin_headers):
    response = await client.post(
        "/api/users",
        json={"username": "admin", "password": "pw"},
        headers=admin_headers,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"message": "User already exists"}


@pytest.mark.asyncio
async def test_add_user_missing_fields(client, admin_headers):
    response = await client.post("/api/users", json={"username": "carol"}, headers=admin_headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
async def test_add_user_as_regular_user_is_forbidden(client, user_headers):
    response = await client.post(
        "/api/users",
        json={"username": "carol", "password": "pw"},
        headers=user_headers,
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_delete_user(client, admin_headers, user_headers):
    response = await client.delete("/api/users/alice", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "User deleted"}
    users = (await client.get("/api/users", headers=admin_headers)).json()
    assert [user["username"] for user in users] == ["admin"]


@pytest.mark.asyncio
async def test_delete_unknown_user(client, admin_headers):
    response = await client.delete("/api/users/ghost", headers=admin_headers)

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"message": "User not found"}


@pytest.mark.asyncio
async def test_delete_as_regular_user_is_forbidden(client, user_headers):
    response = await client.delete("/api/users/admin", headers=user_headers)

    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_delete_without_token_is_forbidden(client):
    response = await client.delete("/api/users/admin")

    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_admin_can_delete_seeded_admin(client, admin_headers):
    response = await client.delete("/api/users/admin", headers=admin_headers)

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_concurrent_registrations_are_all_kept(client, admin_headers):
    names = [f"user{i}" for i in range(30)]

    responses = await asyncio.gather(
        *(client.post("/api/register", json={"username": name, "password": "pw"}) for name in names),
        *(client.get("/api/viewers") for _ in names),
    )

    assert all(response.status_code == 200 for response in responses)
    listed = {user["username"] for user in (await client.get("/api/users", headers=admin_headers)).json()}
    assert listed == {"admin", *names}


@pytest.mark.asyncio
async def test_concurrent_duplicate_registration_succeeds_once(client, admin_headers):
    responses = await asyncio.gather(
        *(client.post("/api/register", json={"username": "twin", "password": "pw"}) for _ in range(5))
    )

    assert sorted(response.status_code for response in responses) == [200, 400, 400, 400, 400]
    users = (await client.get("/api/users", headers=admin_headers)).json()
    assert [user["username"] for user in users].count("twin") == 1


@pytest.mark.asyncio
async def test_concurrent_add_and_delete_by_admin(client, admin_headers):
    await asyncio.gather(
        *(
            client.post("/api/users", json={"username": f"temp{i}", "password": "pw"}, headers=admin_headers)
            for i in range(10)
        )
    )

    responses = await asyncio.gather(
        *(client.delete(f"/api/users/temp{i}", headers=admin_headers) for i in range(10))
    )

    assert all(response.status_code == 200 for response in responses)
    users = (await client.get("/api/users", headers=admin_headers)).json()
    assert [user["username"] for user in users] == ["admin"]
