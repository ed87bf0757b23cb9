from studydeck.core.config import OAUTH_STATE_COOKIE_NAME, SESSION_COOKIE_NAME
from studydeck.repositories.user_repository import UserRepository


async def start_login(client):
    response = await client.get("/auth/google")
    assert response.status_code == 303
    assert response.headers["location"].startswith("https://accounts.example.com/auth")
    assert OAUTH_STATE_COOKIE_NAME in response.cookies
    return response


async def test_first_login_creates_user_and_session(client, db, identity_provider):
    await start_login(client)

    response = await client.get("/auth/google/callback", params={"code": "abc", "state": "state-123"})

    assert response.status_code == 303
    assert response.headers["location"] == "/dashboard"
    assert SESSION_COOKIE_NAME in response.cookies
    assert identity_provider.codes == ["abc"]

    user = await UserRepository(db).find_by_google_id("google-new-user")
    assert user.email == "ana@example.com"
    assert user.name == "Ana Lopez"

    dashboard = await client.get("/dashboard")
    assert dashboard.status_code == 200
    assert "Ana Lopez" in dashboard.text


async def test_repeat_login_reuses_user(client, db):
    for _ in range(2):
        await start_login(client)
        await client.get("/auth/google/callback", params={"code": "abc", "state": "state-123"})

    assert await UserRepository(db).count({}) == 1


async def test_state_mismatch_fails_login(client, db, identity_provider):
    await start_login(client)

    response = await client.get("/auth/google/callback", params={"code": "abc", "state": "forged"})

    assert response.status_code == 303
    assert response.headers["location"] == "/"
    assert identity_provider.codes == []
    assert await UserRepository(db).count({}) == 0


async def test_callback_without_login_start_fails(client, identity_provider):
    response = await client.get("/auth/google/callback", params={"code": "abc", "state": "state-123"})

    assert response.headers["location"] == "/"
    assert identity_provider.codes == []


async def test_provider_failure_redirects_home(client, db, identity_provider):
    identity_provider.fail = True
    await start_login(client)

    response = await client.get("/auth/google/callback", params={"code": "abc", "state": "state-123"})

    assert response.status_code == 303
    assert response.headers["location"] == "/"
    assert SESSION_COOKIE_NAME not in response.cookies
    assert await UserRepository(db).count({}) == 0


async def test_logout_destroys_session(client, login, redis_client):
    await login()
    assert len(await redis_client.keys("session:*")) == 1

    response = await client.get("/auth/logout")

    assert response.status_code == 303
    assert response.headers["location"] == "/"
    assert await redis_client.keys("session:*") == []
    assert (await client.get("/dashboard")).headers["location"] == "/"


async def test_logout_without_session(client):
    response = await client.get("/auth/logout")
    assert response.status_code == 303
    assert response.headers["location"] == "/"
