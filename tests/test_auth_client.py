import httpx
import pytest

from storefront_session.auth_client import AuthClient
from storefront_session.errors import AuthApiError
from storefront_session.models import Credentials, RegisterCandidate


@pytest.mark.asyncio
async def test_login_posts_credentials(auth_client, stub_api):
    stub_api.reply("/auth/login", 200, {"user": {"id": 1}, "token": "abc"})

    result = await auth_client.login(Credentials(email="a@b.com", password="secret"))

    assert result.user == {"id": 1}
    assert result.token == "abc"
    assert stub_api.calls == [("/auth/login", {"email": "a@b.com", "password": "secret"})]


@pytest.mark.asyncio
async def test_register_returns_user(auth_client, stub_api):
    stub_api.reply("/auth/register", 201, {"user": {"id": 2, "username": "bob"}})

    user = await auth_client.register(RegisterCandidate(username="bob", email="b@c.com", password="secret"))

    assert user == {"id": 2, "username": "bob"}


@pytest.mark.asyncio
async def test_error_carries_server_msg_and_status(auth_client, stub_api):
    stub_api.reply("/auth/login", 401, {"msg": "Invalid email or password"})

    with pytest.raises(AuthApiError) as exc:
        await auth_client.login(Credentials(email="a@b.com", password="x"))

    assert exc.value.message == "Invalid email or password"
    assert exc.value.status_code == 401


@pytest.mark.asyncio
async def test_error_without_msg(auth_client, stub_api):
    stub_api.reply("/auth/register", 500, {"error": "boom"})

    with pytest.raises(AuthApiError) as exc:
        await auth_client.register(RegisterCandidate(username="bob", email="b@c.com", password="secret"))

    assert exc.value.message is None
    assert exc.value.status_code == 500


@pytest.mark.asyncio
async def test_connection_error(auth_client, stub_api):
    stub_api.fail("/auth/login")

    with pytest.raises(AuthApiError) as exc:
        await auth_client.login(Credentials(email="a@b.com", password="x"))

    assert exc.value.status_code is None


@pytest.mark.asyncio
async def test_non_object_success_body(auth_client, stub_api):
    stub_api.reply("/auth/register", 200, ["not", "an", "object"])

    with pytest.raises(AuthApiError):
        await auth_client.register(RegisterCandidate(username="bob", email="b@c.com", password="secret"))


@pytest.mark.asyncio
async def test_empty_base_url_fails_without_request():
    calls = []
    client = AuthClient("", transport=httpx.MockTransport(lambda r: calls.append(r) or httpx.Response(200)))

    with pytest.raises(AuthApiError):
        await client.login(Credentials(email="a@b.com", password="x"))

    assert calls == []


def test_trailing_slash_is_stripped():
    assert AuthClient("http://localhost:5000/").base_url == "http://localhost:5000"
