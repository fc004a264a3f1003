import httpx
import pytest

from models.domain_models import Player
from services.exceptions import MembershipLookupFailed
from services.slack_client import SlackClient

USERS = [
    {"id": "U001", "name": "alice"},
    {"id": "U002", "name": "bob"},
    {"id": "U003", "name": "carol"},
]


def slack_api(routes):
    """MockTransport answering each Web API method from `routes`."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        method = request.url.path.rsplit("/", 1)[-1]
        seen.append((method, dict(request.url.params), request.headers.get("authorization")))
        reply = routes[method]
        body = reply(request) if callable(reply) else reply
        return httpx.Response(200, json=body)

    return httpx.MockTransport(handler), seen


@pytest.fixture
async def make_client():
    clients = []

    async def make(routes):
        transport, seen = slack_api(routes)
        client = SlackClient("xoxb-test", base_url="https://slack.test/api", transport=transport)
        await client.init()
        clients.append(client)
        return client, seen

    yield make
    for client in clients:
        await client.close()


class TestResolveMember:

    async def test_member_found(self, make_client):
        client, seen = await make_client({
            "users.list": {"ok": True, "members": USERS},
            "conversations.members": {"ok": True, "members": ["U001", "U002"]},
        })
        assert await client.resolve_member("bob", "C001") == Player("bob", "U002")
        assert seen[0][2] == "Bearer xoxb-test"
        assert seen[1][1]["channel"] == "C001"

    async def test_unknown_user(self, make_client):
        client, seen = await make_client({"users.list": {"ok": True, "members": USERS}})
        assert await client.resolve_member("mallory", "C001") is None
        assert [s[0] for s in seen] == ["users.list"]

    async def test_user_not_in_channel(self, make_client):
        client, _ = await make_client({
            "users.list": {"ok": True, "members": USERS},
            "conversations.members": {"ok": True, "members": ["U001"]},
        })
        assert await client.resolve_member("carol", "C001") is None

    async def test_follows_pagination(self, make_client):
        def members(request):
            if request.url.params.get("cursor") == "page2":
                return {"ok": True, "members": ["U003"]}
            return {"ok": True, "members": ["U001"], "response_metadata": {"next_cursor": "page2"}}

        client, seen = await make_client({
            "users.list": {"ok": True, "members": USERS},
            "conversations.members": members,
        })
        assert await client.resolve_member("carol", "C001") == Player("carol", "U003")
        assert [s[0] for s in seen] == ["users.list", "conversations.members", "conversations.members"]

    async def test_api_error(self, make_client):
        client, _ = await make_client({
            "users.list": {"ok": True, "members": USERS},
            "conversations.members": {"ok": False, "error": "channel_not_found"},
        })
        with pytest.raises(MembershipLookupFailed) as info:
            await client.resolve_member("bob", "C404")
        assert info.value.code == "channel_not_found"
        assert info.value.retryable

    async def test_transport_error(self):
        def boom(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = SlackClient("xoxb-test", transport=httpx.MockTransport(boom))
        await client.init()
        try:
            with pytest.raises(MembershipLookupFailed) as info:
                await client.resolve_member("bob", "C001")
            assert info.value.code is None
        finally:
            await client.close()


class TestLifecycle:

    async def test_auth_test(self, make_client):
        client, _ = await make_client({"auth.test": {"ok": True, "user": "tttbot", "team": "Acme"}})
        info = await client.auth_test()
        assert info["user"] == "tttbot"

    async def test_bad_token(self, make_client):
        client, _ = await make_client({"auth.test": {"ok": False, "error": "invalid_auth"}})
        with pytest.raises(MembershipLookupFailed):
            await client.auth_test()

    async def test_get_before_init(self):
        with pytest.raises(RuntimeError):
            SlackClient("xoxb-test").get()
