from typing import Any, Optional, Protocol
import logging

import httpx

from models.domain_models import Player
from .exceptions import MembershipLookupFailed

logger = logging.getLogger(__name__)


class MembershipResolver(Protocol):
    async def resolve_member(self, user_name: str, channel_id: str) -> Optional[Player]:
        """Return the channel member called `user_name`, or None if there is none.

        Raises:
            MembershipLookupFailed: if the platform could not be queried.
        """


class SlackClient:
    """Async Slack Web API client with lifecycle management.

    Usage:
        client = SlackClient(token)
        await client.init()
        player = await client.resolve_member("alice", "C123")
        await client.close()
    """

    def __init__(self, token: str, *, base_url: str = "https://slack.com/api", timeout: float = 10.0,
                 transport: httpx.AsyncBaseTransport | None = None):
        self.token = token
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def init(self) -> None:
        """Create the underlying HTTP client. Must be awaited."""
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Authorization": f"Bearer {self.token}"},
            timeout=self.timeout,
            transport=self._transport,
        )

    async def close(self) -> None:
        if self._client is None:
            return
        await self._client.aclose()
        self._client = None

    def get(self) -> httpx.AsyncClient:
        """Return the underlying client. Raises if not initialized."""
        if self._client is None:
            raise RuntimeError("Slack client not initialized; call init() first")
        return self._client

    async def call(self, method: str, **params: Any) -> dict[str, Any]:
        """Invoke a Web API method and return its JSON body.

        Raises:
            MembershipLookupFailed: on transport errors or an `ok: false` reply.
        """
        try:
            response = await self.get().get(f"/{method}", params=params)
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error(f"[SLACK] {method} failed: {exc}")
            raise MembershipLookupFailed(f"{method} failed: {exc}") from exc

        if not body.get("ok"):
            error = body.get("error", "unknown_error")
            logger.error(f"[SLACK] {method} returned error: {error}")
            raise MembershipLookupFailed(f"{method} returned {error}", code=error)
        return body

    async def _paginate(self, method: str, key: str, **params: Any) -> list[Any]:
        items: list[Any] = []
        cursor = None
        while True:
            if cursor:
                params["cursor"] = cursor
            body = await self.call(method, **params)
            items.extend(body.get(key) or [])
            cursor = (body.get("response_metadata") or {}).get("next_cursor")
            if not cursor:
                return items

    async def auth_test(self) -> dict[str, Any]:
        """Verify the API token. Raises MembershipLookupFailed if it is rejected."""
        info = await self.call("auth.test")
        logger.info(f"[SLACK] Authenticated as {info.get('user')} in team {info.get('team')}")
        return info

    async def resolve_member(self, user_name: str, channel_id: str) -> Optional[Player]:
        members = await self._paginate("users.list", "members", limit=200)
        user = next((m for m in members if m.get("name") == user_name), None)
        if user is None:
            logger.info(f"[SLACK] No user named {user_name}")
            return None

        channel_members = await self._paginate("conversations.members", "members", channel=channel_id, limit=200)
        if user["id"] not in channel_members:
            logger.info(f"[SLACK] {user_name} is not a member of {channel_id}")
            return None
        return Player(name=user_name, id=user["id"])
