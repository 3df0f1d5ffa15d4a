from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from .errors import SlackApiError

logger = logging.getLogger(__name__)

SLACK_API_BASE = "https://slack.com/api"


@dataclass(frozen=True)
class SlackService:
    token: str
    client: httpx.Client | None = None
    base_url: str = SLACK_API_BASE
    timeout_seconds: float = 10.0

    def _call(self, method: str, params: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.base_url.rstrip('/')}/{method}"
        headers = {"Authorization": f"Bearer {self.token}"}
        try:
            if self.client is not None:
                resp = self.client.post(url, data=params, headers=headers, timeout=self.timeout_seconds)
            else:
                resp = httpx.post(url, data=params, headers=headers, timeout=self.timeout_seconds)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise SlackApiError(code="TRANSPORT_FAILED", message=f"{method}: {e}") from e
        if not isinstance(data, dict) or not data.get("ok"):
            error = data.get("error") if isinstance(data, dict) else None
            raise SlackApiError(code="API_ERROR", message=f"{method}: {error or 'not ok'}")
        return data

    def send_message(self, text: str, channel: str) -> None:
        try:
            self._call("chat.postMessage", {"channel": channel, "text": text, "as_user": "true"})
        except SlackApiError as e:
            logger.warning("could not post to %s: %s", channel, e.message)

    def channel_members(self, channel_id: str) -> list[str]:
        """Names of the human, non-deleted members of a channel."""
        data = self._call("conversations.members", {"channel": channel_id})
        member_ids = data.get("members") or []
        names: list[str] = []
        for user_id in member_ids:
            info = self._call("users.info", {"user": user_id}).get("user") or {}
            if info.get("deleted") or info.get("is_bot"):
                continue
            name = info.get("name")
            if isinstance(name, str):
                names.append(name)
        return names
