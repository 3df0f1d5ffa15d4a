from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from .errors import DeliveryError
from .response import CommandResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeliveryRecord:
    url: str
    payload: dict[str, Any]


@dataclass(frozen=True)
class Delivery:
    """Posts command responses to a Slack `response_url`.

    With `dry_run` set no request is made; the payload is kept in `sent`.
    """

    dry_run: bool = False
    timeout_seconds: float = 10.0
    client: httpx.Client | None = None
    sent: list[DeliveryRecord] = field(default_factory=list, compare=False)

    def deliver(self, response: CommandResponse, url: str) -> None:
        try:
            body = json.dumps(response.to_payload(), ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise DeliveryError(code="SERIALIZE_FAILED", message=f"cannot encode response: {e}") from e

        if self.dry_run:
            self.sent.append(DeliveryRecord(url=url, payload=json.loads(body)))
            logger.info("dry run: skipped POST to %s", url)
            return

        headers = {"Content-Type": "application/json"}
        try:
            if self.client is not None:
                resp = self.client.post(url, content=body, headers=headers, timeout=self.timeout_seconds)
            else:
                resp = httpx.post(url, content=body, headers=headers, timeout=self.timeout_seconds)
            reply = resp.text
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise DeliveryError(code="TRANSPORT_FAILED", message=f"POST {url} failed: {e}") from e

        if resp.status_code >= 400:
            raise DeliveryError(
                code="HTTP_STATUS",
                message=f"POST {url} returned {resp.status_code}: {reply}",
            )
        logger.debug("delivered response to %s: %s", url, reply)
