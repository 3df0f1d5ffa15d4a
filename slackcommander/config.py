from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigurationError
from .schema import SchemaRegistry, read_json


@dataclass(frozen=True)
class MuxConfig:
    token: str
    ignore_formatting: bool = False
    dry_run: bool = False
    delivery_timeout_seconds: float = 10.0
    slack_api_token: str | None = None
    host: str = "127.0.0.1"
    port: int = 8080
    path: str = "/"


def load_config(config_path: Path, *, schemas: SchemaRegistry | None = None) -> MuxConfig:
    try:
        raw = read_json(config_path)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(code="CONFIG_UNREADABLE", message=f"{config_path}: {e}") from e
    (schemas or SchemaRegistry()).validate(raw, "mux_config.schema.json")

    token = str(raw.get("token") or "").strip()
    if not token:
        raise ConfigurationError(code="TOKEN_MISSING", message=f"{config_path}: token is required")

    server = raw.get("server") or {}
    return MuxConfig(
        token=token,
        ignore_formatting=bool(raw.get("ignore_formatting", False)),
        dry_run=bool(raw.get("dry_run", False)),
        delivery_timeout_seconds=float(raw.get("delivery_timeout_seconds", 10.0)),
        slack_api_token=raw.get("slack_api_token"),
        host=str(server.get("host") or "127.0.0.1"),
        port=int(server.get("port", 8080)),
        path=str(server.get("path") or "/"),
    )
