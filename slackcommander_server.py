from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path

import uvicorn

from slackcommander.app import create_app, load_commands
from slackcommander.config import MuxConfig, load_config
from slackcommander.dispatcher import SlackMux


def run_server(*, config: MuxConfig, commands_module: str) -> None:
    mux = SlackMux.from_config(config)
    load_commands(mux, commands_module)
    app = create_app(mux, path=config.path)
    uvicorn.run(app, host=config.host, port=config.port)


def build_config(args: argparse.Namespace) -> MuxConfig:
    cfg = load_config(args.config) if args.config is not None else MuxConfig(token="")
    return replace(
        cfg,
        token=args.token or cfg.token,
        ignore_formatting=args.ignore_formatting or cfg.ignore_formatting,
        dry_run=args.dry_run or cfg.dry_run,
        host=args.host or cfg.host,
        port=args.port or cfg.port,
    )


def main(argv: list[str] | None = None, *, runner=run_server) -> None:
    p = argparse.ArgumentParser(description="Slack slash command webhook server")
    p.add_argument("--config", default=None, type=Path, help="Path to a mux config JSON file")
    p.add_argument("--token", default=None, help="Slack verification token (overrides config)")
    p.add_argument("--ignore-formatting", action="store_true", help="Strip *bold*, _italic_ and ~strike~ wrappers")
    p.add_argument("--dry-run", action="store_true", help="Do not POST asynchronous responses")
    p.add_argument("--host", default=None)
    p.add_argument("--port", default=None, type=int)
    p.add_argument(
        "--commands-module",
        default="slackcommander.example_commands",
        help="Python module exposing `register(mux)`",
    )
    p.add_argument("--log-level", default="INFO")
    args = p.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    runner(config=build_config(args), commands_module=args.commands_module)


if __name__ == "__main__":
    main()
