from __future__ import annotations

from .dispatcher import CommandArgs, SlackMux
from .registry import ExecutionMode
from .response import CommandResponse, simple_text_response


def help_command(args: CommandArgs) -> CommandResponse:
    return simple_text_response("Hello, " + args.user)


def echo_command(args: CommandArgs) -> str:
    return " ".join(args.args[1:])


def register(mux: SlackMux) -> None:
    mux.register_command("help", help_command)
    mux.register_command("echo", echo_command, mode=ExecutionMode.ASYNC)

    slack = mux.slack
    if slack is None:
        return

    def members_command(args: CommandArgs) -> str:
        names = slack.channel_members(args.channel_id)
        return "members: " + ", ".join(names) if names else "no members found"

    mux.register_command("members", members_command, mode=ExecutionMode.ASYNC)
