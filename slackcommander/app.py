from __future__ import annotations

import importlib

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from .dispatcher import SlackMux


def load_commands(mux: SlackMux, commands_module: str) -> None:
    mod = importlib.import_module(commands_module)
    register = getattr(mod, "register", None)
    if register is None:
        raise RuntimeError(f"commands module must expose `register(mux)`: {commands_module}")
    register(mux)


def create_app(mux: SlackMux, *, path: str = "/") -> FastAPI:
    app = FastAPI(title="slackcommander", version="0.1.0")

    @app.get("/healthz")
    def healthz() -> dict:
        return {"ok": True, "commands": mux.registered_commands()}

    @app.post(path)
    async def slash_command(request: Request) -> Response:
        form = await request.form()
        fields = {k: v for k, v in form.items() if isinstance(v, str)}
        result = await run_in_threadpool(mux.dispatch, fields)
        if result.payload is not None:
            return JSONResponse(result.payload, status_code=result.status_code)
        return PlainTextResponse(result.body, status_code=result.status_code)

    return app
