"""REST and WebSocket server for the cron expression tool."""

import json
import logging
from datetime import datetime
from typing import Any

import uvicorn
from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from pydantic import BaseModel, Field

from cronexpr.config import get_config
from cronexpr.presets import DEFAULT_EXPRESSION, compose
from cronweb.handlers import (
    handle_compose,
    handle_config,
    handle_expression,
    handle_preset,
    handle_reset,
    run_analysis,
    send_ws,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Cron Expression Tool")

_WS_HANDLERS = {
    "expression": handle_expression,
    "compose": handle_compose,
    "preset": handle_preset,
    "reset": handle_reset,
    "config": handle_config,
}


class AnalyzeRequest(BaseModel):
    expression: str
    reference: datetime | None = None
    count: int | None = Field(default=None, ge=0)
    # IANA zone name, e.g. "Europe/Paris"
    timezone: str | None = None


class ComposeRequest(BaseModel):
    minute: str = "*"
    hour: str = "*"
    day: str = "*"
    month: str = "*"
    weekday: str = "*"
    reference: datetime | None = None
    count: int | None = Field(default=None, ge=0)
    # IANA zone name, e.g. "Europe/Paris"
    timezone: str | None = None


@app.on_event("startup")
async def startup() -> None:
    config = get_config()
    logger.info(
        "Cron tool started at http://%s:%d (%d presets)",
        config.server.host,
        config.server.port,
        len(config.all_presets()),
    )


@app.get("/api/presets")
async def list_presets() -> list[dict[str, str]]:
    """Return the preset library."""
    return [
        {"label": preset.label, "expression": preset.expression}
        for preset in get_config().all_presets()
    ]


@app.get("/api/default")
async def default_expression() -> dict[str, Any]:
    """Analysis of the default expression, used by the reset button."""
    return run_analysis(DEFAULT_EXPRESSION)


@app.post("/api/analyze")
async def analyze_expression(request: AnalyzeRequest) -> dict[str, Any]:
    """Validate, describe and list upcoming runs for an expression."""
    try:
        return run_analysis(request.expression, request.reference, request.count, request.timezone)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/api/compose")
async def compose_expression(request: ComposeRequest) -> dict[str, Any]:
    """Join builder field inputs and analyze the result."""
    raw = compose(request.minute, request.hour, request.day, request.month, request.weekday)
    try:
        return run_analysis(raw, request.reference, request.count, request.timezone)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket) -> None:
    """Live analysis while the user types."""
    await ws.accept()
    logger.info("Client connected")

    try:
        while True:
            raw = await ws.receive_text()
            try:
                data = json.loads(raw)
            except json.JSONDecodeError:
                await send_ws(ws, "error", "Invalid message format.")
                continue
            if not isinstance(data, dict):
                await send_ws(ws, "error", "Invalid message format.")
                continue

            msg_type = data.get("type", "expression")
            handler = _WS_HANDLERS.get(msg_type)
            if handler is None:
                await send_ws(ws, "error", f"Unknown message type: {msg_type}")
                continue
            await handler(ws, data)
    except WebSocketDisconnect:
        logger.info("Client disconnected")
    except Exception:
        logger.exception("WebSocket error")


def main() -> None:
    """Entry point for `python -m cronweb.server`."""
    config = get_config()
    logging.basicConfig(
        level=config.server.log_level.upper(),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    uvicorn.run(
        "cronweb.server:app",
        host=config.server.host,
        port=config.server.port,
        log_level=config.server.log_level,
    )


if __name__ == "__main__":
    main()
