"""Message handling functions for the cron WebSocket/REST server."""

import logging
from datetime import datetime, timezone, tzinfo
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import WebSocket
from pydantic import BaseModel, Field, ValidationError
from tzlocal import get_localzone_name

from cronexpr.analysis import Analysis, analyze
from cronexpr.config import get_config, update_config_from_dict
from cronexpr.fields import FIELD_NAMES
from cronexpr.presets import DEFAULT_EXPRESSION, compose

logger = logging.getLogger(__name__)

MAX_COUNT = 100
# One week of minutes
MAX_PROBE_LIMIT = 7 * 24 * 60


class EngineUpdate(BaseModel):
    occurrence_count: int | None = Field(default=None, ge=0, le=MAX_COUNT, strict=True)
    max_probes: int | None = Field(default=None, ge=1, le=MAX_PROBE_LIMIT, strict=True)


class ConfigUpdate(BaseModel):
    """Settings a client may change at runtime. Other sections are ignored."""

    engine: EngineUpdate | None = None


async def send_ws(
    ws: WebSocket,
    msg_type: str,
    content: str,
    role: str = "system",
    metadata: dict | None = None,
) -> None:
    """Send a message to the client."""
    await ws.send_json(
        {
            "type": msg_type,
            "content": content,
            "role": role,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "metadata": metadata or {},
        }
    )


def load_zone(name: str) -> ZoneInfo:
    """Look up an IANA timezone.

    Raises:
        ValueError: If the name is not a known timezone.
    """
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, TypeError) as e:
        raise ValueError(f"Unknown timezone: {name}") from e


def server_zone() -> ZoneInfo | None:
    """The configured timezone, else the system's IANA zone, if known."""
    name = get_config().server.timezone
    if not name:
        try:
            name = get_localzone_name()
        except ZoneInfoNotFoundError:
            logger.warning("Could not determine the local timezone")
            return None
    if not name:
        return None
    try:
        return load_zone(name)
    except ValueError:
        logger.warning("Unknown timezone %r, using the system UTC offset", name)
        return None


def resolve_reference(
    reference: datetime | None,
    timezone_name: str | None = None,
) -> tuple[datetime, ZoneInfo | None]:
    """Pick the reference instant and the zone its calendar fields are read in.

    An explicit timezone wins over the server's. Aware references are
    converted into the zone; naive ones are wall-clock times in it.
    Without a reference the current time is used.

    Raises:
        ValueError: If `timezone_name` is not a known timezone.
    """
    zone = load_zone(timezone_name) if timezone_name else server_zone()
    if reference is None:
        now = datetime.now(zone) if zone else datetime.now().astimezone()
        return now, zone
    if zone is not None:
        if reference.tzinfo is not None:
            reference = reference.astimezone(zone)
        elif timezone_name:
            reference = reference.replace(tzinfo=zone)
    return reference, zone


def parse_reference(value: str | None) -> datetime | None:
    """Parse an ISO 8601 reference time; empty means 'now'.

    Raises:
        ValueError: If the value is not a valid ISO 8601 datetime.
    """
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def timezone_label(zone: tzinfo | None) -> str:
    """Label like 'LOCAL TIME (NEW YORK)' from an IANA zone name."""
    key = getattr(zone, "key", None)
    if not key:
        return "LOCAL TIME"
    city = key.split("/")[-1].replace("_", " ").upper()
    return f"LOCAL TIME ({city})"


def analysis_payload(analysis: Analysis, zone: tzinfo | None) -> dict[str, Any]:
    """Convert an Analysis to a JSON-serializable dict."""
    return {
        "expression": analysis.expression,
        "valid": analysis.valid,
        "error": analysis.error,
        "description": analysis.description,
        "occurrences": [run.isoformat() for run in analysis.occurrences],
        "legend": [{"value": value, "label": label} for value, label in analysis.legend],
        "fields": analysis.fields,
        "preset": analysis.preset.label if analysis.preset else None,
        "timezone": timezone_label(zone),
    }


def run_analysis(
    raw: str,
    reference: datetime | None = None,
    count: int | None = None,
    timezone_name: str | None = None,
) -> dict[str, Any]:
    """Analyze raw text using the configured engine settings.

    Raises:
        ValueError: If `timezone_name` is not a known timezone.
    """
    reference, zone = resolve_reference(reference, timezone_name)
    config = get_config()
    analysis = analyze(
        raw,
        reference,
        count=config.engine.occurrence_count if count is None else count,
        max_probes=config.engine.max_probes,
        presets=config.all_presets(),
    )
    return analysis_payload(analysis, zone)


async def send_analysis(ws: WebSocket, raw: str, data: dict) -> None:
    """Analyze an expression and send the result to the client."""
    try:
        reference = parse_reference(data.get("reference"))
    except ValueError:
        await send_ws(ws, "error", f"Invalid reference time: {data.get('reference')}")
        return
    count = data.get("count")
    if count is not None and (not isinstance(count, int) or count < 0):
        await send_ws(ws, "error", f"Invalid count: {count}")
        return
    try:
        payload = run_analysis(raw, reference, count, data.get("timezone"))
    except ValueError as e:
        await send_ws(ws, "error", str(e))
        return
    content = payload["description"] if payload["valid"] else payload["error"]
    await send_ws(ws, "analysis", content, metadata=payload)


async def handle_expression(ws: WebSocket, data: dict) -> None:
    """Handle a typed expression."""
    await send_analysis(ws, str(data.get("expression", "")), data)


async def handle_compose(ws: WebSocket, data: dict) -> None:
    """Handle builder input: join the five field inputs into one expression."""
    fields = data.get("fields", {})
    parts = [str(fields.get(name, "")) for name in FIELD_NAMES]
    await send_analysis(ws, compose(*parts), data)


async def handle_preset(ws: WebSocket, data: dict) -> None:
    """Handle a preset selection."""
    await send_analysis(ws, str(data.get("preset", "")), data)


async def handle_reset(ws: WebSocket, data: dict) -> None:
    """Reset to the default expression."""
    await send_analysis(ws, DEFAULT_EXPRESSION, data)


async def handle_config(ws: WebSocket, data: dict) -> None:
    """Apply runtime config updates sent by the client."""
    updates = data.get("config", {})
    if not updates:
        return

    try:
        update = ConfigUpdate.model_validate(updates)
    except ValidationError as e:
        error = e.errors()[0]
        location = ".".join(str(part) for part in error["loc"])
        logger.warning("Rejected config update %s: %s", updates, e)
        await send_ws(ws, "error", f"Invalid setting {location}: {error['msg']}")
        return

    update_config_from_dict(update.model_dump(exclude_none=True))
    config = get_config()
    logger.info(
        "Active config now: occurrence_count=%d, max_probes=%d",
        config.engine.occurrence_count,
        config.engine.max_probes,
    )
    await send_ws(ws, "status", "Settings updated.")
