"""Progress events reported while an extraction call runs."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Literal

logger = logging.getLogger(__name__)

EventName = Literal["started", "status", "result", "done"]

# Async callback receiving (event name, payload), e.g. to drive a progress bar.
EventCallback = Callable[[str, dict[str, Any]], Awaitable[None]]

STEP_MESSAGES: dict[str, str] = {
    "fetching": "Fetching page...",
    "context": "Extracting text context...",
    "images": "Ranking images...",
    "colors": "Harvesting colors...",
    "palette": "Completing palette...",
    "analysis": "Preparing analysis input...",
}


async def emit_event(
    on_event: EventCallback | None,
    event: EventName,
    data: dict[str, Any] | None = None,
) -> None:
    """Send *event* to the callback, if one was given."""
    if on_event is None:
        return
    logger.debug("progress event emitted", extra={"event": event})
    await on_event(event, data or {})


async def emit_status(on_event: EventCallback | None, step: str) -> None:
    """``status`` event announcing that *step* is starting."""
    message = STEP_MESSAGES.get(step, f"Running {step}...")
    await emit_event(on_event, "status", {"step": step, "message": message})
