"""Structlog setup shared by every probe.

Terminals get the colored dev renderer; everything else gets one JSON
object per line.
"""

import logging
import os
import sys
from typing import Literal

import structlog

from shared_kernel.observability_context import ObservationContext

Renderer = Literal["console", "json"]

_TRUTHY = ("1", "true", "yes")


def _pick_renderer() -> Renderer:
    # FORCE_COLOR lets containers without a TTY keep colored output
    if os.environ.get("FORCE_COLOR", "").lower() in _TRUTHY:
        return "console"
    return "console" if sys.stdout.isatty() else "json"


def configure_logging(debug: bool = False, renderer: Renderer | None = None) -> None:
    """Install the structlog pipeline.

    Args:
        debug: Let debug events (group_retrieved, groups_batch_loaded)
            through. Info and above always pass.
        renderer: Force "console" or "json"; detected from the terminal
            when omitted.
    """
    chosen = renderer or _pick_renderer()

    chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if chosen == "json":
        chain.append(structlog.processors.format_exc_info)
        chain.append(structlog.processors.JSONRenderer())
    else:
        chain.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=chain,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if debug else logging.INFO
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def bind_observation_context(context: ObservationContext) -> None:
    """Attach request metadata to every event logged from this task."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**context.as_dict())
