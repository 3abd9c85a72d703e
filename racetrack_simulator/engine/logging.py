from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, override

from rich.logging import RichHandler
from rich.markup import escape

if TYPE_CHECKING:
    from racetrack_simulator.engine.state import LogContext
    from racetrack_simulator.engine.turn_engine import TurnEngine

ROOT_LOGGER = "racetrack"

# "<idx>:<car id>" as produced by Vehicle.repr; ids may be any symbol, "[" arrives escaped
VEHICLE_PATTERN = re.compile(r"\b(\d:(?:\\\[|\S))")

COLOR = {
    "move": "bold green",
    "crash": "bold red",
    "win": "bold magenta",
    "finish": "bold blue",
    "warning": "bold red",
    "vehicle": "yellow",
    "prefix": "dim",
}

KEYWORDS = {
    "Move": "move",
    "Crash": "crash",
    "Win": "win",
    "Finish": "finish",
}


class ContextFilter(logging.Filter):
    """Inject per-engine turn context into every log record."""

    def __init__(self, engine: TurnEngine, name: str = "") -> None:
        super().__init__(name)
        self.engine: TurnEngine = engine

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        logctx: LogContext = self.engine.log_context
        record.engine_id = logctx.engine_id
        record.total_turn = logctx.total_turn
        record.turn_log_count = logctx.turn_log_count
        record.vehicle_repr = logctx.current_vehicle_repr
        logctx.inc_log_count()
        return True


class RichMarkupFormatter(logging.Formatter):
    @override
    def format(self, record: logging.LogRecord) -> str:
        engine_id = getattr(record, "engine_id", 0)
        total_turn = getattr(record, "total_turn", 0)
        turn_log_count = getattr(record, "turn_log_count", 0)
        vehicle_repr = getattr(record, "vehicle_repr", "_")
        prefix = escape(f"{engine_id} {total_turn}.{vehicle_repr}.{turn_log_count}")

        styled = escape(record.getMessage())
        for word, color_key in KEYWORDS.items():
            color = COLOR[color_key]
            styled = re.sub(rf"\b{word}\b", f"[{color}]{word}[/{color}]", styled)

        styled = VEHICLE_PATTERN.sub(
            rf"[{COLOR['vehicle']}]\1[/{COLOR['vehicle']}]", styled
        )

        if record.levelno >= logging.WARNING:
            styled = f"[{COLOR['warning']}]{styled}[/{COLOR['warning']}]"

        return f"[{COLOR['prefix']}]{prefix}[/{COLOR['prefix']}]  {styled}"


def configure_logging(level: int = logging.INFO) -> None:
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    handler = RichHandler(markup=True, show_path=False, show_time=False)
    handler.setFormatter(RichMarkupFormatter())
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False
