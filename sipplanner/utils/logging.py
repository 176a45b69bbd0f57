from __future__ import annotations

import logging
import sys
from contextvars import ContextVar, Token
from datetime import datetime, timezone

# Context variables for structured logging
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")
goal_var: ContextVar[str] = ContextVar("goal", default="-")


class ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        record.goal = goal_var.get()
        return True


class SimpleStructuredFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")
        msg = record.getMessage()
        return (
            f"{ts} level={record.levelname} logger={record.name} "
            f"request_id={getattr(record, 'request_id', '-')} goal={getattr(record, 'goal', '-')} "
            f"msg={msg}"
        )


def setup_logging(level: str = "INFO") -> None:
    lvl = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(lvl)

    # Replace handlers (repeated CLI invocations in one process)
    root.handlers = []

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(lvl)
    handler.addFilter(ContextFilter())
    handler.setFormatter(SimpleStructuredFormatter())

    root.addHandler(handler)


def set_log_context(*, request_id: str) -> None:
    request_id_var.set(request_id)


def set_goal(goal_name: str) -> Token:
    """Tag log lines with the goal being planned; pass the token to reset_goal when done."""
    return goal_var.set(goal_name or "-")


def reset_goal(token: Token) -> None:
    goal_var.reset(token)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
