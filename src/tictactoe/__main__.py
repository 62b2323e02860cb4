"""Entry point for running the game via ``python -m tictactoe``."""

from __future__ import annotations

import logging
import os

import uvicorn

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def resolve_log_level(value: str) -> str:
    """Normalize a level name, rejecting anything ``logging`` does not know."""

    level = value.strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(
            f"Unsupported TICTACTOE_LOG_LEVEL {value!r}. "
            f"Choose one of {', '.join(LOG_LEVELS)}."
        )
    return level


def main() -> None:
    """Start the FastAPI-powered Tic Tac Toe web server."""

    host = os.environ.get("TICTACTOE_HOST", "0.0.0.0")
    port = int(os.environ.get("TICTACTOE_PORT", "8000"))
    try:
        log_level = resolve_log_level(os.environ.get("TICTACTOE_LOG_LEVEL", "INFO"))
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run("tictactoe.ui:app", host=host, port=port, reload=False, log_level=log_level.lower())


if __name__ == "__main__":
    main()
