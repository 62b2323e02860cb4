"""FastAPI-powered web UI for playing Tic Tac Toe in the browser."""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import threading

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from .game import BOARD_SIZE, GameState, Mark, PlaceResult, Status, winning_line

_logger = logging.getLogger(__name__)


# Ocean Professional theme
OCEAN_PRIMARY = "#2563EB"
OCEAN_SECONDARY = "#F59E0B"
TEXT_COLOR = "#111827"

TURN_TEXT: Dict[Mark, str] = {
    Mark.X: "Player X's turn",
    Mark.O: "Player O's turn",
}
STATUS_TEXT: Dict[Status, str] = {
    Status.IN_PROGRESS: "Game in progress",
    Status.X_WINS: "Player X wins!",
    Status.O_WINS: "Player O wins!",
    Status.DRAW: "It's a draw!",
}


def mark_color(mark: Mark) -> str:
    return OCEAN_PRIMARY if mark is Mark.X else OCEAN_SECONDARY


def status_color(status: Status) -> str:
    if status is Status.X_WINS:
        return OCEAN_PRIMARY
    if status in (Status.O_WINS, Status.DRAW):
        return OCEAN_SECONDARY
    return TEXT_COLOR


@dataclass
class GameSession:
    """Container for one board and the moves played on it."""

    state: GameState = field(default_factory=GameState)
    move_log: List[Dict[str, object]] = field(default_factory=list)
    last_result: Optional[PlaceResult] = None
    touched_at: float = field(default_factory=lambda: time.time())
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SESSIONS: Dict[str, GameSession] = {}
SESSIONS_LOCK = threading.Lock()
app = FastAPI(title="Tic Tac Toe", description="Classic 3x3 tic-tac-toe in the browser")

SESSION_TTL_SECONDS = 60 * 60  # 1 hour


class MoveRequest(BaseModel):
    """Request payload for placing a mark on an existing game."""

    index: int = Field(ge=0, le=BOARD_SIZE - 1, description="Row-major cell index")


def _cleanup_sessions() -> None:
    """Drop sessions nobody has touched for ``SESSION_TTL_SECONDS``."""

    now = time.time()
    expired = [
        session_id
        for session_id, session in list(SESSIONS.items())
        if now - session.touched_at >= SESSION_TTL_SECONDS
    ]
    for session_id in expired:
        SESSIONS.pop(session_id, None)
    if expired:
        _logger.info("Pruned %d idle game(s)", len(expired))


def _create_session() -> Tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    session = GameSession()
    session_id = uuid.uuid4().hex
    with SESSIONS_LOCK:
        _cleanup_sessions()
        SESSIONS[session_id] = session
    _logger.info("Created game %s", session_id)
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    with SESSIONS_LOCK:
        _cleanup_sessions()
        try:
            session = SESSIONS[game_id]
        except KeyError as exc:
            raise HTTPException(status_code=404, detail="Game not found") from exc
        session.touched_at = time.time()
        return session


def _serialize_result(result: PlaceResult) -> Dict[str, object]:
    return {
        "outcome": result.outcome.value,
        "index": result.index,
        "status": result.status.value,
        "mark": result.mark.value if result.mark is not None else None,
    }


def _serialize_locked(
    game_id: str, session: GameSession, result: Optional[PlaceResult]
) -> Dict[str, object]:
    # caller holds session.lock
    state = session.state
    status = state.status
    line = None
    if status in (Status.X_WINS, Status.O_WINS):
        # the winner is the player still on turn, since turns stop toggling
        line = winning_line(state.board, state.current_player)

    payload: Dict[str, object] = {
        "id": game_id,
        "cells": [c.value if c is not Mark.EMPTY else "" for c in state.board],
        "currentPlayer": state.current_player.value,
        "status": status.value,
        "gameActive": not state.is_over,
        "turnText": TURN_TEXT[state.current_player],
        "turnColor": mark_color(state.current_player),
        "statusText": STATUS_TEXT[status],
        "statusColor": status_color(status),
        "winningLine": list(line) if line is not None else None,
        "moveLog": list(session.move_log),
    }
    if result is not None:
        payload["lastResult"] = _serialize_result(result)
    return payload


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        return _serialize_locked(game_id, session, session.last_result)


def _apply_player_move(game_id: str, session: GameSession, index: int) -> Dict[str, object]:
    """Place a mark and return the state as this move left it."""

    with session.lock:
        result = session.state.place(index)
        session.last_result = result
        if not result.accepted:
            _logger.debug("Game %s ignored move on %d: %s", game_id, index, result.outcome.value)
        else:
            session.move_log.append({"player": result.mark.value, "index": index})
            _logger.debug("Game %s: %s placed on %d", game_id, result.mark.value, index)
            if result.status.is_terminal:
                _logger.info("Game %s finished: %s", game_id, result.status.value)
        return _serialize_locked(game_id, session, result)


def _reset_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        session.state.reset()
        session.move_log.clear()
        session.last_result = None
        payload = _serialize_locked(game_id, session, None)
    _logger.info("Reset game %s", game_id)
    return payload


@app.post("/api/game")
def create_game() -> Dict[str, object]:
    game_id, session = _create_session()
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(game_id: str, request: MoveRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    return _apply_player_move(game_id, session, request.index)


@app.post("/api/game/{game_id}/reset")
def reset_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _reset_session(game_id, session)


@app.delete("/api/game/{game_id}")
def delete_game(game_id: str) -> Dict[str, str]:
    with SESSIONS_LOCK:
        if SESSIONS.pop(game_id, None) is None:
            raise HTTPException(status_code=404, detail="Game not found")
    _logger.info("Deleted game %s", game_id)
    return {"id": game_id}


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>Tic Tac Toe</title>
    <style>
      :root {
        color-scheme: light;
        --ocean-primary: #2563EB;
        --ocean-secondary: #F59E0B;
        --ocean-error: #EF4444;
        --surface: #FFFFFF;
        --text: #111827;
        font-family: system-ui, -apple-system, BlinkMacSystemFont, \"Segoe UI\", sans-serif;
      }
      * {
        box-sizing: border-box;
      }
      body {
        margin: 0;
        min-height: 100vh;
        display: flex;
        justify-content: center;
        align-items: center;
        padding: 1.5rem 1rem;
        background: linear-gradient(180deg, rgba(37, 99, 235, 0.08), #f9fafb);
        color: var(--text);
      }
      main {
        background: var(--surface);
        border-radius: 18px;
        box-shadow: 0 20px 40px rgba(17, 24, 39, 0.12);
        padding: clamp(1.25rem, 4vw, 2rem);
        width: min(420px, 100%);
        text-align: center;
        animation: fade-in 220ms ease-out;
      }
      h1 {
        margin: 0 0 0.75rem;
        font-size: 1.6rem;
        letter-spacing: 0.04em;
      }
      #status {
        margin: 0 0 0.35rem;
        font-weight: 700;
        font-size: 1.15rem;
      }
      #turn {
        margin: 0 0 1.25rem;
        font-weight: 600;
      }
      .grid {
        display: grid;
        grid-template-columns: repeat(3, 1fr);
        gap: 0.5rem;
        margin-bottom: 1.25rem;
      }
      .grid.pulse {
        animation: pulse 120ms ease-out;
      }
      .cell {
        aspect-ratio: 1;
        font-size: clamp(2rem, 10vw, 3rem);
        font-weight: 700;
        border-radius: 12px;
        border: 1px solid rgba(37, 99, 235, 0.2);
        background: rgba(37, 99, 235, 0.04);
        cursor: pointer;
        font-family: inherit;
      }
      .cell:disabled {
        cursor: default;
      }
      .cell.placed {
        animation: pulse 120ms ease-out;
      }
      .cell.winning {
        background: rgba(37, 99, 235, 0.14);
      }
      #reset {
        font-size: 1rem;
        font-weight: 600;
        padding: 0.65rem 1.6rem;
        border-radius: 999px;
        border: none;
        background: var(--ocean-primary);
        color: var(--surface);
        cursor: pointer;
        font-family: inherit;
      }
      #error {
        color: var(--ocean-error);
        min-height: 1.25rem;
        margin: 0.75rem 0 0;
      }
      @keyframes fade-in {
        from { opacity: 0; }
        to { opacity: 1; }
      }
      @keyframes pulse {
        from { opacity: 0.6; }
        to { opacity: 1; }
      }
    </style>
  </head>
  <body>
    <main>
      <h1>Tic Tac Toe</h1>
      <p id=\"status\"></p>
      <p id=\"turn\"></p>
      <div class=\"grid\" id=\"grid\"></div>
      <button id=\"reset\" type=\"button\">Reset</button>
      <p id=\"error\"></p>
    </main>
    <script>
      const gridEl = document.getElementById('grid');
      const statusEl = document.getElementById('status');
      const turnEl = document.getElementById('turn');
      const resetButton = document.getElementById('reset');
      const errorEl = document.getElementById('error');
      const colors = { X: '#2563EB', O: '#F59E0B' };

      let gameId = null;
      let gameState = null;
      const cells = [];

      for (let i = 0; i < 9; i += 1) {
        const cell = document.createElement('button');
        cell.type = 'button';
        cell.className = 'cell';
        cell.addEventListener('click', () => sendMove(i));
        gridEl.appendChild(cell);
        cells.push(cell);
      }

      function pulse(el) {
        el.classList.remove('placed', 'pulse');
        void el.offsetWidth;
        el.classList.add(el === gridEl ? 'pulse' : 'placed');
      }

      function render() {
        if (!gameState) {
          return;
        }
        statusEl.textContent = gameState.statusText;
        statusEl.style.color = gameState.statusColor;
        turnEl.textContent = gameState.turnText;
        turnEl.style.color = gameState.turnColor;
        const winning = new Set(gameState.winningLine || []);
        gameState.cells.forEach((mark, index) => {
          const cell = cells[index];
          cell.textContent = mark;
          cell.style.color = mark ? colors[mark] : '';
          cell.disabled = Boolean(mark) || !gameState.gameActive;
          cell.classList.toggle('winning', winning.has(index));
        });
      }

      async function request(url, options = {}) {
        errorEl.textContent = '';
        const response = await fetch(url, options);
        if (!response.ok) {
          const payload = await response.json().catch(() => ({}));
          throw new Error(payload.detail || `Request failed (${response.status})`);
        }
        return response.json();
      }

      async function startGame() {
        try {
          gameState = await request('/api/game', { method: 'POST' });
          gameId = gameState.id;
          render();
        } catch (err) {
          errorEl.textContent = err.message;
        }
      }

      async function sendMove(index) {
        if (!gameId || !gameState || !gameState.gameActive) {
          return;
        }
        try {
          gameState = await request(`/api/game/${gameId}/move`, {
            method: 'POST',
            headers: { 'Content-Type': 'application/json' },
            body: JSON.stringify({ index }),
          });
          if (gameState.lastResult && gameState.lastResult.outcome === 'accepted') {
            pulse(cells[index]);
          }
          render();
        } catch (err) {
          errorEl.textContent = err.message;
        }
      }

      async function resetGame() {
        if (!gameId) {
          await startGame();
          return;
        }
        try {
          gameState = await request(`/api/game/${gameId}/reset`, { method: 'POST' });
          render();
          pulse(gridEl);
        } catch (err) {
          errorEl.textContent = err.message;
        }
      }

      resetButton.addEventListener('click', resetGame);
      startGame();
    </script>
  </body>
</html>
"""
