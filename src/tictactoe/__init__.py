"""Tic Tac Toe package exposing the game rules and the web application."""

from .game import GameState, Mark, Outcome, PlaceResult, Status, evaluate
from .ui import app

__all__ = ["GameState", "Mark", "Outcome", "PlaceResult", "Status", "evaluate", "app"]
