"""Multiplayer tic-tac-toe: game logic, text protocol and WebSocket server."""

__version__ = "0.1.0"