"""Registry of running games."""

from __future__ import annotations

import itertools
import threading

from .game import Game
from .player import Player


class GameManager:
    """Creates games, routes player actions to them and drops finished ones."""

    def __init__(self) -> None:
        self._games: dict[int, Game] = {}
        self._lock = threading.Lock()
        self._ids = itertools.count()

    def create_game(self) -> int:
        """Create an empty game and return its id."""
        with self._lock:
            game_id = next(self._ids)
            self._games[game_id] = Game(game_id)
        return game_id

    def add_player_to_game(self, player: Player, game_id: int) -> bool:
        """Seat a player in a game; False if the player is busy or the game is unknown or full."""
        if player.in_game:
            return False
        game = self.get_game(game_id)
        if game is None:
            return False
        return game.join(player)

    def leave_player_from_game(self, player: Player) -> bool:
        """Take a player out of their game, which is then discarded."""
        if player.current_game_id is None:
            return False
        game = self.get_game(player.current_game_id)
        if game is None:
            return False
        left = game.leave(player)
        if left:
            self.remove_game(game.id)
        return left

    def make_move(self, player: Player, x: int, y: int) -> bool:
        """Make a move in the player's game, discarding the game once it ends."""
        if player.current_game_id is None:
            return False
        game = self.get_game(player.current_game_id)
        if game is None:
            return False
        moved = game.make_move(player.id, x, y)
        if moved and game.is_over:
            self.remove_game(game.id)
        return moved

    def waiting_games(self) -> list[Game]:
        """Games with one player waiting for an opponent."""
        with self._lock:
            games = list(self._games.values())
        return [
            game
            for game in games
            if not game.is_over and game.player1 is not None and game.player2 is None
        ]

    def get_game(self, game_id: int) -> Game | None:
        """The game with this id, or None."""
        with self._lock:
            return self._games.get(game_id)

    def remove_game(self, game_id: int) -> None:
        """Forget a game, ending it if it is still running."""
        with self._lock:
            game = self._games.pop(game_id, None)
        if game is not None:
            game.close()