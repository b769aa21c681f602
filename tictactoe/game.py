"""A single game of tic-tac-toe between two players."""

from __future__ import annotations

import threading
from enum import Enum

from .notification import Notification, NotificationType
from .player import Player

_SIZE = 3

_LINES = (
    *(tuple((i, j) for j in range(_SIZE)) for i in range(_SIZE)),
    *(tuple((j, i) for j in range(_SIZE)) for i in range(_SIZE)),
    tuple((i, i) for i in range(_SIZE)),
    tuple((i, _SIZE - 1 - i) for i in range(_SIZE)),
)


class Cell(Enum):
    """Content of a board cell."""

    NONE = 0
    X = 1
    O = 2  # noqa: E741


class Game:
    """A game board with up to two players; the first to join plays X."""

    def __init__(self, game_id: int) -> None:
        self.id = game_id
        self.player1: Player | None = None
        self.player2: Player | None = None
        self._current_player_id: int | None = None
        self._winner_id: int | None = None
        self._over = False
        self._board = [[Cell.NONE] * _SIZE for _ in range(_SIZE)]
        self._lock = threading.RLock()

    @property
    def is_over(self) -> bool:
        """Whether the game has finished."""
        return self._over

    def join(self, player: Player) -> bool:
        """Seat a player; False if the game is full or the player is already in it."""
        with self._lock:
            if self.player1 is None:
                self.player1 = player
                self._current_player_id = player.id
            elif self.player2 is None:
                if self.player1 is player:
                    return False
                self.player2 = player
                self.player1.notify(
                    Notification(NotificationType.PLAYER_JOINED, player.nickname)
                )
            else:
                return False
            player.join_game(self.id)
            return True

    def leave(self, player: Player) -> bool:
        """Remove a player; with two players seated the other one wins."""
        with self._lock:
            if self._over or (self.player1 is not player and self.player2 is not player):
                return False

            if self.player1 is not None and self.player2 is not None:
                winner = self.player2 if player is self.player1 else self.player1
                self._winner_id = winner.id
                winner.notify(
                    Notification(NotificationType.PLAYER_LEFT, player.nickname)
                )
                self.player1.leave_game()
                self.player2.leave_game()
                self._over = True
                return True

            player.leave_game()
            self._end()
            return True

    def make_move(self, player_id: int, x: int, y: int) -> bool:
        """Place the current player's mark at (x, y); False if the move is not allowed."""
        with self._lock:
            if (
                self._over
                or self.player1 is None
                or self.player2 is None
                or player_id != self._current_player_id
                or not self._is_valid_move(x, y)
            ):
                return False

            cell = Cell.X if self._current_player_id == self.player1.id else Cell.O
            self._board[x][y] = cell
            mover = self.player1 if self.player1.id == player_id else self.player2
            notification = Notification(
                NotificationType.PLAYER_MOVED,
                mover.nickname,
                f"{x} {y} {cell.name}",
            )
            self.player1.notify(notification)
            self.player2.notify(notification)

            outcome = self._check_finish()
            if outcome is None:
                self._switch_player()
            else:
                if outcome is not Cell.NONE:
                    winner = self.player1 if outcome is Cell.X else self.player2
                    self._winner_id = winner.id
                self._end()
            return True

    def close(self) -> None:
        """End the game if it is still running."""
        with self._lock:
            self._end()

    def _is_valid_move(self, x: int, y: int) -> bool:
        return 0 <= x < _SIZE and 0 <= y < _SIZE and self._board[x][y] is Cell.NONE

    def _switch_player(self) -> None:
        assert self.player1 is not None and self.player2 is not None
        if self._current_player_id == self.player1.id:
            self._current_player_id = self.player2.id
        else:
            self._current_player_id = self.player1.id

    def _check_finish(self) -> Cell | None:
        """The winning mark, Cell.NONE for a draw, or None while play goes on."""
        for line in _LINES:
            first = self._board[line[0][0]][line[0][1]]
            if first is not Cell.NONE and all(
                self._board[i][j] is first for i, j in line
            ):
                return first
        if all(cell is not Cell.NONE for row in self._board for cell in row):
            return Cell.NONE
        return None

    def _end(self) -> None:
        if self._over:
            return
        self._over = True

        winner_nickname = ""
        if self._winner_id is not None and self.player1 is not None:
            if self.player1.id == self._winner_id:
                winner_nickname = self.player1.nickname
            elif self.player2 is not None:
                winner_nickname = self.player2.nickname
        notification = Notification(NotificationType.GAME_ENDED, winner_nickname)

        for player in (self.player1, self.player2):
            if player is not None:
                player.leave_game()

        if self.player1 is not None and self.player2 is not None:
            self.player1.notify(notification)
            self.player2.notify(notification)