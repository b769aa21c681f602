"""Players and the registry that hands out their ids."""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass, field

from .notification import Notification, NotificationHandler


@dataclass(eq=False)
class Player:
    """A connected player, who may be seated in at most one game."""

    id: int
    nickname: str
    notification_handler: NotificationHandler | None = None
    current_game_id: int | None = field(default=None, init=False)

    @property
    def in_game(self) -> bool:
        """Whether the player is seated in a game."""
        return self.current_game_id is not None

    def join_game(self, game_id: int) -> bool:
        """Seat the player in a game; False if already seated elsewhere."""
        if self.in_game:
            return False
        self.current_game_id = game_id
        return True

    def leave_game(self) -> bool:
        """Unseat the player; False if the player was not in a game."""
        if not self.in_game:
            return False
        self.current_game_id = None
        return True

    def notify(self, notification: Notification) -> None:
        """Pass a notification to the handler, if one is set."""
        if self.notification_handler is not None:
            self.notification_handler(notification)


class PlayerManager:
    """Creates players with sequential ids starting from zero."""

    def __init__(self) -> None:
        self._ids = itertools.count()
        self._lock = threading.Lock()

    def create_player(self, nickname: str) -> Player:
        """Create a new player with the next free id."""
        with self._lock:
            player_id = next(self._ids)
        return Player(player_id, nickname)