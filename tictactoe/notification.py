"""Events that a game sends to its players."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto


class NotificationType(Enum):
    """Kinds of game events a player can be told about."""

    PLAYER_JOINED = auto()
    PLAYER_LEFT = auto()
    PLAYER_MOVED = auto()
    GAME_ENDED = auto()


@dataclass(frozen=True)
class Notification:
    """A game event, naming the player it concerns."""

    type: NotificationType
    player_nickname: str
    extra_info: str = ""


NotificationHandler = Callable[[Notification], None]