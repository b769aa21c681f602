"""Command codes of the text protocol and parsing of server messages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class InCommand(IntEnum):
    """Commands a client sends to the server."""

    AUTH = 0
    CREATE_GAME = 1
    GET_GAMES = 2
    JOIN_GAME = 3
    LEAVE_GAME = 4
    MOVE = 5


class OutCommand(IntEnum):
    """Messages the server sends to a client."""

    ERROR = -1
    PLAYER_AUTHED = 0
    GAME_CREATED = 1
    GAME_LIST = 2
    JOINED_GAME = 3
    LEFT_GAME = 4
    MOVED = 5
    OPPONENT_JOINED = 6
    GAME_ENDED = 7


class ErrorCode(IntEnum):
    """Reasons carried by an ERROR message."""

    UNKNOWN_COMMAND = 0
    INCORRECT_FORMAT = 1
    ERROR_NOT_AUTH = 2
    ERROR_ALREADY_AUTH = 2
    ERROR_JOIN = 3
    ERROR_CREATE = 4
    ERROR_LEAVE = 5
    ERROR_MOVE = 6


class GameEndedCode(IntEnum):
    """How a game ended."""

    DRAW = 0
    OPPONENT_LEFT = 1
    WIN = 2


@dataclass(frozen=True)
class Message:
    """A parsed server message."""

    code: OutCommand
    error_code: ErrorCode | None = None
    message: str = ""


def parse_message(data: str) -> Message:
    """Parse a server message; raises ValueError if it is malformed."""
    head, _, rest = data.partition(" ")
    code = OutCommand(int(head))
    if code is not OutCommand.ERROR:
        return Message(code=code, message=rest)

    error_head, _, error_rest = rest.partition(" ")
    return Message(
        code=code,
        error_code=ErrorCode(int(error_head)),
        message=error_rest,
    )