"""Handling of one client's commands and the game events sent back to it."""

from __future__ import annotations

import re
from collections.abc import Callable

from .game_manager import GameManager
from .notification import Notification, NotificationType
from .player import Player, PlayerManager
from .protocol import ErrorCode, GameEndedCode, InCommand, OutCommand

_INT_PREFIX = re.compile(r"\s*([+-]?[0-9]+)")


def _parse_int(text: str) -> int:
    """Read the integer at the start of text, ignoring whatever follows it."""
    match = _INT_PREFIX.match(text)
    if match is None:
        raise ValueError(f"not a number: {text!r}")
    return int(match.group(1))


def _reply(code: OutCommand, *fields: object) -> str:
    return " ".join(str(item) for item in (int(code), *fields))


def _error(error: ErrorCode) -> str:
    return _reply(OutCommand.ERROR, int(error))


def format_notification(notification: Notification) -> str:
    """Render a game event as a server message."""
    nickname = notification.player_nickname
    if notification.type is NotificationType.PLAYER_JOINED:
        return _reply(OutCommand.OPPONENT_JOINED, nickname)
    if notification.type is NotificationType.PLAYER_LEFT:
        return _reply(OutCommand.GAME_ENDED, int(GameEndedCode.OPPONENT_LEFT))
    if notification.type is NotificationType.PLAYER_MOVED:
        return _reply(OutCommand.MOVED, notification.extra_info, nickname)
    if not nickname:
        return _reply(OutCommand.GAME_ENDED, int(GameEndedCode.DRAW))
    return _reply(OutCommand.GAME_ENDED, int(GameEndedCode.WIN), nickname)


class Session:
    """One client's conversation with the server.

    Answers to commands are returned by process_command; game events for the
    client's player are delivered through the send callable.
    """

    def __init__(
        self,
        player_manager: PlayerManager,
        game_manager: GameManager,
        send: Callable[[str], None],
    ) -> None:
        self.player: Player | None = None
        self._player_manager = player_manager
        self._game_manager = game_manager
        self._send = send
        self._closed = False
        self._handlers: dict[InCommand, Callable[[list[str]], str]] = {
            InCommand.AUTH: self._auth,
            InCommand.CREATE_GAME: self._create_game,
            InCommand.GET_GAMES: self._get_games,
            InCommand.JOIN_GAME: self._join_game,
            InCommand.LEAVE_GAME: self._leave_game,
            InCommand.MOVE: self._move,
        }

    def process_command(self, command: str) -> str:
        """Execute a client command; returns the answer, or "" when there is none."""
        parts = command.split(" ")
        try:
            return self._dispatch(parts)
        except (ValueError, IndexError):
            return _error(ErrorCode.INCORRECT_FORMAT)

    def close(self) -> None:
        """End the session, taking its player out of any game."""
        if self._closed:
            return
        self._closed = True
        if self.player is not None:
            self._game_manager.leave_player_from_game(self.player)
            self.player.notification_handler = None

    def _dispatch(self, parts: list[str]) -> str:
        code = _parse_int(parts[0])
        if code != InCommand.AUTH and self.player is None:
            return _error(ErrorCode.ERROR_NOT_AUTH)
        try:
            command = InCommand(code)
        except ValueError:
            return _error(ErrorCode.UNKNOWN_COMMAND)
        return self._handlers[command](parts)

    def _on_notification(self, notification: Notification) -> None:
        if not self._closed:
            self._send(format_notification(notification))

    def _auth(self, parts: list[str]) -> str:
        if self.player is not None:
            return _error(ErrorCode.ERROR_ALREADY_AUTH)
        if len(parts) < 2:
            return _error(ErrorCode.INCORRECT_FORMAT)
        self.player = self._player_manager.create_player(parts[1])
        self.player.notification_handler = self._on_notification
        return _reply(OutCommand.PLAYER_AUTHED, self.player.id)

    def _create_game(self, parts: list[str]) -> str:
        assert self.player is not None
        if self.player.in_game:
            return _error(ErrorCode.ERROR_CREATE)
        game_id = self._game_manager.create_game()
        if not self._game_manager.add_player_to_game(self.player, game_id):
            return _error(ErrorCode.ERROR_CREATE)
        return _reply(OutCommand.GAME_CREATED, game_id)

    def _get_games(self, parts: list[str]) -> str:
        entries = [
            f"{game.id}|{game.player1.nickname}"
            for game in self._game_manager.waiting_games()
            if game.player1 is not None
        ]
        return _reply(OutCommand.GAME_LIST, *entries)

    def _join_game(self, parts: list[str]) -> str:
        assert self.player is not None
        game_id = _parse_int(parts[1])
        joined = self._game_manager.add_player_to_game(self.player, game_id)
        game = self._game_manager.get_game(game_id)
        if not joined or game is None or game.player1 is None:
            return _error(ErrorCode.ERROR_JOIN)
        return _reply(OutCommand.JOINED_GAME, game_id, game.player1.nickname)

    def _leave_game(self, parts: list[str]) -> str:
        assert self.player is not None
        if not self._game_manager.leave_player_from_game(self.player):
            return _error(ErrorCode.ERROR_LEAVE)
        return _reply(OutCommand.LEFT_GAME)

    def _move(self, parts: list[str]) -> str:
        assert self.player is not None
        if len(parts) < 3:
            return _error(ErrorCode.INCORRECT_FORMAT)
        x = _parse_int(parts[1])
        y = _parse_int(parts[2])
        if not self._game_manager.make_move(self.player, x, y):
            return _error(ErrorCode.ERROR_MOVE)
        # Both players learn of the move through notifications.
        return ""