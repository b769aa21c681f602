from dataclasses import dataclass, field

import pytest

from tictactoe.game_manager import GameManager
from tictactoe.notification import Notification, NotificationType
from tictactoe.player import Player, PlayerManager


@dataclass
class Env:
    manager: GameManager
    player1: Player
    player2: Player
    notifications1: list[Notification] = field(default_factory=list)
    notifications2: list[Notification] = field(default_factory=list)


@pytest.fixture
def env():
    players = PlayerManager()
    result = Env(GameManager(), players.create_player("p1"), players.create_player("p2"))
    result.player1.notification_handler = result.notifications1.append
    result.player2.notification_handler = result.notifications2.append
    return result


def _start(env):
    game_id = env.manager.create_game()
    assert env.manager.add_player_to_game(env.player1, game_id)
    assert env.manager.add_player_to_game(env.player2, game_id)
    return game_id


def test_join(env):
    game_id = env.manager.create_game()
    assert env.manager.add_player_to_game(env.player1, game_id)
    assert env.notifications1 == []

    assert env.manager.add_player_to_game(env.player2, game_id)
    assert len(env.notifications1) == 1
    assert env.notifications1[0].type is NotificationType.PLAYER_JOINED
    assert env.notifications1[0].player_nickname == env.player2.nickname
    assert env.notifications2 == []

    assert env.player1.in_game
    assert env.player2.in_game


def test_join_while_in_game(env):
    game_id1 = env.manager.create_game()
    assert env.manager.add_player_to_game(env.player1, game_id1)
    assert env.player1.in_game
    assert not env.manager.add_player_to_game(env.player1, game_id1)

    game_id2 = env.manager.create_game()
    assert not env.manager.add_player_to_game(env.player1, game_id2)


def test_join_unknown_game(env):
    assert not env.manager.add_player_to_game(env.player1, 12345)
    assert not env.player1.in_game


def test_leave(env):
    game_id = _start(env)
    env.notifications1.clear()

    assert env.manager.leave_player_from_game(env.player2)
    assert not env.player1.in_game
    assert not env.player2.in_game

    assert len(env.notifications1) == 1
    assert env.notifications1[0].type is NotificationType.PLAYER_LEFT
    assert env.notifications1[0].player_nickname == env.player2.nickname
    assert env.notifications2 == []
    assert env.manager.get_game(game_id) is None


def test_join_after_leave(env):
    game_id1 = _start(env)
    assert env.manager.leave_player_from_game(env.player1)
    assert env.manager.get_game(game_id1) is None

    game_id2 = env.manager.create_game()
    assert env.manager.add_player_to_game(env.player1, game_id2)
    assert env.manager.add_player_to_game(env.player2, game_id2)


def test_leave_while_not_in_game(env):
    assert not env.player1.in_game
    assert not env.manager.leave_player_from_game(env.player1)


def test_make_move(env):
    _start(env)
    env.notifications1.clear()

    assert env.manager.make_move(env.player1, 0, 0)
    assert len(env.notifications2) == 1
    assert env.notifications2[0].type is NotificationType.PLAYER_MOVED
    assert env.notifications2[0].player_nickname == env.player1.nickname
    assert env.notifications2[0].extra_info == "0 0 X"

    env.notifications1.clear()
    assert env.manager.make_move(env.player2, 0, 1)
    assert len(env.notifications1) == 1
    assert env.notifications1[0].type is NotificationType.PLAYER_MOVED
    assert env.notifications1[0].player_nickname == env.player2.nickname
    assert env.notifications1[0].extra_info == "0 1 O"

    env.notifications2.clear()
    assert env.manager.make_move(env.player1, 1, 0)
    assert len(env.notifications2) == 1
    assert env.notifications2[0].type is NotificationType.PLAYER_MOVED
    assert env.notifications2[0].player_nickname == env.player1.nickname
    assert env.notifications2[0].extra_info == "1 0 X"

    env.notifications1.clear()
    assert env.manager.make_move(env.player2, 1, 1)
    assert len(env.notifications1) == 1
    assert env.notifications1[0].type is NotificationType.PLAYER_MOVED
    assert env.notifications1[0].player_nickname == env.player2.nickname
    assert env.notifications1[0].extra_info == "1 1 O"


def test_not_turn_make_move(env):
    _start(env)
    assert env.manager.make_move(env.player1, 0, 0)
    assert not env.manager.make_move(env.player1, 0, 1)
    assert env.manager.make_move(env.player2, 0, 1)
    assert not env.manager.make_move(env.player2, 0, 2)


def test_incorrect_moves(env):
    _start(env)
    assert not env.manager.make_move(env.player1, -1, 0)
    assert not env.manager.make_move(env.player1, 0, -1)
    assert not env.manager.make_move(env.player1, 4, 0)
    assert not env.manager.make_move(env.player1, 0, 4)
    assert env.manager.make_move(env.player1, 0, 0)
    assert not env.manager.make_move(env.player2, 0, 0)
    assert env.manager.make_move(env.player2, 0, 1)


def test_move_outside_game(env):
    assert not env.manager.make_move(env.player1, 0, 0)


def test_win_game(env):
    game_id = _start(env)
    env.notifications1.clear()

    assert env.manager.make_move(env.player1, 0, 0)
    assert env.manager.make_move(env.player2, 1, 0)
    assert env.manager.make_move(env.player1, 0, 1)
    assert env.manager.make_move(env.player2, 1, 1)
    assert env.manager.make_move(env.player1, 0, 2)

    # every move is reported to both players, then the end of the game
    assert len(env.notifications1) == 6
    assert env.notifications1[-1].type is NotificationType.GAME_ENDED
    assert env.notifications1[-1].player_nickname == env.player1.nickname

    assert len(env.notifications2) == 6
    assert env.notifications2[-1].type is NotificationType.GAME_ENDED
    assert env.notifications2[-1].player_nickname == env.player1.nickname

    assert env.manager.get_game(game_id) is None
    assert not env.player1.in_game and not env.player2.in_game


def test_draw_game(env):
    game_id = _start(env)
    env.notifications1.clear()

    moves = [
        (env.player1, 0, 0),
        (env.player2, 0, 1),
        (env.player1, 0, 2),
        (env.player2, 1, 1),
        (env.player1, 1, 0),
        (env.player2, 1, 2),
        (env.player1, 2, 1),
        (env.player2, 2, 0),
        (env.player1, 2, 2),
    ]
    for player, x, y in moves:
        assert env.manager.make_move(player, x, y)

    assert len(env.notifications1) == len(moves) + 1
    assert env.notifications1[-1].type is NotificationType.GAME_ENDED
    assert env.notifications1[-1].player_nickname == ""

    assert len(env.notifications2) == len(moves) + 1
    assert env.notifications2[-1].type is NotificationType.GAME_ENDED
    assert env.notifications2[-1].player_nickname == ""

    assert env.manager.get_game(game_id) is None


def test_waiting_games(env):
    empty_id = env.manager.create_game()
    waiting_id = env.manager.create_game()
    env.manager.add_player_to_game(env.player1, waiting_id)

    assert [game.id for game in env.manager.waiting_games()] == [waiting_id]
    assert empty_id != waiting_id

    env.manager.add_player_to_game(env.player2, waiting_id)
    assert env.manager.waiting_games() == []


def test_game_ids_are_unique(env):
    ids = [env.manager.create_game() for _ in range(5)]
    assert len(set(ids)) == len(ids)
    assert all(env.manager.get_game(game_id).id == game_id for game_id in ids)


def test_remove_game_ends_running_game(env):
    game_id = _start(env)
    env.manager.remove_game(game_id)
    assert env.manager.get_game(game_id) is None
    assert not env.player1.in_game
    assert env.notifications2[-1].type is NotificationType.GAME_ENDED


def test_remove_unknown_game_leaves_others(env):
    game_id = env.manager.create_game()
    env.manager.remove_game(game_id + 100)
    assert env.manager.get_game(game_id).id == game_id