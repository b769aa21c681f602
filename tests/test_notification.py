import dataclasses

import pytest

from tictactoe.notification import Notification, NotificationType


def test_extra_info_defaults_to_empty():
    notification = Notification(NotificationType.PLAYER_JOINED, "p1")
    assert notification.extra_info == ""
    assert notification.player_nickname == "p1"


def test_notifications_are_immutable():
    notification = Notification(NotificationType.PLAYER_MOVED, "p1", "0 0 X")
    with pytest.raises(dataclasses.FrozenInstanceError):
        notification.player_nickname = "p2"
    assert notification.player_nickname == "p1"
    assert notification.extra_info == "0 0 X"
    assert notification.type is NotificationType.PLAYER_MOVED


def test_equal_notifications_compare_and_hash_equal():
    first = Notification(NotificationType.GAME_ENDED, "p2")
    second = Notification(NotificationType.GAME_ENDED, "p2")
    assert first == second
    assert len({first, second}) == 1


def test_different_types_are_not_equal():
    joined = Notification(NotificationType.PLAYER_JOINED, "p1")
    left = Notification(NotificationType.PLAYER_LEFT, "p1")
    assert not joined == left