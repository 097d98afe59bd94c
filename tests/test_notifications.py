from __future__ import annotations

import pytest

from moderation_controller.notifications.base import CollectingNotifier, LoggingNotifier, Notifier


def test_collecting_notifier_buffers_and_drains() -> None:
    notifier = CollectingNotifier(buffer_size=2)

    notifier.notify_success("one")
    notifier.notify_failure("two")
    notifier.notify_success("three")

    assert [(n.level, n.message) for n in notifier.pending] == [("failure", "two"), ("success", "three")]
    assert len(notifier.drain()) == 2
    assert notifier.pending == []


def test_notifiers_satisfy_protocol() -> None:
    assert isinstance(LoggingNotifier(), Notifier)
    assert isinstance(CollectingNotifier(), Notifier)
    LoggingNotifier().notify_failure("logged only")

    with pytest.raises(ValueError):
        CollectingNotifier(buffer_size=0)
