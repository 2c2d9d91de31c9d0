from __future__ import annotations

from typing import Callable

from core.models import Entry, Field, IntegrityMessage
from core.navigation import ClickClassifier, ClickState, MouseButton, NavigationDispatcher

DOE = Entry(entry_id="e1", citation_key="doe2020")
TITLE = Field("title")


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class FakeHost:
    """Editor, dialog and scheduler in one, recording calls in order."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.pending: list[Callable[[], None]] = []

    def select_record(self, entry: Entry) -> None:
        self.calls.append(("select_record", entry.citation_key))

    def set_editor_visible(self, visible: bool) -> None:
        self.calls.append(("set_editor_visible", visible))

    def focus_field(self, field: Field) -> None:
        self.calls.append(("focus_field", field.name))

    def close_dialog(self) -> None:
        self.calls.append(("close_dialog",))

    def post(self, callback: Callable[[], None]) -> None:
        self.calls.append(("post",))
        self.pending.append(callback)

    def run_pending(self) -> None:
        pending, self.pending = self.pending, []
        for callback in pending:
            callback()


def _make_dispatcher(host: FakeHost, clock: FakeClock) -> NavigationDispatcher:
    return NavigationDispatcher(
        editor=host,
        dialog=host,
        scheduler=host,
        classifier=ClickClassifier(interval=0.5, clock=clock),
    )


def _message() -> IntegrityMessage:
    return IntegrityMessage(entry=DOE, field=TITLE, message="empty title")


def test_single_click_navigates_and_defers_focus() -> None:
    host = FakeHost()
    dispatcher = _make_dispatcher(host, FakeClock())

    dispatcher.on_row_clicked("0", _message(), MouseButton.PRIMARY)

    assert host.calls == [
        ("select_record", "doe2020"),
        ("set_editor_visible", True),
        ("post",),
    ]

    host.run_pending()

    assert host.calls[-1] == ("focus_field", "title")
    assert ("close_dialog",) not in host.calls


def test_double_click_closes_after_navigation() -> None:
    host = FakeHost()
    clock = FakeClock()
    dispatcher = _make_dispatcher(host, clock)

    dispatcher.on_row_clicked("0", _message(), MouseButton.PRIMARY)
    clock.now += 0.2
    dispatcher.on_row_clicked("0", _message(), MouseButton.PRIMARY)
    host.run_pending()

    assert host.calls[3:] == [
        ("select_record", "doe2020"),
        ("set_editor_visible", True),
        ("post",),
        ("close_dialog",),
        ("focus_field", "title"),
        ("focus_field", "title"),
    ]


def test_secondary_button_does_nothing() -> None:
    host = FakeHost()
    dispatcher = _make_dispatcher(host, FakeClock())

    dispatcher.on_row_clicked("0", _message(), MouseButton.SECONDARY)
    dispatcher.on_row_clicked("0", _message(), MouseButton.MIDDLE)

    assert host.calls == []
    assert host.pending == []


def test_slow_second_click_is_another_single_click() -> None:
    host = FakeHost()
    clock = FakeClock()
    dispatcher = _make_dispatcher(host, clock)

    dispatcher.on_row_clicked("0", _message(), MouseButton.PRIMARY)
    clock.now += 0.8
    dispatcher.on_row_clicked("0", _message(), MouseButton.PRIMARY)

    assert ("close_dialog",) not in host.calls
    assert host.calls.count(("select_record", "doe2020")) == 2


def test_classifier_requires_same_row() -> None:
    clock = FakeClock()
    classifier = ClickClassifier(interval=0.5, clock=clock)

    assert classifier.register("0") == 1
    assert classifier.register("1") == 1
    assert classifier.register("1") == 2
    assert classifier.state is ClickState.IDLE
    assert classifier.register("1") == 1


def test_classifier_reverts_to_idle_after_timeout() -> None:
    clock = FakeClock()
    classifier = ClickClassifier(interval=0.5, clock=clock)

    classifier.register("0")
    assert classifier.state is ClickState.AWAITING_SECOND_CLICK

    clock.now += 0.6
    assert classifier.state is ClickState.IDLE
    assert classifier.register("0") == 1


def test_activate_without_close() -> None:
    host = FakeHost()
    dispatcher = _make_dispatcher(host, FakeClock())

    dispatcher.activate(_message())
    host.run_pending()

    assert host.calls == [
        ("select_record", "doe2020"),
        ("set_editor_visible", True),
        ("post",),
        ("focus_field", "title"),
    ]


def test_reading_state_does_not_forget_pending_click() -> None:
    clock = FakeClock()
    classifier = ClickClassifier(interval=0.5, clock=clock)

    classifier.register("0")
    clock.now += 0.6
    assert classifier.state is ClickState.IDLE

    clock.now -= 0.3
    assert classifier.state is ClickState.AWAITING_SECOND_CLICK
    assert classifier.register("0") == 2
