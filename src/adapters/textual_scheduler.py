"""Textual implementation of the core scheduler port."""

from __future__ import annotations

from typing import Callable

from textual.app import App


class TextualScheduler:
    """Run callbacks once the app has processed its next screen refresh."""

    def __init__(self, app: App) -> None:
        self._app = app

    def post(self, callback: Callable[[], None]) -> None:
        self._app.call_after_refresh(callback)
