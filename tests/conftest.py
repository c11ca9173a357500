from __future__ import annotations

import asyncio

import pytest


class RecordingDisplay:
    """In-memory Display that quits once it has shown ``quit_after`` reports."""

    def __init__(self, quit_after: int | None = None) -> None:
        self.quit_after = quit_after
        self.reports: list[str] = []
        self.quit_keys: set[str | int] = set()
        self._current = ""

    def clear(self) -> None:
        self._current = ""

    def write(self, text: str) -> None:
        self._current += text
        self.reports.append(self._current)

    def bind_quit(self, key: str | int) -> None:
        self.quit_keys.add(key)

    async def run(self, stop: asyncio.Event) -> None:
        while not stop.is_set():
            if self.quit_after is not None and len(self.reports) >= self.quit_after:
                return
            await asyncio.sleep(0.005)


@pytest.fixture
def display() -> RecordingDisplay:
    return RecordingDisplay()


@pytest.fixture
def make_display():
    return RecordingDisplay
