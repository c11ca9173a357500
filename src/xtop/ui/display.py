from __future__ import annotations

import asyncio
import contextlib
import curses
import logging
import sys
from typing import Protocol, TextIO

from xtop.errors import DisplayError

logger = logging.getLogger(__name__)

CTRL_C = 3
POLL_INTERVAL_SEC = 0.05


class Display(Protocol):
    def clear(self) -> None:
        ...

    def write(self, text: str) -> None:
        ...

    def bind_quit(self, key: str | int) -> None:
        ...

    async def run(self, stop: asyncio.Event) -> None:
        """Block until the user quits or ``stop`` is set."""
        ...


def _key_code(key: str | int) -> int:
    if isinstance(key, int):
        return key
    if len(key) != 1:
        msg = f"Quit key must be a single character, got {key!r}"
        raise DisplayError(msg)
    return ord(key)


class CursesDisplay:
    """Full-screen curses dashboard.

    Keys are polled from the event loop, so all curses calls stay on the
    thread that runs it. Raw mode delivers Ctrl-C as a key press; it is bound
    as a quit key by default, like ``q``.
    """

    def __init__(self, quit_keys: tuple[str | int, ...] = ("q", CTRL_C)) -> None:
        self._screen: curses.window | None = None
        self._quit_keys: set[int] = set()
        self._text = ""
        for key in quit_keys:
            self.bind_quit(key)

    def __enter__(self) -> CursesDisplay:
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def open(self) -> None:
        try:
            screen = curses.initscr()
        except curses.error as exc:
            msg = f"Cannot initialize terminal: {exc}"
            raise DisplayError(msg) from exc
        self._screen = screen
        try:
            curses.noecho()
            curses.raw()
            screen.keypad(True)
            screen.nodelay(True)
        except curses.error as exc:
            self.close()
            msg = f"Cannot configure terminal: {exc}"
            raise DisplayError(msg) from exc
        # cosmetic only: green text, hidden cursor
        with contextlib.suppress(curses.error):
            if curses.has_colors():
                curses.start_color()
                curses.use_default_colors()
                curses.init_pair(1, curses.COLOR_GREEN, -1)
                screen.bkgd(" ", curses.color_pair(1))
            curses.curs_set(0)
        logger.debug("display.opened backend=curses")

    def close(self) -> None:
        if self._screen is None:
            return
        self._screen.keypad(False)
        curses.noraw()
        curses.echo()
        curses.endwin()
        self._screen = None
        logger.debug("display.closed backend=curses")

    def bind_quit(self, key: str | int) -> None:
        self._quit_keys.add(_key_code(key))

    def clear(self) -> None:
        self._text = ""
        if self._screen is not None:
            self._screen.erase()

    def write(self, text: str) -> None:
        self._text += text
        self._paint()

    def _paint(self) -> None:
        screen = self._screen
        if screen is None:
            return
        max_y, max_x = screen.getmaxyx()
        screen.erase()
        for row, line in enumerate(self._text.splitlines()[: max_y]):
            # writing into the bottom-right cell raises even though it succeeds
            with contextlib.suppress(curses.error):
                screen.addnstr(row, 0, line, max_x - 1)
        screen.refresh()

    async def run(self, stop: asyncio.Event) -> None:
        if self._screen is None:
            msg = "Display is not open"
            raise DisplayError(msg)
        while not stop.is_set():
            key = self._screen.getch()
            if key in self._quit_keys:
                logger.debug("display.quit key=%d", key)
                return
            if key == curses.KEY_RESIZE:
                self._paint()
            with contextlib.suppress(asyncio.TimeoutError):
                await asyncio.wait_for(stop.wait(), timeout=POLL_INTERVAL_SEC)


class StreamDisplay:
    """Writes every report to a text stream.

    Used when stdout is not a terminal or ``--plain`` is given. On a TTY each
    report repaints the screen with ANSI codes; otherwise reports follow one
    another. There is no key handling: quitting is Ctrl-C.
    """

    CLEAR_SCREEN = "\x1b[H\x1b[2J"

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def bind_quit(self, key: str | int) -> None:
        # validated only; Ctrl-C is the sole way out of a stream display
        _key_code(key)

    def clear(self) -> None:
        if self.stream.isatty():
            self.stream.write(self.CLEAR_SCREEN)

    def write(self, text: str) -> None:
        self.stream.write(text)
        if not text.endswith("\n"):
            self.stream.write("\n")
        self.stream.flush()

    async def run(self, stop: asyncio.Event) -> None:
        await stop.wait()
