"""Projection of the status log text onto a display surface."""

from __future__ import annotations

from typing import Protocol


class DisplaySurface(Protocol):
    def append(self, text: str) -> None: ...

    def set_text(self, text: str) -> None: ...


class ViewSync:
    """
    Keep a display surface identical to the LogStore view.

    Calls are forwarded synchronously; ViewSync holds no text of its own.
    """

    def __init__(self, surface: DisplaySurface) -> None:
        self._surface = surface

    def render(self, text: str) -> None:
        self._surface.set_text(text)

    def append(self, text: str) -> None:
        if text:
            self._surface.append(text)

    def clear(self) -> None:
        self._surface.set_text("")
