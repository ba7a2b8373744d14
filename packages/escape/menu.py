"""
Menu - the presentation boundary of the game.

The engine only ever talks to a Menu: show_screen() to display text and
show_option_list() to ask for a choice. Any index a menu returns must lie in
[0, len(options)); engine code checks this with validate_choice() and raises
InvalidChoiceIndex otherwise.

Implementations:
- ConsoleMenu: numbered lists on stdin/stdout
- RandomMenu: seeded random choices for headless runs
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Tuple

from .errors import InvalidChoiceIndex
from .state.rng import Random

logger = logging.getLogger(__name__)

__all__ = [
    "Screen",
    "OptionList",
    "Menu",
    "ConsoleMenu",
    "RandomMenu",
    "validate_choice",
]


@dataclass(frozen=True)
class Screen:
    """A titled block of text."""
    title: str
    content: str = ""


@dataclass(frozen=True)
class OptionList:
    """An ordered, non-empty list of options with a prompt."""
    options: Tuple[str, ...]  # any sequence; stored as a tuple
    prompt: str

    def __post_init__(self):
        if not self.options:
            raise ValueError("An option list needs at least one option")
        object.__setattr__(self, "options", tuple(self.options))

    def __len__(self) -> int:
        return len(self.options)


def validate_choice(choice: int, options: OptionList) -> int:
    """Return choice if it indexes options, else raise InvalidChoiceIndex."""
    if not isinstance(choice, int) or isinstance(choice, bool) or not 0 <= choice < len(options):
        raise InvalidChoiceIndex(choice, len(options))
    return choice


class Menu:
    """Base class for presentation collaborators."""

    def show_screen(self, screen: Screen) -> None:
        raise NotImplementedError

    def show_option_list(self, options: OptionList) -> int:
        raise NotImplementedError


class ConsoleMenu(Menu):
    """
    Text menu on the terminal.

    Options are numbered from 1. Unparsable or out-of-range input is a player
    typo, not a contract violation, so the menu simply asks again.
    """

    WIDTH = 60

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        self._input = input_fn
        self._output = output_fn

    def show_screen(self, screen: Screen) -> None:
        self._output("")
        self._output("=" * self.WIDTH)
        self._output(screen.title)
        self._output("=" * self.WIDTH)
        if screen.content:
            self._output(screen.content)

    def show_option_list(self, options: OptionList) -> int:
        self._output("")
        for i, option in enumerate(options.options, 1):
            self._output(f"  {i}. {option}")

        while True:
            raw = self._input(f"{options.prompt} > ").strip()
            try:
                choice = int(raw) - 1
            except ValueError:
                self._output(f"Enter a number from 1 to {len(options)}")
                continue
            if 0 <= choice < len(options):
                return validate_choice(choice, options)
            self._output(f"Enter a number from 1 to {len(options)}")


class RandomMenu(Menu):
    """Picks every option uniformly at random. Screens are discarded."""

    def __init__(self, rng: Random):
        self.rng = rng
        self.screens_shown = 0

    def show_screen(self, screen: Screen) -> None:
        self.screens_shown += 1
        logger.debug("Screen: %s", screen.title)

    def show_option_list(self, options: OptionList) -> int:
        return validate_choice(self.rng.random_int(len(options) - 1), options)
