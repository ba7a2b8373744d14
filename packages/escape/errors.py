"""
Errors raised by the escape engine.

InvalidAction is recoverable: the battle loop rejects the turn and asks the
acting side again. InvalidChoiceIndex means a menu broke its contract and is
never caught by the engine.
"""


class InvalidAction(ValueError):
    """An action references a missing item or an item of the wrong kind."""

    def __init__(self, message: str, action=None):
        super().__init__(message)
        self.action = action


class InvalidChoiceIndex(IndexError):
    """A menu returned an index outside the offered option list."""

    def __init__(self, choice: int, option_count: int):
        super().__init__(
            f"Menu returned choice {choice} for a list of {option_count} options"
        )
        self.choice = choice
        self.option_count = option_count
