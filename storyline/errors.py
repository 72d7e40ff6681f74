"""Typed errors raised by the game services.

Legitimate empty states (nothing to go back to, dialogue exhausted) are
returned as None, never raised.
"""


class StoryError(Exception):
    """Base class for every error the game services raise."""


class NotFoundError(StoryError):
    """A referenced save, player character, node, or choice does not exist."""

    def __init__(self, kind: str, id: int) -> None:
        self.kind = kind
        self.id = id
        super().__init__(f"{kind} {id} not found")


class InvalidChoiceError(StoryError):
    """The choice exists but does not leave from the save's current node."""

    def __init__(self, choice_id: int, node_id: int) -> None:
        self.choice_id = choice_id
        self.node_id = node_id
        super().__init__(f"Choice {choice_id} does not belong to node {node_id}")


class TransactionFailedError(StoryError):
    """The unit of work was rolled back because the store rejected it."""
