"""Engine error taxonomy."""
from __future__ import annotations


class PokerError(Exception):
    """Base class for every error raised by the engine."""


class IllegalActionError(PokerError, ValueError):
    """Action is not legal for the requesting player in the current state.

    Recoverable: the caller picks a legal fallback and resubmits.
    """


class InsufficientCardsError(PokerError, ValueError):
    """Deck exhausted, or fewer than five cards handed to the evaluator.

    Signals a dealing bug upstream; never caught inside the engine.
    """


class MalformedConfigError(PokerError, ValueError):
    """Table configuration rejected at game creation."""
