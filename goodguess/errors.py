"""Errors raised by the game core. All of them are recoverable."""


class GameError(Exception):
    """Base class for game errors; the message is shown to the player."""

    default_message = "Something went wrong."

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class InvalidInputError(GameError):
    default_message = "Please enter a valid word."


class DuplicateGuessError(GameError):
    default_message = "You already guessed that word!"


class SessionTerminalError(GameError):
    default_message = "Game is already over!"


class RemoteScorerUnavailable(GameError):
    default_message = "Remote scorer unavailable."


class UnknownCategoryError(GameError, KeyError):
    default_message = "Unknown category."

    def __str__(self) -> str:
        return self.message
