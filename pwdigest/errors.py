from __future__ import annotations


class DigestServiceError(Exception):
    """Base for failures around the digest engine; `message` is safe to show a user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(DigestServiceError):
    pass


class SinkUnavailable(DigestServiceError):
    pass
