from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import requests

from .errors import SinkUnavailable

logger = logging.getLogger(__name__)

DEFAULT_LEDGER = "md5hashes.txt"
WEBHOOK_TIMEOUT = 10.0


class Sink(ABC):
    """Destination for a finished digest. Never sees the input."""

    @abstractmethod
    def deliver(self, digest: str, algorithm: str = "md5") -> None:
        """Hand off `digest`; raise SinkUnavailable if it cannot be stored."""

    def close(self) -> None:
        pass

    def __enter__(self) -> "Sink":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class LedgerSink(Sink):
    """Append-only text list, one hash per line, no header."""

    def __init__(self, path: str | Path = DEFAULT_LEDGER) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def deliver(self, digest: str, algorithm: str = "md5") -> None:
        try:
            with self._lock:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with self.path.open("a", encoding="utf-8") as fh:
                    fh.write(digest + "\n")
        except OSError as e:
            logger.warning("ledger %s not writable: %s", self.path, e)
            raise SinkUnavailable("Could not record the submission.") from e
        logger.debug("appended %s digest to %s", algorithm, self.path)

    def read(self) -> str:
        return read_ledger(self.path)


class WebhookSink(Sink):
    """POSTs the digest as JSON to a chat-notification endpoint."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = WEBHOOK_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        # only a session created here is closed by close()
        self._owns_session = session is None
        self.session = session or requests.Session()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def payload(self, digest: str, algorithm: str) -> dict:
        return {"hash": digest, "algorithm": algorithm}

    def deliver(self, digest: str, algorithm: str = "md5") -> None:
        try:
            resp = self.session.post(self.url, json=self.payload(digest, algorithm), timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.warning("webhook delivery to %s failed: %s", self.url, e)
            raise SinkUnavailable("Could not deliver the submission.") from e
        logger.debug("posted %s digest to webhook (status %s)", algorithm, resp.status_code)


def read_ledger(path: str | Path = DEFAULT_LEDGER) -> str:
    p = Path(path)
    if not p.exists():
        return ""
    return p.read_text(encoding="utf-8")
