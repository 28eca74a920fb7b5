from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .digest import DEFAULT_ALGORITHM, get_algorithm
from .sinks import DEFAULT_LEDGER, WEBHOOK_TIMEOUT, LedgerSink, Sink, WebhookSink

ENV_ALGORITHM = "PWDIGEST_ALGORITHM"
ENV_LEDGER = "PWDIGEST_LEDGER"
ENV_WEBHOOK_URL = "PWDIGEST_WEBHOOK_URL"
ENV_WEBHOOK_TIMEOUT = "PWDIGEST_WEBHOOK_TIMEOUT"


@dataclass
class Settings:
    algorithm: str = DEFAULT_ALGORITHM
    ledger: Path = Path(DEFAULT_LEDGER)
    webhook_url: Optional[str] = None
    webhook_timeout: float = WEBHOOK_TIMEOUT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ

        algorithm = get_algorithm(env.get(ENV_ALGORITHM) or DEFAULT_ALGORITHM).name

        raw_timeout = env.get(ENV_WEBHOOK_TIMEOUT)
        timeout = WEBHOOK_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(f"{ENV_WEBHOOK_TIMEOUT} must be a number, got {raw_timeout!r}") from None
            if not math.isfinite(timeout) or timeout <= 0:
                raise ValueError(f"{ENV_WEBHOOK_TIMEOUT} must be a finite number > 0")

        return cls(
            algorithm=algorithm,
            ledger=Path(env.get(ENV_LEDGER) or DEFAULT_LEDGER).expanduser(),
            webhook_url=env.get(ENV_WEBHOOK_URL) or None,
            webhook_timeout=timeout,
        )


def build_sink(settings: Settings) -> Sink:
    if settings.webhook_url:
        return WebhookSink(settings.webhook_url, timeout=settings.webhook_timeout)
    return LedgerSink(settings.ledger)
