from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import parse_qs

from .digest import DEFAULT_ALGORITHM, get_algorithm
from .errors import DigestServiceError, InvalidInput
from .sinks import Sink

logger = logging.getLogger(__name__)

BAD_BODY = "Bad request body."
EMPTY_INPUT = "Please enter a value."
THANKS = "Thanks for your submission."

JSON_FIELD = "password"
FORM_FIELD = "pw"


@dataclass
class SubmissionResult:
    ok: bool
    message: str
    digest: Optional[str] = None


def _reject_constant(name: str) -> float:
    raise ValueError(f"{name} is not valid JSON")


def _field_text(value: object) -> str:
    # falsy JSON values read as "", scalars render the way JSON spells them
    if value is None or value is False or value == 0 or value == "":
        return ""
    if isinstance(value, str):
        return value
    if value is True:
        return "true"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return repr(value)
    raise InvalidInput(BAD_BODY)


def extract_password(content_type: str, body: Union[bytes, str]) -> str:
    """
    Pull the candidate string out of a request body.

    JSON bodies carry it in `password`, url-encoded forms in `pw`. A missing
    field yields "" (rejected later by `submit`); a body that cannot be decoded
    or parsed raises InvalidInput.
    """
    ct = (content_type or "").lower()
    try:
        text = body.decode("utf-8") if isinstance(body, (bytes, bytearray)) else body
        if "application/json" in ct:
            data = json.loads(text or "null", parse_constant=_reject_constant)
            if data is None:
                raise ValueError("JSON body is null")
            if not isinstance(data, dict):
                # arrays and scalars have no `password` member
                return ""
            return _field_text(data.get(JSON_FIELD))
        if ct.startswith("multipart/"):
            raise ValueError("multipart bodies are not supported")
        fields = parse_qs(text, keep_blank_values=True, strict_parsing=False, errors="strict")
    except ValueError as e:
        # UnicodeDecodeError and JSONDecodeError are both ValueErrors
        raise InvalidInput(BAD_BODY) from e
    values = fields.get(FORM_FIELD) or [""]
    return values[0]


def submit(password: str, sink: Sink, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Hash `password` and hand only the digest to `sink`. Returns the digest."""
    if not password:
        raise InvalidInput(EMPTY_INPUT)
    algo = get_algorithm(algorithm)
    digest = algo(password)
    sink.deliver(digest, algo.name)
    logger.debug("submission stored via %s", type(sink).__name__)
    return digest


def handle_submission(
    content_type: str,
    body: Union[bytes, str],
    sink: Sink,
    algorithm: str = DEFAULT_ALGORITHM,
) -> SubmissionResult:
    try:
        digest = submit(extract_password(content_type, body), sink, algorithm)
    except DigestServiceError as e:
        logger.info("submission rejected: %s", e.message)
        return SubmissionResult(ok=False, message=e.message)
    return SubmissionResult(ok=True, message=THANKS, digest=digest)
