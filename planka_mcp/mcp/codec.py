"""Envelope decoding and encoding shared by both transports."""

import json
from typing import Any

from pydantic import ValidationError

from ..exceptions import InvalidRequest, MalformedMessage
from ..models.jsonrpc import JsonRpcRequest


def decode_payload(raw: str | bytes) -> Any:
    """Parse raw wire bytes into a JSON value.

    Raises:
        MalformedMessage: if the payload is not syntactically valid JSON, or
            nests deeper than the decoder can follow
    """
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
        raise MalformedMessage(f"Parse error: {e}") from e


def to_request(payload: Any) -> JsonRpcRequest:
    """Validate a decoded JSON value as a request envelope.

    Raises:
        InvalidRequest: if it is not an object with a string ``method``
    """
    if isinstance(payload, list):
        raise InvalidRequest("Invalid Request: batch requests are not supported")
    if not isinstance(payload, dict):
        raise InvalidRequest("Invalid Request: expected a JSON object")
    try:
        return JsonRpcRequest.model_validate(payload)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise InvalidRequest(f"Invalid Request: bad field(s) {fields}") from e


def request_id_of(payload: Any) -> Any:
    """Best-effort id extraction for error replies to unusable envelopes."""
    if isinstance(payload, dict):
        return payload.get("id")
    return None


def encode_message(envelope: dict) -> str:
    """Encode an outbound envelope as one compact JSON line (no newline)."""
    return json.dumps(envelope, separators=(",", ":"), default=str)
