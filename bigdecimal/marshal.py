"""Wire-level helpers shared by the BigInt and Decimal codecs.

- unquote_if_quoted: normalizes SQL driver values (str or bytes, possibly
  wrapped in double quotes) to plain text.
- encode_int / decode_int: sign-magnitude integer encoding. The first byte
  is ``INT_ENCODING_VERSION << 1`` with the low bit set for negative values,
  followed by the big-endian magnitude (no bytes for zero). This is the
  encoding used by Go's ``big.Int.GobEncode``, so payloads interoperate.
- decode_json_token: turns one JSON value into the exact text to parse,
  without routing numbers through binary floating point.
"""

from __future__ import annotations

import json
from typing import Any

import structlog

from bigdecimal.constants import INT_ENCODING_VERSION
from bigdecimal.errors import DecodeError

logger = structlog.get_logger()


def unquote_if_quoted(value: Any) -> str:
    """Return value as text, stripping one pair of surrounding double quotes.

    Raises:
        DecodeError: If value is neither str nor bytes
    """
    if isinstance(value, str):
        text = value
    elif isinstance(value, (bytes, bytearray, memoryview)):
        text = bytes(value).decode("utf-8")
    else:
        logger.debug("decode_failed", reason="unsupported_type", type=type(value).__name__)
        raise DecodeError(f"Could not convert value {value!r} of type {type(value).__name__} to text")

    if len(text) > 2 and text[0] == '"' and text[-1] == '"':
        text = text[1:-1]
    return text


def encode_int(value: int) -> bytes:
    """Encode an integer as version/sign byte + big-endian magnitude."""
    header = INT_ENCODING_VERSION << 1
    if value < 0:
        header |= 1
    magnitude = abs(value)
    return bytes([header]) + magnitude.to_bytes((magnitude.bit_length() + 7) // 8, "big")


def decode_int(data: bytes) -> int:
    """Decode the output of encode_int. Empty input decodes to 0.

    Raises:
        DecodeError: If the version in the header byte is not supported
    """
    if len(data) == 0:
        return 0
    header = data[0]
    if header >> 1 != INT_ENCODING_VERSION:
        logger.debug("decode_failed", reason="int_version", version=header >> 1)
        raise DecodeError(f"Unsupported integer encoding version: {header >> 1}")
    magnitude = int.from_bytes(data[1:], "big")
    return -magnitude if header & 1 else magnitude


def _reject_constant(name: str) -> None:
    raise DecodeError(f"Non-finite JSON number: {name}")


def decode_json_token(data: str | bytes) -> str | None:
    """Return the text carried by a JSON string or number token.

    Numbers are returned verbatim (``0.1`` stays ``"0.1"``). ``null``
    returns None.

    Raises:
        DecodeError: If data is not valid JSON or is not a string, number
            or null
    """
    try:
        token = json.loads(data, parse_int=str, parse_float=str, parse_constant=_reject_constant)
    except json.JSONDecodeError as err:
        logger.debug("decode_failed", reason="invalid_json", error=str(err))
        raise DecodeError(f"Invalid JSON: {err}") from err

    if token is None or isinstance(token, str):
        return token
    logger.debug("decode_failed", reason="unexpected_json_type", type=type(token).__name__)
    raise DecodeError(f"Expected JSON string or number, got {type(token).__name__}")
