import base64
import json
from typing import Any


def decode_metadata(metadata: bytes) -> dict[str, Any] | str:
    """Decode NFT metadata bytes as JSON, falling back to the raw text."""
    text = metadata.decode("utf-8", errors="replace")
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        return text
    return parsed if isinstance(parsed, dict) else text


def decode_base64_metadata(encoded: str) -> bytes:
    return base64.b64decode(encoded, validate=True) if encoded else b""
