# hackboard/scoring/obfuscation.py
"""
Score Obfuscation
-----------------
Reversible encoding of a score-set to an opaque string, so judged scores do
not sit as plain numbers in versioned data files.

    encoded = base64( xor( base64( json(scores) ), KEY ) )

This is obfuscation, not encryption: the key ships with the program.
Output is byte-compatible with the versioned data files already in use.
"""
import base64
import binascii
import json
from typing import Dict, Mapping

import structlog

logger = structlog.get_logger(__name__)

OBFUSCATION_KEY = "rocscience-hackathon-2025"

DEFAULT_CATEGORY_IDS = (
    "workScope",
    "polish",
    "funUseful",
    "creativity",
    "innovation",
    "doesItWork",
)

# Returned when an encoded string cannot be decoded; every category unscored.
FALLBACK_SCORES: Dict[str, int] = {cid: 0 for cid in DEFAULT_CATEGORY_IDS}


def _xor_with_key(data: bytes, key: str) -> bytes:
    key_bytes = key.encode("utf-8")
    return bytes(b ^ key_bytes[i % len(key_bytes)] for i, b in enumerate(data))


def encode_scores(scores: Mapping[str, int], key: str = OBFUSCATION_KEY) -> str:
    """Encode a score-set to an obfuscated string."""
    text = json.dumps(dict(scores), separators=(",", ":"), ensure_ascii=False)
    inner = base64.b64encode(text.encode("utf-8"))
    return base64.b64encode(_xor_with_key(inner, key)).decode("ascii")


def decode_scores(obfuscated: str, key: str = OBFUSCATION_KEY) -> Dict[str, int]:
    """
    Decode an obfuscated string back to a score-set.

    Never raises: malformed input logs a warning and yields a copy of
    FALLBACK_SCORES.
    """
    try:
        xored = base64.b64decode(obfuscated, validate=True)
        inner = _xor_with_key(xored, key)
        parsed = json.loads(base64.b64decode(inner, validate=True).decode("utf-8"))
        if not isinstance(parsed, dict):
            raise ValueError(f"expected an object, got {type(parsed).__name__}")
        scores = {}
        for category_id, value in parsed.items():
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"score for {category_id!r} is not an integer")
            scores[category_id] = value
        return scores
    except (binascii.Error, UnicodeDecodeError, ValueError, TypeError, RecursionError) as e:
        logger.warning("score_decode_failed", error=str(e))
        return dict(FALLBACK_SCORES)
