"""Resilience – tagged cache values and their single-key JSON envelope.

A value is tagged where it is written (``Text``, ``Binary`` or ``Json``)
and stored as one JSON document ``{"kind": ..., "payload": ...}``, so the
tag and the payload always share a key and a TTL. Binary payloads are
base64-encoded because the backing store holds strings.
"""
from __future__ import annotations

import base64
import binascii
import dataclasses
import json
from typing import Any

from stackforge.kernel.errors import SerializationError


@dataclasses.dataclass(frozen=True)
class Text:
    value: str
    kind = "text"


@dataclasses.dataclass(frozen=True)
class Binary:
    value: bytes
    kind = "binary"


@dataclasses.dataclass(frozen=True)
class Json:
    value: Any
    kind = "json"


type CacheValue = Text | Binary | Json


def tag(value: Any) -> Text | Binary | Json:
    """Wrap a plain Python value in its cache variant."""
    if isinstance(value, (Text, Binary, Json)):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return Binary(bytes(value))
    if isinstance(value, str):
        return Text(value)
    return Json(value)


def encode_envelope(value: Text | Binary | Json) -> str:
    if isinstance(value, Binary):
        payload: Any = base64.b64encode(value.value).decode("ascii")
    else:
        payload = value.value
    try:
        return json.dumps({"kind": value.kind, "payload": payload}, separators=(",", ":"))
    except (TypeError, ValueError) as exc:
        raise SerializationError(
            f"Cannot serialise {type(value.value).__name__} for the cache",
            payload_type=type(value.value).__name__,
            cause=exc,
        ) from exc


def decode_envelope(raw: str | bytes) -> Text | Binary | Json:
    try:
        doc = json.loads(raw)
        kind = doc["kind"]
        payload = doc["payload"]
    except (TypeError, ValueError, KeyError) as exc:
        raise SerializationError("Malformed cache envelope", cause=exc) from exc

    if kind == Binary.kind:
        try:
            return Binary(base64.b64decode(payload, validate=True))
        except (TypeError, binascii.Error) as exc:
            raise SerializationError("Malformed binary cache payload", payload_type="binary", cause=exc) from exc
    if kind == Text.kind:
        if not isinstance(payload, str):
            raise SerializationError("Text cache payload is not a string", payload_type="text")
        return Text(payload)
    if kind == Json.kind:
        return Json(payload)
    raise SerializationError(f"Unknown cache value kind {kind!r}")


__all__ = ["Binary", "CacheValue", "Json", "Text", "decode_envelope", "encode_envelope", "tag"]
