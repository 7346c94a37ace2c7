"""
Storage Codec - JSON document form of the sound library

Document layout (a JSON array, one object per sound):

    {"id": "<uuid>", "name": "Laugh", "colorData": "<base64 RGBA>", "audioFileName": "laugh.m4a"}

Older documents carry "bgImageData" (base64 image bytes or null) instead of
"colorData", and the oldest ones carry no "id" at all.
"""

import base64
import binascii
import json
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

from .sound_record import (
    DEFAULT_COLOR,
    Color,
    ColorAppearance,
    ImageAppearance,
    SoundRecord,
    new_sound_id,
)


# Wire keys
KEY_ID = "id"
KEY_NAME = "name"
KEY_IMAGE = "bgImageData"
KEY_COLOR = "colorData"
KEY_AUDIO = "audioFileName"


class CodecError(ValueError):
    """Raised when a document or a single record cannot be decoded"""


@dataclass
class DecodeResult:
    """Outcome of decoding a document: the good records plus the rejected ones"""
    records: List[SoundRecord] = field(default_factory=list)
    rejected: List[Tuple[int, str]] = field(default_factory=list)  # (index, reason)

    @property
    def is_partial(self) -> bool:
        return bool(self.rejected)


# ============================================================================
# ENCODING
# ============================================================================

def encode_record(record: SoundRecord) -> Dict[str, Any]:
    """Convert one record to its JSON object form"""
    obj: Dict[str, Any] = {KEY_ID: record.id, KEY_NAME: record.name}

    appearance = record.appearance
    if isinstance(appearance, ColorAppearance):
        obj[KEY_COLOR] = _b64encode(appearance.color.to_bytes())
    else:
        # An explicit null keeps "image without data" distinguishable from "no appearance"
        obj[KEY_IMAGE] = _b64encode(appearance.image_data) if appearance.image_data is not None else None

    obj[KEY_AUDIO] = record.audio_file_name
    return obj


def encode_sounds(records: Iterable[SoundRecord]) -> bytes:
    """Serialize a sequence of records to a UTF-8 JSON document"""
    document = [encode_record(record) for record in records]
    return json.dumps(document, indent=2, ensure_ascii=False).encode("utf-8")


# ============================================================================
# DECODING
# ============================================================================

def decode_record(obj: Any) -> SoundRecord:
    """
    Convert one JSON object to a record.

    Args:
        obj: Parsed JSON value for a single entry

    Returns:
        SoundRecord (with a freshly generated id if the entry has none)

    Raises:
        CodecError: If the entry is malformed
    """
    if not isinstance(obj, dict):
        raise CodecError(f"Entry must be an object, got {type(obj).__name__}")

    if KEY_ID in obj:
        sound_id = obj[KEY_ID]
        if not isinstance(sound_id, str):
            raise CodecError(f"'{KEY_ID}' must be a string")
        try:
            uuid.UUID(sound_id)
        except ValueError:
            raise CodecError(f"'{KEY_ID}' is not a UUID: {sound_id!r}") from None
    else:
        sound_id = new_sound_id()

    name = obj.get(KEY_NAME)
    if not isinstance(name, str):
        raise CodecError(f"'{KEY_NAME}' missing or not a string")

    audio_file_name = obj.get(KEY_AUDIO)
    if not isinstance(audio_file_name, str):
        raise CodecError(f"'{KEY_AUDIO}' missing or not a string")

    appearance = _decode_appearance(obj)

    try:
        return SoundRecord(
            id=sound_id,
            name=name,
            appearance=appearance,
            audio_file_name=audio_file_name,
        )
    except ValueError as e:
        raise CodecError(str(e)) from e


def decode_sounds(data: bytes) -> DecodeResult:
    """
    Deserialize a document.

    Each malformed entry is rejected on its own; the remaining entries are
    still returned.

    Raises:
        CodecError: If the document itself is not a JSON array
    """
    try:
        document = json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CodecError(f"Document is not valid JSON: {e}") from e

    if not isinstance(document, list):
        raise CodecError(f"Document must be a JSON array, got {type(document).__name__}")

    result = DecodeResult()
    for index, obj in enumerate(document):
        try:
            result.records.append(decode_record(obj))
        except CodecError as e:
            result.rejected.append((index, str(e)))
    return result


def _decode_appearance(obj: Dict[str, Any]):
    """Pick the appearance variant by which key the entry carries"""
    if KEY_COLOR in obj:
        payload = obj[KEY_COLOR]
        if not isinstance(payload, str):
            raise CodecError(f"'{KEY_COLOR}' must be a base64 string")
        try:
            return ColorAppearance(Color.from_bytes(_b64decode(payload)))
        except ValueError as e:
            raise CodecError(f"'{KEY_COLOR}' is malformed: {e}") from e

    if KEY_IMAGE in obj:
        payload = obj[KEY_IMAGE]
        if payload is None:
            return ImageAppearance(None)
        if not isinstance(payload, str):
            raise CodecError(f"'{KEY_IMAGE}' must be a base64 string or null")
        try:
            return ImageAppearance(_b64decode(payload))
        except ValueError as e:
            raise CodecError(f"'{KEY_IMAGE}' is malformed: {e}") from e

    return ColorAppearance(DEFAULT_COLOR)


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _b64decode(text: str) -> bytes:
    try:
        return base64.b64decode(text, validate=True)
    except binascii.Error as e:
        raise ValueError(f"invalid base64: {e}") from e
