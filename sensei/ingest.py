import base64, binascii, mimetypes, re
from dataclasses import dataclass
from typing import Union

from .errors import UnreadableInput

_DATA_URL = re.compile(r"^data:(?P<mime>[^;,]*)(?:;[^,]*)?;base64,(?P<payload>.*)$", re.S)
FALLBACK_MIME = "application/octet-stream"
UPLOAD_TYPES = ["pdf", "png", "jpg", "jpeg", "webp"]


@dataclass(frozen=True)
class FileData:
    encoded: str
    mime_type: str
    name: str


def to_base64(raw: Union[bytes, bytearray, memoryview, str]) -> str:
    """Normalize raw bytes or a base64 data URL to plain base64 text.

    Both read paths give the same output for the same content.
    """
    if isinstance(raw, (bytes, bytearray, memoryview)):
        data = bytes(raw)
    elif isinstance(raw, str):
        m = _DATA_URL.match(raw.strip())
        if not m:
            raise UnreadableInput("Expected a base64 data URL.")
        try:
            data = base64.b64decode(m.group("payload"), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise UnreadableInput("Data URL payload is not valid base64.") from exc
    else:
        raise UnreadableInput(f"Unsupported file content: {type(raw).__name__}")
    if not data:
        raise UnreadableInput("The file is empty.")
    return base64.b64encode(data).decode("ascii")


def _guess_mime(name: str, declared: str = None) -> str:
    if declared:
        return declared
    guessed, _ = mimetypes.guess_type(name or "")
    return guessed or FALLBACK_MIME


def read_upload(upload) -> FileData:
    name = getattr(upload, "name", None) or "upload"
    try:
        raw = upload.getvalue() if hasattr(upload, "getvalue") else upload.read()
    except (OSError, ValueError) as exc:
        raise UnreadableInput(f"Could not read {name}.") from exc
    if raw is None:
        raise UnreadableInput(f"Could not read {name}.")
    return FileData(
        encoded=to_base64(raw),
        mime_type=_guess_mime(name, getattr(upload, "type", None)),
        name=name,
    )


def decode(file_data: FileData) -> bytes:
    try:
        return base64.b64decode(file_data.encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise UnreadableInput(f"Could not decode {file_data.name}.") from exc
