"""Image value objects shared by staging and solving."""

import base64
import binascii
from dataclasses import dataclass

_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"BM", "image/bmp"),
)


@dataclass(frozen=True)
class StagedImage:
    """Uploaded image waiting to be solved."""

    filename: str
    content: bytes
    content_type: str

    @classmethod
    def from_upload(cls, filename: str, content: bytes) -> "StagedImage":
        """Build a staged image, raising ValueError for non-image content."""
        content_type = detect_image_type(content)
        if content_type is None:
            raise ValueError(f"Unsupported file type: {filename}")
        return cls(filename=filename, content=content, content_type=content_type)


@dataclass(frozen=True)
class ImageRef:
    """Reference to a solved image, held as a data URI."""

    uri: str

    @classmethod
    def from_bytes(cls, content: bytes, content_type: str | None = None) -> "ImageRef":
        """Encode image bytes as a data URI reference."""
        mime_type = content_type or detect_image_type(content) or "image/png"
        encoded = base64.b64encode(content).decode("utf-8")
        return cls(uri=f"data:{mime_type};base64,{encoded}")

    @property
    def content_type(self) -> str:
        """Return the MIME type declared in the data URI."""
        header, _, _ = self.uri.partition(",")
        return header.removeprefix("data:").split(";")[0] or "image/png"

    @property
    def content(self) -> bytes:
        """Decode the referenced image bytes."""
        header, _, data = self.uri.partition(",")
        if not header.startswith("data:") or not header.endswith(";base64"):
            raise ValueError("Image reference is not a base64 data URI")
        try:
            return base64.b64decode(data, validate=True)
        except binascii.Error as exc:
            raise ValueError("Image reference has invalid base64 data") from exc


def detect_image_type(content: bytes) -> str | None:
    """Infer an image MIME type from file signatures."""
    for signature, mime_type in _SIGNATURES:
        if content.startswith(signature):
            return mime_type
    if content[:4] == b"RIFF" and content[8:12] == b"WEBP":
        return "image/webp"
    return None
