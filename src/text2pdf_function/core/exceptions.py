"""
Typed exceptions to keep failure modes explicit and testable.

Every terminal error carries a short ``message`` and the textual ``cause``
so the handler can turn it into a FailureResponse without guessing.
"""

from __future__ import annotations

from typing import Optional


class Text2PdfError(RuntimeError):
    """Base class: (message, cause) pair reported on the output channel."""

    def __init__(self, message: str, cause: Optional[object] = None):
        self.message = message
        self.cause = "" if cause is None else str(cause)
        super().__init__(f"{message} due to {self.cause}" if self.cause else message)


class UnsupportedFileType(Text2PdfError):
    """Object is not a plain-text file; the invocation is skipped, not failed."""


class DecodeError(Text2PdfError):
    """Event payload could not be decoded."""


class ConfigError(Text2PdfError):
    """Configuration missing/invalid."""


class CredentialUnavailable(Text2PdfError):
    """Private signing key could not be read."""


class ClientInitError(Text2PdfError):
    """Object Storage client could not be constructed."""


class StorageReadError(Text2PdfError):
    """Object Storage get failures."""


class RenderError(Text2PdfError):
    """PDF could not be written."""


class StorageWriteError(Text2PdfError):
    """Object Storage put failures."""
