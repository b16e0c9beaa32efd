"""
Lightweight file utilities: extension checks, output naming, scoped temp files.
"""

from __future__ import annotations

import logging
import os
import posixpath
import tempfile
from contextlib import contextmanager
from typing import Iterable, Iterator, Optional

logger = logging.getLogger(__name__)

DOCUMENT_EXTENSION = "pdf"


def extension_of(object_name: str) -> str:
    """Lower-cased extension after the last dot of the final path segment, or ''."""
    base = posixpath.basename(object_name)
    stem, dot, ext = base.rpartition(".")
    return ext.lower() if dot and stem else ""


def is_text_key(object_name: str, extensions: Iterable[str] = ("txt",)) -> bool:
    """True if the object name carries one of the plain-text extensions."""
    return extension_of(object_name) in set(extensions)


def pdf_key_for(object_name: str) -> str:
    """report.txt -> report.pdf, keeping any prefix."""
    root, _ext = posixpath.splitext(object_name)
    return f"{root}.{DOCUMENT_EXTENSION}"


@contextmanager
def scoped_temp_document(object_name: str, tmp_dir: Optional[str] = None) -> Iterator[str]:
    """
    Yield a unique temp path named after the object; the file is removed on exit.
    Removal failure is logged, never raised.
    """
    stem = posixpath.splitext(posixpath.basename(object_name))[0] or "document"
    fd, path = tempfile.mkstemp(prefix=f"{stem}-", suffix=f".{DOCUMENT_EXTENSION}", dir=tmp_dir)
    os.close(fd)
    try:
        yield path
    finally:
        try:
            os.remove(path)
            logger.info("Deleted temp file", extra={"stage": "cleanup", "path": path, "status": "OK"})
        except FileNotFoundError:
            pass
        except OSError:
            logger.error("Error removing temp file", extra={"stage": "cleanup", "path": path}, exc_info=True)
