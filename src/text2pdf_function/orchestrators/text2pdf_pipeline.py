"""
Orchestrator: validate event -> credentials/client -> fetch -> render -> publish.

Each stage raises its own typed error; the first one aborts the rest.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from ..core.exceptions import StorageWriteError, UnsupportedFileType
from ..core.settings import Settings
from ..services.credentials import load_signing_config
from ..services.event_decoder import InboundEvent
from ..services.file_utils import is_text_key, pdf_key_for, scoped_temp_document
from ..services.object_store_client import ObjectStoreClient
from ..services.pdf_renderer import PdfRenderer, RenderedDocument

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"

StorageFactory = Callable[[Settings, str], ObjectStoreClient]


def ensure_supported(event: InboundEvent, extensions: Iterable[str]) -> None:
    """Raises UnsupportedFileType for anything but the given text extensions."""
    if not is_text_key(event.object_name, extensions):
        raise UnsupportedFileType(f"File is not of type .txt - {event.object_name}")


def default_storage_factory(cfg: Settings, namespace: str) -> ObjectStoreClient:
    """Read the signing key, then build a client for this invocation."""
    return ObjectStoreClient.from_signing_config(namespace, load_signing_config(cfg))


@dataclass
class ConversionResult:
    """Return type for a completed conversion."""
    source_object: str
    output_object: str
    output_bucket: str
    uri: str
    size: int
    page_count: int

    @property
    def message(self) -> str:
        return f"PDF {self.output_object} written to storage bucket - {self.output_bucket}"


class Text2PdfPipeline:
    """Runs one conversion per invocation."""

    def __init__(
        self,
        cfg: Settings,
        storage_factory: Optional[StorageFactory] = None,
        renderer: Optional[PdfRenderer] = None,
    ):
        self._cfg = cfg
        self._storage_factory = storage_factory or default_storage_factory
        self._renderer = renderer or PdfRenderer()

    def validate(self, event: InboundEvent) -> None:
        ensure_supported(event, self._cfg.supported_extensions)

    def run(self, event: InboundEvent) -> ConversionResult:
        self.validate(event)
        storage = self._storage_factory(self._cfg, event.namespace)

        raw = storage.get_bytes(event.bucket_name, event.object_name)
        text = raw.decode("utf-8", errors="replace")

        output_name = pdf_key_for(event.object_name)
        with scoped_temp_document(event.object_name, self._cfg.tmp_dir) as tmp_path:
            doc = self._renderer.render(text, tmp_path, creation_date=event.event_time)
            uri = self.publish(storage, doc, event, output_name)

        result = ConversionResult(
            source_object=event.object_name,
            output_object=output_name,
            output_bucket=self._cfg.output_bucket,
            uri=uri,
            size=doc.size,
            page_count=doc.page_count,
        )
        logger.info(result.message, extra={"stage": "pipeline", "object": output_name, "status": "SUCCESS"})
        return result

    def publish(self, storage: ObjectStoreClient, doc: RenderedDocument, event: InboundEvent, output_name: str) -> str:
        """Upload the rendered file to the output bucket."""
        try:
            f = open(doc.path, "rb")
        except OSError as e:
            raise StorageWriteError(f"failed to read PDF from {doc.path}", e) from e
        with f:
            size = os.fstat(f.fileno()).st_size
            return storage.put_stream(
                self._cfg.output_bucket,
                output_name,
                f,
                content_length=size,
                content_type=PDF_CONTENT_TYPE,
                metadata={"source-bucket": event.bucket_name, "source-object": event.object_name},
            )
