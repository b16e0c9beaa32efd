"""
Fn entrypoint for OCI Events "createobject" notifications.
- Decodes the event and skips anything but .txt objects
- Fetches the text, renders a PDF, uploads it to OUTPUT_BUCKET
- Reports a {Message, Error} JSON payload on the first failure

Configuration: see core.settings for the required keys.
"""

from __future__ import annotations

import io
import json
import logging
from dataclasses import asdict, dataclass
from typing import Any, Mapping, Optional

from fdk import response

from ..core.exceptions import Text2PdfError, UnsupportedFileType
from ..core.logging_config import setup_logging
from ..core.settings import Settings, local_config, parse_extensions
from ..orchestrators.text2pdf_pipeline import StorageFactory, Text2PdfPipeline, ensure_supported
from ..services.event_decoder import decode_event

setup_logging()
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FailureResponse:
    Message: str
    Error: str

    @classmethod
    def from_error(cls, err: Text2PdfError) -> "FailureResponse":
        return cls(Message=err.message, Error=err.cause)

    def to_json(self) -> str:
        return json.dumps(asdict(self))

    def __str__(self) -> str:
        return f"{self.Message} due to {self.Error}"


@dataclass(frozen=True)
class Outcome:
    """Body and content type written back to the Fn runtime."""
    body: str
    content_type: str = "text/plain"


def _log_settings(cfg: Settings) -> None:
    # passphrase and key content are never logged
    logger.info(
        "Function configuration",
        extra={
            "stage": "config",
            "tenancy": cfg.tenancy,
            "user": cfg.user,
            "region": cfg.region,
            "fingerprint": cfg.fingerprint,
            "bucket": cfg.output_bucket,
            "path": cfg.private_key_path,
        },
    )


def process(
    data: Any,
    config: Optional[Mapping[str, str]] = None,
    storage_factory: Optional[StorageFactory] = None,
) -> Outcome:
    """
    Run one invocation and return what goes on the output channel.

    Without a config mapping (local runs) the environment and .env are used.
    The event is decoded and its extension checked before the configuration is
    validated, so skipped objects never produce a failure.
    """
    if config is None:
        config = local_config()
    try:
        event = decode_event(data)
        ensure_supported(event, parse_extensions(config))
        cfg = Settings.from_config(config)
        _log_settings(cfg)
        result = Text2PdfPipeline(cfg, storage_factory=storage_factory).run(event)
    except UnsupportedFileType as e:
        logger.info(e.message, extra={"stage": "validate", "status": "SKIPPED"})
        return Outcome(body="")
    except Text2PdfError as e:
        failure = FailureResponse.from_error(e)
        logger.error(str(failure), extra={"stage": "pipeline", "status": "FAILED"})
        return Outcome(body=failure.to_json(), content_type="application/json")
    return Outcome(body=result.message)


def handler(ctx, data: io.BytesIO = None):
    """Fn FDK handler."""
    outcome = process(data, dict(ctx.Config()))
    return response.Response(
        ctx,
        response_data=outcome.body,
        headers={"Content-Type": outcome.content_type},
    )
