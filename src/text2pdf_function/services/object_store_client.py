"""
Object Storage client wrapper: get/put scoped to one namespace.
"""

from __future__ import annotations

import logging
from typing import Any, BinaryIO, Dict, Optional

import oci
from oci.exceptions import ClientError, RequestException, ServiceError

from ..core.exceptions import ClientInitError, StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)

STORAGE_ERRORS = (ServiceError, ClientError, RequestException)


class ObjectStoreClient:
    """Thin OCI Object Storage wrapper for the two calls the pipeline makes."""

    def __init__(self, namespace: str, client: Any):
        self._namespace = namespace
        self._client = client

    @classmethod
    def from_signing_config(cls, namespace: str, config: Dict[str, Any]) -> "ObjectStoreClient":
        """Build the SDK client; any validation or key-parsing failure is a ClientInitError."""
        try:
            # one attempt per call; transient failures surface immediately
            client = oci.object_storage.ObjectStorageClient(config, retry_strategy=oci.retry.NO_RETRY_STRATEGY)
        except (ClientError, ValueError, TypeError) as e:
            raise ClientInitError("Problem getting Object Store Client handle", e) from e
        logger.info("Object Storage client ready", extra={"stage": "client_init", "namespace": namespace, "status": "OK"})
        return cls(namespace, client)

    @property
    def namespace(self) -> str:
        return self._namespace

    def get_bytes(self, bucket: str, name: str) -> bytes:
        """Read the full object body."""
        try:
            resp = self._client.get_object(self._namespace, bucket, name)
            body = resp.data.content
        except STORAGE_ERRORS as e:
            logger.error(
                "Object Storage get failed",
                extra={"stage": "fetch", "bucket": bucket, "object": name},
                exc_info=True,
            )
            raise StorageReadError(f"Could not read file {name} from bucket {bucket}", e) from e
        logger.info(
            "Read object",
            extra={"stage": "fetch", "bucket": bucket, "object": name, "size": len(body), "status": "OK"},
        )
        return body

    def put_stream(
        self,
        bucket: str,
        name: str,
        body: BinaryIO,
        content_length: int,
        content_type: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
    ) -> str:
        """Upload a stream of known length; returns an oci:// URI."""
        kwargs: Dict[str, Any] = {"content_length": content_length}
        if content_type:
            kwargs["content_type"] = content_type
        if metadata:
            kwargs["opc_meta"] = metadata
        try:
            self._client.put_object(self._namespace, bucket, name, body, **kwargs)
        except STORAGE_ERRORS as e:
            logger.error(
                "Object Storage put failed",
                extra={"stage": "publish", "bucket": bucket, "object": name},
                exc_info=True,
            )
            raise StorageWriteError("Failed to write PDF to bucket", e) from e
        uri = f"oci://{bucket}@{self._namespace}/{name}"
        logger.info(
            "Wrote object",
            extra={"stage": "publish", "bucket": bucket, "object": name, "size": content_length, "status": "OK"},
        )
        return uri
