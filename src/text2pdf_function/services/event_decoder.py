"""
Decoder for OCI Events "com.oraclecloud.objectstorage.createobject" notifications.

The Events service wraps the object details in a CloudEvents 0.1 envelope.
Missing fields decode to empty values; only a body that is not a JSON object
is rejected.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import IO, Any, Dict, Optional, Union

from ..core.exceptions import DecodeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdditionalDetails:
    e_tag: str = ""
    namespace: str = ""
    archival_state: Any = None
    bucket_name: str = ""
    bucket_id: str = ""


@dataclass(frozen=True)
class EventData:
    compartment_id: str = ""
    compartment_name: str = ""
    resource_name: str = ""
    resource_id: str = ""
    availability_domain: str = ""
    free_form_tags: Dict[str, Any] = field(default_factory=dict)
    defined_tags: Dict[str, Any] = field(default_factory=dict)
    additional_details: AdditionalDetails = field(default_factory=AdditionalDetails)


@dataclass(frozen=True)
class InboundEvent:
    """Object-created notification for one invocation."""
    cloud_events_version: str = ""
    event_id: str = ""
    event_type: str = ""
    source: str = ""
    event_type_version: str = ""
    event_time: Optional[datetime] = None
    content_type: str = ""
    compartment_id: str = ""
    data: EventData = field(default_factory=EventData)

    @property
    def object_name(self) -> str:
        return self.data.resource_name

    @property
    def namespace(self) -> str:
        return self.data.additional_details.namespace

    @property
    def bucket_name(self) -> str:
        return self.data.additional_details.bucket_name


def _section(doc: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = doc.get(key)
    return value if isinstance(value, dict) else {}


def _text(doc: Dict[str, Any], key: str) -> str:
    value = doc.get(key)
    return value if isinstance(value, str) else ""


def _parse_time(raw: str) -> Optional[datetime]:
    if not raw:
        return None
    try:
        # fromisoformat() before 3.11 rejects a trailing "Z"
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        logger.warning("Unparsable eventTime", extra={"stage": "decode", "status": raw})
        return None


def decode_event(data: Union[bytes, str, IO[bytes], None]) -> InboundEvent:
    """
    Decode one notification document. Raises DecodeError if the body is empty,
    not JSON, or not a JSON object.
    """
    if data is None:
        raise DecodeError("Unable to decode event", "empty request body")
    raw = data.read() if hasattr(data, "read") else data
    if not raw:
        raise DecodeError("Unable to decode event", "empty request body")

    try:
        doc = json.loads(raw)
    except (ValueError, UnicodeDecodeError) as e:
        raise DecodeError("Unable to decode event", e) from e
    if not isinstance(doc, dict):
        raise DecodeError("Unable to decode event", f"expected a JSON object, got {type(doc).__name__}")

    data_doc = _section(doc, "data")
    details_doc = _section(data_doc, "additionalDetails")

    event = InboundEvent(
        cloud_events_version=_text(doc, "cloudEventsVersion"),
        event_id=_text(doc, "eventID"),
        event_type=_text(doc, "eventType"),
        source=_text(doc, "source"),
        event_type_version=_text(doc, "eventTypeVersion"),
        event_time=_parse_time(_text(doc, "eventTime")),
        content_type=_text(doc, "contentType"),
        compartment_id=_text(_section(doc, "extensions"), "compartmentId"),
        data=EventData(
            compartment_id=_text(data_doc, "compartmentId"),
            compartment_name=_text(data_doc, "compartmentName"),
            resource_name=_text(data_doc, "resourceName"),
            resource_id=_text(data_doc, "resourceId"),
            availability_domain=_text(data_doc, "availabilityDomain"),
            free_form_tags=_section(data_doc, "freeFormTags"),
            defined_tags=_section(data_doc, "definedTags"),
            additional_details=AdditionalDetails(
                e_tag=_text(details_doc, "eTag"),
                namespace=_text(details_doc, "namespace"),
                archival_state=details_doc.get("archivalState"),
                bucket_name=_text(details_doc, "bucketName"),
                bucket_id=_text(details_doc, "bucketId"),
            ),
        ),
    )
    logger.info(
        "Decoded event",
        extra={
            "stage": "decode",
            "namespace": event.namespace,
            "bucket": event.bucket_name,
            "object": event.object_name,
            "status": event.event_type,
        },
    )
    return event
