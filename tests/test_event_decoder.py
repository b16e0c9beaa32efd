"""Tests for the OCI Events decoder."""

import io
import json
from datetime import datetime, timezone

import pytest

from conftest import event_bytes, make_event
from text2pdf_function.core.exceptions import DecodeError
from text2pdf_function.services.event_decoder import decode_event


def test_decode_full_event():
    event = decode_event(event_bytes())

    assert event.object_name == "notes.txt"
    assert event.bucket_name == "input-bucket"
    assert event.namespace == "tenantns"
    assert event.event_type == "com.oraclecloud.objectstorage.createobject"
    assert event.compartment_id == "ocid1.compartment.oc1..aaaa"
    assert event.data.additional_details.e_tag == "f8ffb6e9-f602-460f-a6c0-00b5abfa24c7"
    assert event.data.additional_details.archival_state == "Available"
    assert event.event_time == datetime(2019, 10, 28, 15, 33, 41, tzinfo=timezone.utc)


def test_decode_accepts_bytes_and_str():
    raw = json.dumps(make_event(resource_name="a.txt"))
    assert decode_event(raw).object_name == "a.txt"
    assert decode_event(raw.encode("utf-8")).object_name == "a.txt"


def test_missing_fields_default_to_empty():
    event = decode_event(io.BytesIO(b'{"eventType": "x", "data": {"additionalDetails": null}}'))

    assert event.object_name == ""
    assert event.namespace == ""
    assert event.bucket_name == ""
    assert event.event_time is None
    assert event.data.free_form_tags == {}


def test_wrong_field_types_are_ignored():
    event = decode_event(b'{"data": {"resourceName": 42, "additionalDetails": {"bucketName": ["b"]}}}')
    assert event.object_name == ""
    assert event.bucket_name == ""


def test_unparsable_event_time_is_none():
    event = decode_event(event_bytes(event_time="yesterday"))
    assert event.event_time is None
    assert event.object_name == "notes.txt"


@pytest.mark.parametrize("body", [b"", b"not json", b"[1, 2]", b'"notes.txt"', None])
def test_malformed_body_raises_decode_error(body):
    data = io.BytesIO(body) if body is not None else None
    with pytest.raises(DecodeError) as exc:
        decode_event(data)
    assert exc.value.message == "Unable to decode event"
    assert exc.value.cause
