import json
from unittest.mock import patch

import pytest

from workos.core.exceptions import SignatureVerificationException
from workos.models import (
    DirectoryGroup,
    DirectoryUser,
    DirectoryUserGroupMembership,
    Organization,
    UpdatedDirectoryUser,
    User,
)
from workos.webhooks import Webhooks

SECRET = "secret"
NOW_MS = 1_700_000_000_000


@pytest.fixture()
def webhooks(signature_provider):
    return Webhooks(signature_provider)


@pytest.fixture()
def payload(fixture_data):
    return fixture_data("webhook.json")


def test_construct_event_with_correct_payload_header_and_secret(webhooks, payload, sign_header):
    event = webhooks.construct_event(payload, sign_header(payload), SECRET)

    assert event.id == "wh_123"
    assert event.event == "dsync.user.created"
    assert event.created_at == "2021-06-25T19:07:33.155Z"
    assert isinstance(event.data, DirectoryUser)
    assert event.data.id == "directory_user_01FAEAJCR3ZBZ30D8BD1924TVG"
    assert event.data.idp_id == "00u1e8mutl6wlH3lL4x7"
    assert event.data.first_name == "Blair"
    assert event.data.directory_id == "directory_01F9M7F68PZP8QXP8G7X5QRHS7"
    assert event.data.raw_attributes["name"]["middleName"] == "Elizabeth"


def test_event_data_renders_camel_case(webhooks, payload, sign_header):
    event = webhooks.construct_event(payload, sign_header(payload), SECRET)
    data = event.to_dict()["data"]

    assert data["idpId"] == "00u1e8mutl6wlH3lL4x7"
    assert data["lastName"] == "Lunchford"
    assert data["jobTitle"] == "Software Engineer"
    assert data["directoryId"] == "directory_01F9M7F68PZP8QXP8G7X5QRHS7"
    assert data["createdAt"] == "2021-06-25T19:07:33.155Z"
    # Free-form mappings are passed through untouched
    assert data["rawAttributes"] == payload["data"]["raw_attributes"]
    assert data["emails"] == payload["data"]["emails"]


def test_construct_event_from_raw_body(webhooks, payload, sign_header):
    raw = json.dumps(payload, indent=2)
    event = webhooks.construct_event(raw.encode("utf-8"), sign_header(raw), SECRET)
    assert event.data.username == "blair@foo-corp.com"


def test_construct_event_with_custom_tolerance(webhooks, payload, sign_header, clock):
    clock.now = NOW_MS + 200
    event = webhooks.construct_event(payload, sign_header(payload), SECRET, tolerance=200)
    assert event.id == "wh_123"


def test_missing_fields_become_none(webhooks, sign_header):
    payload = {"id": "wh_1", "event": "dsync.user.created", "data": {"id": "directory_user_1"}}
    event = webhooks.construct_event(payload, sign_header(payload), SECRET)

    assert event.data.id == "directory_user_1"
    assert event.data.first_name is None
    assert event.created_at is None


def test_updated_directory_user_carries_previous_attributes(webhooks, sign_header):
    payload = {
        "id": "wh_2",
        "event": "dsync.user.updated",
        "data": {"id": "directory_user_1", "first_name": "Blair", "previous_attributes": {"first_name": "B"}},
        "created_at": "2021-06-25T19:07:33.155Z",
    }
    event = webhooks.construct_event(payload, sign_header(payload), SECRET)

    assert isinstance(event.data, UpdatedDirectoryUser)
    assert event.data.previous_attributes == {"first_name": "B"}
    assert event.data.object == "directory_user"
    assert event.to_dict()["data"]["previousAttributes"] == {"first_name": "B"}


@pytest.mark.parametrize(
    "event_name,data,expected_type",
    [
        ("dsync.group.created", {"id": "directory_group_1", "name": "Eng"}, DirectoryGroup),
        (
            "dsync.group.user_added",
            {"directory_id": "directory_1", "user": {"id": "u"}, "group": {"id": "g"}},
            DirectoryUserGroupMembership,
        ),
        ("organization.created", {"id": "org_1", "name": "Foo Corp"}, Organization),
        ("user.created", {"id": "user_1", "email": "a@b.c"}, User),
    ],
)
def test_event_data_typed_by_event_family(webhooks, sign_header, event_name, data, expected_type):
    payload = {"id": "wh_3", "event": event_name, "data": data}
    event = webhooks.construct_event(payload, sign_header(payload), SECRET)
    assert isinstance(event.data, expected_type)


def test_unknown_event_keeps_raw_data(webhooks, sign_header):
    payload = {"id": "wh_4", "event": "something.new", "data": {"foo_bar": 1}}
    event = webhooks.construct_event(payload, sign_header(payload), SECRET)
    assert event.data == {"foo_bar": 1}


@pytest.mark.parametrize(
    "header",
    [
        "",
        f"t={NOW_MS}, v1=",
        f"t={NOW_MS}, v1=99999",
        "t=9999, v1=" + "0" * 64,
    ],
)
def test_construct_event_rejects_bad_headers(webhooks, payload, header):
    with pytest.raises(SignatureVerificationException):
        webhooks.construct_event(payload, header, SECRET)


def test_construct_event_with_incorrect_payload(webhooks, payload, sign_header):
    header = sign_header(payload)
    with pytest.raises(SignatureVerificationException):
        webhooks.construct_event("invalid", header, SECRET)


def test_construct_event_with_incorrect_secret(webhooks, payload, sign_header):
    with pytest.raises(SignatureVerificationException):
        webhooks.construct_event(payload, sign_header(payload), "invalid")


def test_nothing_is_deserialized_when_verification_fails(webhooks, payload):
    with patch("workos.webhooks.deserialize_event") as deserialize:
        with pytest.raises(SignatureVerificationException):
            webhooks.construct_event(payload, "", SECRET)
    deserialize.assert_not_called()


def test_verify_header_aliases_to_signature_provider(webhooks, payload, sign_header):
    header = sign_header(payload)
    with patch.object(webhooks.signature_provider, "verify_header", wraps=webhooks.signature_provider.verify_header) as spy:
        webhooks.verify_header(payload, header, SECRET)
    spy.assert_called_once_with(payload, header, SECRET, 180_000)


def test_compute_signature_aliases_to_signature_provider(webhooks, payload):
    with patch.object(webhooks.signature_provider, "compute_signature", return_value="sig") as spy:
        assert webhooks.compute_signature(NOW_MS, payload, SECRET) == "sig"
    spy.assert_called_once_with(NOW_MS, payload, SECRET)


def test_get_timestamp_and_signature_hash_aliases_to_signature_provider(webhooks):
    with patch.object(
        webhooks.signature_provider,
        "get_timestamp_and_signature_hash",
        wraps=webhooks.signature_provider.get_timestamp_and_signature_hash,
    ) as spy:
        assert webhooks.get_timestamp_and_signature_hash("t=1, v1=abc") == (1, ["abc"])
    spy.assert_called_once_with("t=1, v1=abc")
