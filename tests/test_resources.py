"""Reference and status resources."""

import json

import pytest

from tropipay_mcp.resources import read_resource
from tropipay_mcp.resources.tropipay_resources import RESOURCES, resource_name, resource_uri


def read(name, context):
    return json.loads(read_resource(name, context))


@pytest.mark.parametrize("uri,name", [
    ("tropipay://config", "config"),
    ("tropipay://movement-types", "movement-types"),
    ("tropipay://status/", "status"),
])
def test_resource_name(uri, name):
    assert resource_name(uri) == name


def test_every_listed_resource_is_readable(context):
    for resource in RESOURCES:
        assert "error" not in read(resource["name"], context)
        assert resource_name(resource_uri(resource["name"])) == resource["name"]


def test_unknown_resource(context):
    assert read("fx-rates", context) == {"error": "Unknown resource: fx-rates"}


def test_config_masks_client_id(context):
    document = read("config", context)
    assert document["environment"] == "sandbox"
    assert document["clientId"] == "client-i..."
    assert document["hasCredentials"] is True
    assert document["clientInitialized"] is True
    assert document["baseUrl"].endswith("/api/v2")
    assert "client-secret" not in json.dumps(document)


def test_status_ready(context):
    document = read("status", context)
    assert document["status"] == "ready"
    assert document["clientReady"] is True


def test_status_error(failing_context):
    document = read("status", failing_context)
    assert document["status"] == "error"
    assert "TROPIPAY_CLIENT_ID" in document["error"]


def test_movement_types_catalog(context):
    document = read("movement-types", context)
    assert sorted(int(code) for code in document["movementTypes"]) == list(range(1, 10))
    assert document["movementTypes"]["8"]["name"] == "Fee"


def test_state_catalogs(context):
    assert sorted(read("movement-states", context)["movementStates"]) == ["2", "3", "4", "5", "6"]
    assert sorted(read("account-types", context)["accountTypes"]) == ["1", "2", "3", "4"]
    assert read("account-states", context)["accountStates"]["3"]["name"] == "Blocked"


def test_config_shows_custom_base_url_unchanged(context, config):
    from dataclasses import replace

    context.config = replace(config, base_url="https://tropipay.test")
    assert read("config", context)["baseUrl"] == "https://tropipay.test"
