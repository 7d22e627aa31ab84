"""Tests for the REST backend."""

import json

import httpx
import pytest

from item_editor.backends.rest import RestBackend
from item_editor.errors import LoadError, WriteError
from item_editor.models import Item

BASE_URL = "http://registry.local:8080"

ITEMS_JSON = [
    {
        "name": "Alarm",
        "type": "GroupItem",
        "groupType": "Number",
        "function": {"name": "THRESHOLD", "params": ["10", "20"]},
        "label": "Alarm level",
        "category": None,
        "tags": ["Safety"],
        "groupNames": [],
    },
    {
        "name": "Lights",
        "type": "GroupItem",
        "groupType": "Switch",
        "function": {"name": "AND"},
        "tags": [],
        "groupNames": [],
    },
    {"name": "Hall_Light", "type": "SwitchItem", "label": "Hall", "groupNames": ["Lights"]},
]


def make_backend(handler) -> RestBackend:
    """Create a REST backend whose requests go to ``handler``."""
    client = httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return RestBackend(url=BASE_URL, client=client)


def test_requires_url() -> None:
    """Test an empty url is rejected."""
    with pytest.raises(ValueError, match="url required"):
        RestBackend(url="")


def test_list_items() -> None:
    """Test items are parsed and functions are converted to wire strings."""
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=ITEMS_JSON)

    items = make_backend(handler).list_items()

    assert requests[0].method == "GET"
    assert requests[0].url.path == "/rest/items"
    assert requests[0].url.params["recursive"] == "false"
    assert [item.name for item in items] == ["Alarm", "Lights", "Hall_Light"]
    assert items[0].function == "THRESHOLD_10_20"
    assert items[0].group_type == "Number"
    assert items[0].tags == ["Safety"]
    assert items[1].function == "AND"
    assert items[2].function is None
    assert items[2].group_names == ["Lights"]


def test_list_items_failure() -> None:
    """Test server errors surface as load errors."""
    backend = make_backend(lambda request: httpx.Response(500))
    with pytest.raises(LoadError, match="Failed to list items"):
        backend.list_items()


def test_list_items_connection_error() -> None:
    """Test transport errors surface as load errors."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(LoadError):
        make_backend(handler).list_items()


def test_create_sends_function_object() -> None:
    """Test writes send the function as name and params."""
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=json.loads(request.content))

    item = Item(name="Alarm", type="GroupItem", group_type="Number", function="THRESHOLD_10_20")
    saved = make_backend(handler).create("Alarm", item)

    assert requests[0].method == "PUT"
    assert requests[0].url.path == "/rest/items/Alarm"
    body = json.loads(requests[0].content)
    assert body["groupType"] == "Number"
    assert body["function"] == {"name": "THRESHOLD", "params": ["10", "20"]}
    assert saved == item


def test_create_plain_item_omits_group_fields() -> None:
    """Test items without group type or function omit those keys."""
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(201)

    item = Item(name="Hall_Light", type="SwitchItem", group_names=["Lights"])
    assert make_backend(handler).create("Hall_Light", item) == item
    assert "groupType" not in bodies[0]
    assert "function" not in bodies[0]
    assert bodies[0]["groupNames"] == ["Lights"]


def test_create_failure() -> None:
    """Test rejected writes raise a write error."""
    backend = make_backend(lambda request: httpx.Response(400, json={"error": "bad"}))
    with pytest.raises(WriteError, match="Alarm"):
        backend.create("Alarm", Item(name="Alarm", type="NumberItem"))


def test_remove() -> None:
    """Test removal issues a DELETE for the item."""
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200)

    make_backend(handler).remove("Hall_Light")
    assert requests[0].method == "DELETE"
    assert requests[0].url.path == "/rest/items/Hall_Light"


def test_remove_missing() -> None:
    """Test removing an unknown item raises a write error."""
    backend = make_backend(lambda request: httpx.Response(404))
    with pytest.raises(WriteError):
        backend.remove("Garage")


def test_token_header() -> None:
    """Test the token is sent as a bearer token."""
    backend = RestBackend(url=BASE_URL + "/", token="secret")
    assert backend.url == BASE_URL
    assert backend.client.headers["Authorization"] == "Bearer secret"
