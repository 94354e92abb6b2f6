import json

import pytest

from itemapi.handlers import (
    INT_MAX,
    INT_MIN,
    Item,
    ItemApi,
    ItemStore,
    Request,
    parse_item_id,
)

ITEMS = "/api/v1/items"


@pytest.fixture
def api():
    return ItemApi(ItemStore())


def _body(payload):
    return json.dumps(payload).encode("utf-8")


def _all(api):
    return api.get_all_items(Request("GET", ITEMS)).json()["items"]


def _create(api, payload):
    return api.create_item(Request("POST", ITEMS, _body(payload)))


def _get(api, item_id):
    return api.get_item_by_id(Request("GET", f"{ITEMS}/{item_id}"))


def test_root_message_points_to_items(api):
    response = api.root(Request("GET", "/"))
    assert response.status == 200
    assert "/api/v1/items" in response.json()["message"]


def test_get_all_items_seeds_sample_data(api):
    items = _all(api)
    assert [item["name"] for item in items] == ["First Item", "Second Item"]
    assert [item["value"] for item in items] == [100, 200]
    assert len({item["id"] for item in items}) == len(items)


def test_seed_only_when_empty():
    store = ItemStore()
    store.add("mine", 5)
    store.seed()
    assert [item.name for item in store] == ["mine"]


def test_seed_respects_capacity():
    store = ItemStore(capacity=1)
    store.seed()
    assert [item.name for item in store] == ["First Item"]


def test_item_to_dict():
    assert Item(4, "thing", 9).to_dict() == {"id": 4, "name": "thing", "value": 9}


@pytest.mark.parametrize("text", ["42", " 42", "+42", "-5", str(INT_MAX), str(INT_MIN)])
def test_parse_item_id_valid(text):
    assert parse_item_id(ITEMS + "/" + text) == int(text)


@pytest.mark.parametrize(
    "uri",
    [
        ITEMS,
        ITEMS + "/",
        "/other/1",
        ITEMS + "/abc",
        ITEMS + "/12abc",
        ITEMS + "/12 ",
        ITEMS + "/-1",
        ITEMS + "/" + str(INT_MAX + 1),
        ITEMS + "/" + str(INT_MIN - 1),
        ITEMS + "/" + "1" * 40,
    ],
)
def test_parse_item_id_invalid(uri):
    with pytest.raises(ValueError):
        parse_item_id(uri)


def test_get_item_by_id_round_trip(api):
    for item in _all(api):
        response = _get(api, item["id"])
        assert response.status == 200
        assert response.json() == item


def test_get_item_missing_is_404(api):
    response = _get(api, 999)
    assert response.status == 404
    assert response.json()["message"] == "Item with specified ID not found."


@pytest.mark.parametrize("suffix", ["abc", "-1", ""])
def test_get_item_bad_id_is_400(api, suffix):
    response = api.get_item_by_id(Request("GET", f"{ITEMS}/{suffix}"))
    assert response.status == 400
    assert response.json()["error"] == "Bad Request"


def test_create_item_round_trip(api):
    before = len(_all(api))
    response = _create(api, {"name": "Widget", "value": 42})
    assert response.status == 201
    created = response.json()
    assert created["name"] == "Widget" and created["value"] == 42
    assert _get(api, created["id"]).json() == created
    assert len(_all(api)) == before + 1


def test_created_ids_are_unique(api):
    ids = [_create(api, {"name": f"n{i}", "value": i}).json()["id"] for i in range(5)]
    existing = [item["id"] for item in _all(api)]
    assert len(set(existing)) == len(existing)
    assert set(ids) <= set(existing)


def test_create_truncates_fractional_value(api):
    assert _create(api, {"name": "frac", "value": 7.9}).json()["value"] == 7


def test_create_clamps_huge_value(api):
    assert _create(api, {"name": "big", "value": 10**20}).json()["value"] == INT_MAX


@pytest.mark.parametrize("body", [b"", b"not json", b"{", b"\xff\xfe"])
def test_create_invalid_json(api, body):
    response = api.create_item(Request("POST", ITEMS, body))
    assert response.status == 400
    assert response.json()["message"] == "Invalid JSON format in request body."


@pytest.mark.parametrize(
    "payload",
    [
        {"value": 1},
        {"name": "x"},
        {"name": 3, "value": 1},
        {"name": "x", "value": "1"},
        {"name": "x", "value": True},
        [1, 2],
    ],
)
def test_create_missing_or_invalid_fields(api, payload):
    response = _create(api, payload)
    assert response.status == 400
    assert response.json()["message"].startswith("Missing or invalid")


def test_create_name_length_limit(api):
    assert _create(api, {"name": "a" * 63, "value": 1}).status == 201
    response = _create(api, {"name": "a" * 64, "value": 1})
    assert response.status == 400
    assert "too long" in response.json()["message"]


def test_create_ignores_trailing_data(api):
    body = b'  {"name":"tail","value":1} trailing'
    response = api.create_item(Request("POST", ITEMS, body))
    assert response.status == 201
    assert response.json()["name"] == "tail"


def test_create_first_duplicate_key_wins(api):
    body = b'{"name":"first","name":"second","value":1}'
    assert api.create_item(Request("POST", ITEMS, body)).json()["name"] == "first"


def test_create_when_full_is_507():
    api = ItemApi(ItemStore(capacity=2))
    response = _create(api, {"name": "x", "value": 1})
    assert response.status == 507
    assert response.json()["error"] == "Insufficient Storage"
    assert len(api.store) == 2


def test_update_value_only(api):
    item = _all(api)[0]
    response = api.update_item(
        Request("PUT", f"{ITEMS}/{item['id']}", _body({"value": 555}))
    )
    assert response.status == 200
    assert response.json() == {"id": item["id"], "name": item["name"], "value": 555}
    assert _get(api, item["id"]).json()["value"] == 555


def test_update_name_and_value(api):
    item = _all(api)[1]
    payload = {"name": "Renamed", "value": -3}
    updated = api.update_item(Request("PUT", f"{ITEMS}/{item['id']}", _body(payload))).json()
    assert updated["name"] == "Renamed" and updated["value"] == -3


def test_update_long_name_changes_nothing(api):
    item = _all(api)[0]
    payload = {"name": "b" * 64, "value": 1}
    response = api.update_item(Request("PUT", f"{ITEMS}/{item['id']}", _body(payload)))
    assert response.status == 400
    assert response.json()["message"] == "Updated item name too long (max 63 characters)."
    assert _get(api, item["id"]).json() == item


def test_update_with_non_object_body_leaves_item(api):
    item = _all(api)[0]
    response = api.update_item(Request("PUT", f"{ITEMS}/{item['id']}", b"[1,2]"))
    assert response.status == 200
    assert response.json() == item


def test_update_invalid_json(api):
    item = _all(api)[0]
    response = api.update_item(Request("PUT", f"{ITEMS}/{item['id']}", b"{oops"))
    assert response.status == 400
    assert response.json()["message"] == "Invalid JSON format in request body for update."


def test_update_missing_item(api):
    response = api.update_item(Request("PUT", f"{ITEMS}/999", _body({"value": 1})))
    assert response.status == 404
    assert response.json()["message"] == "Item with specified ID not found for update."


def test_delete_item(api):
    first, second = _all(api)
    response = api.delete_item(Request("DELETE", f"{ITEMS}/{first['id']}"))
    assert response.status == 200
    assert response.json() == {"message": "Item deleted successfully."}
    assert _get(api, first["id"]).status == 404
    assert _all(api) == [second]


def test_delete_preserves_order(api):
    for i in range(3):
        _create(api, {"name": f"x{i}", "value": i})
    items = _all(api)
    api.delete_item(Request("DELETE", f"{ITEMS}/{items[1]['id']}"))
    assert _all(api) == items[:1] + items[2:]


def test_delete_missing_and_bad_id(api):
    missing = api.delete_item(Request("DELETE", f"{ITEMS}/999"))
    assert missing.status == 404
    assert missing.json()["message"] == "Item with specified ID not found for deletion."
    assert api.delete_item(Request("DELETE", f"{ITEMS}/zz")).status == 400


def test_reseed_after_emptying_uses_fresh_ids(api):
    old_ids = [item["id"] for item in _all(api)]
    for item_id in old_ids:
        api.delete_item(Request("DELETE", f"{ITEMS}/{item_id}"))
    reseeded = _all(api)
    assert [item["name"] for item in reseeded] == ["First Item", "Second Item"]
    assert min(item["id"] for item in reseeded) > max(old_ids)


def test_store_remove_missing_raises():
    with pytest.raises(KeyError):
        ItemStore().remove(1)


def test_store_add_when_full_raises():
    store = ItemStore(capacity=1)
    store.add("a", 1)
    with pytest.raises(OverflowError):
        store.add("b", 2)
    assert len(store) == 1


def test_store_find_and_iteration():
    store = ItemStore()
    added = [store.add(name, value) for name, value in [("a", 1), ("b", 2)]]
    assert list(store) == added
    assert store.find(added[1].id) is added[1]
    assert store.find(added[1].id + 100) is None