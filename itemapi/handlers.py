"""Item resource: an in-memory store and the API operations on it."""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Iterator
from dataclasses import asdict, dataclass
from typing import Any

from itemapi.responses import Response, error_response, json_response

logger = logging.getLogger(__name__)

MAX_ITEMS = 100
MAX_NAME_BYTES = 63
ITEM_PREFIX = "/api/v1/items/"

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

_ID_BUFFER_SIZE = 32
_C_SPACE = " \t\n\v\f\r"
_JSON_SKIPPED = "".join(chr(code) for code in range(33))
_INTEGER = re.compile(r"[+-]?[0-9]+")

_BAD_ID_MESSAGE = (
    "Invalid or missing item ID in URI. Expected format: /api/v1/items/{id}"
)


@dataclass
class Request:
    """An HTTP request as seen by the handlers."""

    method: str
    uri: str
    body: bytes = b""


@dataclass
class Item:
    """One stored item."""

    id: int
    name: str
    value: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class ItemStore:
    """A bounded, ordered, in-memory collection of items."""

    def __init__(self, capacity: int = MAX_ITEMS) -> None:
        self.capacity = capacity
        self._items: list[Item] = []
        self._next_id = 1

    def seed(self) -> None:
        """Add the two sample items if the store is empty."""
        if self._items:
            return
        for name, value in (("First Item", 100), ("Second Item", 200)):
            if len(self._items) < self.capacity:
                self.add(name, value)
        logger.info("Dummy data initialized with %d items.", len(self._items))

    def find(self, item_id: int) -> Item | None:
        return next((item for item in self._items if item.id == item_id), None)

    def add(self, name: str, value: int) -> Item:
        """Store a new item under the next free id.

        Raises OverflowError when the store is at capacity.
        """
        if len(self._items) >= self.capacity:
            raise OverflowError("item store is full")
        item = Item(self._next_id, name, value)
        self._next_id += 1
        self._items.append(item)
        return item

    def remove(self, item_id: int) -> Item:
        """Remove and return the item with ``item_id``; KeyError if absent."""
        for position, item in enumerate(self._items):
            if item.id == item_id:
                return self._items.pop(position)
        raise KeyError(item_id)

    def __iter__(self) -> Iterator[Item]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)


def parse_item_id(uri: str) -> int:
    """Extract the integer id from ``/api/v1/items/{id}``.

    Raises ValueError when the URI has no valid id.
    """
    if len(uri) <= len(ITEM_PREFIX) or not uri.startswith(ITEM_PREFIX):
        raise ValueError("URI does not match expected ID format or is too short")
    text = uri[len(ITEM_PREFIX):]
    if len(text.encode("utf-8")) >= _ID_BUFFER_SIZE:
        raise ValueError("item ID string in URI is too long")
    digits = text.lstrip(_C_SPACE)
    if not _INTEGER.fullmatch(digits):
        raise ValueError(f"invalid integer ID format in URI: {text!r}")
    value = int(digits)
    # -1 is reserved as the "no id" marker and never names an item.
    if not INT_MIN <= value <= INT_MAX or value == -1:
        raise ValueError(f"invalid integer ID format in URI: {text!r}")
    return value


def _first_key_wins(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in pairs:
        result.setdefault(key, value)
    return result


def _reject_constant(name: str) -> Any:
    raise ValueError(f"unsupported JSON constant {name}")


def _parse_body(body: bytes) -> Any:
    """Parse the leading JSON value of ``body``; trailing data is ignored."""
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ValueError("body is not valid UTF-8") from exc
    decoder = json.JSONDecoder(
        object_pairs_hook=_first_key_wins, parse_constant=_reject_constant
    )
    value, _ = decoder.raw_decode(text.lstrip(_JSON_SKIPPED))
    return value


def _field(document: Any, key: str) -> Any:
    return document.get(key) if isinstance(document, dict) else None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_int(number: int | float) -> int:
    if isinstance(number, float) and math.isinf(number):
        return INT_MAX if number > 0 else INT_MIN
    return max(INT_MIN, min(INT_MAX, math.trunc(number)))


def _name_fits(name: str) -> bool:
    return len(name.encode("utf-8")) <= MAX_NAME_BYTES


class ItemApi:
    """Request handlers for the item endpoints."""

    def __init__(self, store: ItemStore | None = None) -> None:
        self.store = store if store is not None else ItemStore()

    def root(self, request: Request) -> Response:
        return json_response(
            200,
            {"message": "Welcome to the API Backend! Navigate to /api/v1/items for data."},
        )

    def get_all_items(self, request: Request) -> Response:
        self.store.seed()
        return json_response(200, {"items": [item.to_dict() for item in self.store]})

    def get_item_by_id(self, request: Request) -> Response:
        self.store.seed()
        try:
            item_id = parse_item_id(request.uri)
        except ValueError as exc:
            logger.warning("%s", exc)
            return error_response(400, "Bad Request", _BAD_ID_MESSAGE)
        item = self.store.find(item_id)
        if item is None:
            return error_response(404, "Not Found", "Item with specified ID not found.")
        return json_response(200, item.to_dict())

    def create_item(self, request: Request) -> Response:
        self.store.seed()
        if len(self.store) >= self.store.capacity:
            return error_response(
                507,
                "Insufficient Storage",
                "Cannot create more items, in-memory storage limit reached.",
            )
        try:
            document = _parse_body(request.body)
        except ValueError:
            return error_response(400, "Bad Request", "Invalid JSON format in request body.")
        name = _field(document, "name")
        value = _field(document, "value")
        if not isinstance(name, str) or not _is_number(value):
            return error_response(
                400,
                "Bad Request",
                "Missing or invalid 'name' (string) or 'value' (number) in JSON body.",
            )
        if not _name_fits(name):
            return error_response(
                400, "Bad Request", "Item name provided is too long (max 63 characters)."
            )
        item = self.store.add(name, _to_int(value))
        return json_response(201, item.to_dict())

    def update_item(self, request: Request) -> Response:
        self.store.seed()
        try:
            item_id = parse_item_id(request.uri)
        except ValueError as exc:
            logger.warning("%s", exc)
            return error_response(400, "Bad Request", _BAD_ID_MESSAGE)
        item = self.store.find(item_id)
        if item is None:
            return error_response(
                404, "Not Found", "Item with specified ID not found for update."
            )
        try:
            document = _parse_body(request.body)
        except ValueError:
            return error_response(
                400, "Bad Request", "Invalid JSON format in request body for update."
            )
        name = _field(document, "name")
        value = _field(document, "value")
        if isinstance(name, str):
            if not _name_fits(name):
                return error_response(
                    400, "Bad Request", "Updated item name too long (max 63 characters)."
                )
            item.name = name
        if _is_number(value):
            item.value = _to_int(value)
        return json_response(200, item.to_dict())

    def delete_item(self, request: Request) -> Response:
        self.store.seed()
        try:
            item_id = parse_item_id(request.uri)
        except ValueError as exc:
            logger.warning("%s", exc)
            return error_response(400, "Bad Request", _BAD_ID_MESSAGE)
        try:
            self.store.remove(item_id)
        except KeyError:
            return error_response(
                404, "Not Found", "Item with specified ID not found for deletion."
            )
        return json_response(200, {"message": "Item deleted successfully."})