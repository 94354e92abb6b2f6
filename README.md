# itemapi

A small JSON HTTP API that keeps a collection of items in memory. Each item
has an integer `id`, a `name` (at most 63 bytes of UTF-8) and an integer
`value`. The store is seeded with two sample items ("First Item" with value
100 and "Second Item" with value 200) the first time an item endpoint is
used, and holds at most 100 items.

## Running the server

```
pip install .
itemapi
```

By default the server listens on `0.0.0.0:8000`. Both can be changed:

```
itemapi --host 127.0.0.1 --port 8080
```

It runs until it receives SIGINT (Ctrl+C) or SIGTERM, then prints
"Server gracefully shut down." and exits. If the address cannot be bound
it prints an error and exits with status 1.

## Endpoints

| Method | Path                 | Action                        |
|--------|----------------------|-------------------------------|
| GET    | `/`                  | Welcome message               |
| GET    | `/api/v1/items`      | List all items                |
| POST   | `/api/v1/items`      | Create an item (201)          |
| GET    | `/api/v1/items/{id}` | Fetch one item                |
| PUT    | `/api/v1/items/{id}` | Update `name` and/or `value`  |
| DELETE | `/api/v1/items/{id}` | Delete an item                |

Creating an item needs both a string `name` and a number `value`; a
fractional `value` is truncated to an integer. An update changes only the
fields that are present with the right type. Any query string is ignored
when matching paths.

```
curl -X POST localhost:8000/api/v1/items -d '{"name": "Third Item", "value": 300}'
```

Every JSON response carries `Content-Type: application/json` and
`Access-Control-Allow-Origin: *`. Errors look like this:

```json
{"status_code":404,"error":"Not Found","message":"Item with specified ID not found."}
```

Statuses used: 400 for a malformed id, a malformed JSON body, missing or
mistyped fields, a name that is too long, or an invalid `Content-Length`
header; 404 for an unknown item or endpoint; 507 when the store is full.

## Using it as a library

```python
from itemapi.handlers import ItemApi, ItemStore, Request
from itemapi.router import build_router
from itemapi.server import create_server

router = build_router(ItemApi(ItemStore(100)))
response = router.dispatch(Request("GET", "/api/v1/items/1"))
print(response.status, response.json())

server = create_server("127.0.0.1", 8080, router)
server.serve_forever()
```

- `itemapi.handlers` has `Request`, `Item`, `ItemStore` (`seed`, `find`,
  `add`, `remove`, iteration and `len`), `parse_item_id` and `ItemApi`.
- `itemapi.router` has `Route`, `Router` and `build_router`.
- `itemapi.responses` has `Response`, `json_response` and `error_response`.
- `itemapi.server` has `ApiRequestHandler`, `create_server` and `main`.

The package also has a domain-name checker:

```python
from itemapi.domain import is_valid_domain

is_valid_domain("example.com")   # True
is_valid_domain("-bad.com")      # False
```

## What it does not do

Items are kept only in memory. There is no storage on disk or in a
database: every item is lost when the server stops. There is no
authentication and no HTTPS.

## Tests

```
pip install .[test]
pytest
```