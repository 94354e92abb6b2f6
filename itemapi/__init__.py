"""A small JSON HTTP API serving an in-memory collection of items, with a domain-name checker."""

__version__ = "0.1.0"
__all__ = ["domain", "handlers", "responses", "router", "server"]