"""Domain name validation."""

from __future__ import annotations

import string

MAX_DOMAIN_LENGTH = 253
MAX_LABEL_LENGTH = 63
MIN_TLD_LENGTH = 2

_LABEL_CHARS = frozenset(string.ascii_letters + string.digits + "-")
_TLD_CHARS = frozenset(string.ascii_letters)


def _label_is_valid(label: str) -> bool:
    return (
        0 < len(label) <= MAX_LABEL_LENGTH
        and not label.startswith("-")
        and not label.endswith("-")
        and all(char in _LABEL_CHARS for char in label)
    )


def is_valid_domain(domain: str | None) -> bool:
    """Check a domain name against RFC 1034/1035 rules plus a letters-only TLD.

    The whole name is 1 to 253 characters, made of dot-separated labels of
    1 to 63 letters, digits and inner hyphens; the last label has at least
    two characters, all of them letters. A trailing dot is rejected.
    """
    if not domain or len(domain) > MAX_DOMAIN_LENGTH:
        return False
    labels = domain.split(".")
    if not all(_label_is_valid(label) for label in labels):
        return False
    tld = labels[-1]
    return len(tld) >= MIN_TLD_LENGTH and all(char in _TLD_CHARS for char in tld)