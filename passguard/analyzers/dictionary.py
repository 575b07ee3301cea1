"""
Common Password Dictionary
===========================

Immutable blocklist of breached / commonly used passwords and default
account names. A candidate is rejected when it equals, or contains as a
contiguous case-insensitive substring, any entry of the list, so that
"MyPass123456!" is caught for embedding "123456".

Entries shorter than four characters are excluded: as substrings they
would reject a large share of legitimate passwords.

References:
    - NIST SP 800-63B (2017), Section 5.1.1.2 -- blocklist comparison.
    - SplashData / NordPass annual "most common passwords" lists.
"""

from __future__ import annotations

from typing import Iterable, Optional

_MIN_ENTRY_LENGTH = 4

COMMON_PASSWORDS: frozenset[str] = frozenset({
    "password", "123456", "123456789", "12345678", "12345", "1234567",
    "password1", "password123", "qwerty", "abc123", "monkey", "letmein",
    "trustno1", "dragon", "baseball", "iloveyou", "master", "sunshine",
    "ashley", "bailey", "passw0rd", "shadow", "superman", "qazwsx",
    "michael", "football", "welcome", "jesus", "ninja", "mustang",
    "admin", "administrator", "root", "toor", "pass", "1234",
    "test", "guest", "info", "mysql", "user", "oracle",
    "puppet", "ansible", "ec2-user", "vagrant",
    "azureuser", "default", "changeme", "password1!", "passw0rd!",
    "123123", "654321", "111111", "000000", "qwerty123", "1q2w3e4r",
    "1qaz2wsx", "zaq1zaq1", "princess", "azerty", "hunter2", "starwars",
})


def build_dictionary(extra: Iterable[str] = ()) -> frozenset[str]:
    """Return the default dictionary merged with *extra* entries.

    Entries are lower-cased; those shorter than four characters are dropped.
    """
    words = set(COMMON_PASSWORDS)
    words.update(w.strip().lower() for w in extra)
    return frozenset(w for w in words if len(w) >= _MIN_ENTRY_LENGTH)


def find_common_password(
    candidate: str,
    dictionary: frozenset[str] = COMMON_PASSWORDS,
) -> Optional[str]:
    """Return the longest dictionary entry contained in *candidate*, if any."""
    lowered = candidate.lower()
    if lowered in dictionary:
        return lowered
    hits = [word for word in dictionary if word in lowered]
    if not hits:
        return None
    return max(hits, key=lambda w: (len(w), w))


def contains_common_password(
    candidate: str,
    dictionary: frozenset[str] = COMMON_PASSWORDS,
) -> bool:
    return find_common_password(candidate, dictionary) is not None
