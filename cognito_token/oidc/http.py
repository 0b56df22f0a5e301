"""Per-call HTTP client handling."""

from collections.abc import Iterator
from contextlib import contextmanager

import httpx


@contextmanager
def open_client(client: httpx.Client | None, timeout: float) -> Iterator[httpx.Client]:
    """Yield the caller's client, or a fresh one closed on exit."""
    if client is not None:
        yield client
        return
    with httpx.Client(timeout=timeout, follow_redirects=True) as owned:
        yield owned
