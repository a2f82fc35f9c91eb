"""
Identifier Resolver.

Turns the compact short names used by the network table into canonical
route names and regions, as declared by the lookup table.

Resolution Strategy:
    1. Short name present in the lookup - known, canonical name and region
       taken from the lookup row.
    2. Anything else - unknown, no canonical name, region "Unknown".

The lookup is immutable once loaded, so every distinct short name is
resolved exactly once and cached.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable

from ..config import UNKNOWN_REGION
from .types import LookupEntry, ResolvedIdentity

logger = logging.getLogger(__name__)


class IdentifierResolver:
    """
    Resolves short names against the lookup table.

    Keeps the bidirectional canonical/short name maps plus the region of
    every canonical route.

    Example:
        ```python
        resolver = IdentifierResolver(lookup_entries)
        identity = resolver.resolve("RTA")
        identity.known, identity.region
        ```
    """

    def __init__(self, entries: Iterable[LookupEntry]):
        self._short_to_canonical: Dict[str, str] = {}
        self._canonical_to_short: Dict[str, str] = {}
        self._canonical_to_region: Dict[str, str] = {}
        self._cache: Dict[str, ResolvedIdentity] = {}

        skipped = 0
        for entry in entries:
            if not entry.is_usable:
                skipped += 1
                continue
            self._canonical_to_short[entry.canonical_name] = entry.short_name
            self._canonical_to_region[entry.canonical_name] = entry.region or UNKNOWN_REGION
            self._short_to_canonical[entry.short_name] = entry.canonical_name

        if skipped:
            logger.debug(f"Ignored {skipped} lookup rows without route or short name")

    def resolve(self, short_name: str) -> ResolvedIdentity:
        """Resolve a short name, memoized per distinct input."""
        cached = self._cache.get(short_name)
        if cached is not None:
            return cached

        canonical = self._short_to_canonical.get(short_name)
        if canonical is None:
            identity = ResolvedIdentity(short_name=short_name)
        else:
            identity = ResolvedIdentity(
                short_name=short_name,
                canonical_name=canonical,
                region=self._canonical_to_region[canonical],
                known=True,
            )
        self._cache[short_name] = identity
        return identity

    def is_known(self, short_name: str) -> bool:
        return self.resolve(short_name).known

    def short_name_for(self, canonical_name: str) -> str | None:
        """Reverse lookup: canonical route name to its short name."""
        return self._canonical_to_short.get(canonical_name)

    @property
    def known_count(self) -> int:
        """Number of short names the lookup declares."""
        return len(self._short_to_canonical)

    @property
    def resolved_count(self) -> int:
        """Number of distinct short names resolved so far."""
        return len(self._cache)
