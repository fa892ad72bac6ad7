"""
================================================================================
Session Store
================================================================================

Key/value storage for data a test wants to carry between steps, with
`${key}` template interpolation.

The store publishes an immutable snapshot and replaces it wholesale on
every write, so a snapshot handed out earlier never changes underneath
its reader.

Usage:
    store.put("channel_name", "demo-channel")
    store.interpolate("/channels/${channel_name}/settings")
    # -> "/channels/demo-channel/settings"

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple, Type, TypeVar, cast

from loguru import logger

from .exceptions import InterpolationDepthExceeded, InterpolationKeyNotFound, KeyNotFound


T = TypeVar("T")

# ${identifier}
INTERPOLATE_SINGLE = re.compile(r"\$\{(\w+)\}")

# Deepest chain of values expanding into further placeholders
DEFAULT_MAX_DEPTH = 100


class Store:
    """Copy-on-write key/value snapshot owned by one Session."""

    def __init__(self) -> None:
        self._snapshot: Mapping[str, Any] = MappingProxyType({})

    @property
    def snapshot(self) -> Mapping[str, Any]:
        """The current read-only mapping."""
        return self._snapshot

    def put(self, key: str, value: Any) -> None:
        """
        Insert a value, publishing a new snapshot.

        Raises:
            ValueError: If `key` is None or empty
        """
        if not key:
            raise ValueError("Key cannot be None or empty")
        updated: Dict[str, Any] = dict(self._snapshot)
        updated[key] = value
        self._snapshot = MappingProxyType(updated)
        logger.trace(f"Store put: {key}")

    def get(self, key: str) -> Any:
        """
        Look up a value.

        Raises:
            KeyNotFound: If `key` is None, empty or absent
        """
        if not key or key not in self._snapshot:
            raise KeyNotFound(key)
        return self._snapshot[key]

    def get_typed(self, key: str, type_: Type[T]) -> T:
        """Look up a value the caller asserts is a `type_`; not checked."""
        return cast(T, self.get(key))

    def get_list(self, key: str) -> List[Any]:
        """Copy of a stored list."""
        return list(self.get(key))

    def get_map(self, key: str) -> Dict[Any, Any]:
        """Copy of a stored mapping."""
        return dict(self.get(key))

    def interpolate(self, template: str, max_depth: int = DEFAULT_MAX_DEPTH) -> str:
        """
        Replace `${key}` placeholders with stored values.

        Every placeholder becomes `str(get(key))`. Values that themselves
        contain placeholders are expanded in turn, so the limit applies to
        how deeply values nest, not to how many placeholders the template has.

        Args:
            template: Text containing placeholders
            max_depth: Deepest allowed chain of nested expansions

        Returns:
            The fully interpolated string

        Raises:
            InterpolationKeyNotFound: If a placeholder has no stored value
            InterpolationDepthExceeded: If a value refers back to a key that
                is already being expanded, or nesting exceeds `max_depth`
        """
        return self._expand(template, template, (), max_depth)

    def _expand(self, text: str, template: str, chain: Tuple[str, ...], max_depth: int) -> str:
        def substitute(match: "re.Match[str]") -> str:
            placeholder, key = match.group(0), match.group(1)
            if key in chain or len(chain) >= max_depth:
                raise InterpolationDepthExceeded(template, max_depth, chain + (key,))
            try:
                value = self.get(key)
            except KeyNotFound as e:
                raise InterpolationKeyNotFound(placeholder, key) from e
            return self._expand(str(value), template, chain + (key,), max_depth)

        return INTERPOLATE_SINGLE.sub(substitute, text)

    def __contains__(self, key: object) -> bool:
        return key in self._snapshot

    def __len__(self) -> int:
        return len(self._snapshot)

    def __repr__(self) -> str:
        return f"Store(keys={sorted(self._snapshot)})"


__all__ = [
    "Store",
    "INTERPOLATE_SINGLE",
]
