# -*- coding: utf-8 -*-
"""Named CRS lookup.

The registry is an immutable mapping from CRS identifier to ``pyproj.CRS``
built once at import time. Only identifiers present in a registry can be
transformed; any other EPSG string is accepted but left unprojected.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from collections.abc import Mapping
from dataclasses import dataclass
from re import Pattern
from types import MappingProxyType

from pyproj import CRS
from pyproj import Transformer

from laporinfra_lib.constants import CUSTOM_CRS_SELECTION
from laporinfra_lib.constants import WGS84
from laporinfra_lib.enums import BuiltinCRS

# Trailing EPSG code: "32749", "EPSG:32749", "EPSG::32749", "epsg 32749"
EPSG_CODE_PATTERN: Pattern[str] = re.compile(r"(\d{4,5})$")


def normalize_crs_id(value: str | None) -> str:
    """Normalize user-entered CRS text to an ``EPSG:<code>`` identifier.

    Args:
        value: Free text from the CRS selector (or None)

    Returns:
        ``EPSG:<code>`` when the text ends with a 4-5 digit code,
        ``EPSG:4326`` for blank input, otherwise the trimmed text
    """
    if value is None:
        return WGS84
    text = str(value).strip()
    if not text:
        return WGS84
    if match := EPSG_CODE_PATTERN.search(text):
        return f"EPSG:{match.group(1)}"
    return text


def same_crs(a: str | None, b: str | None) -> bool:
    return normalize_crs_id(a).upper() == normalize_crs_id(b).upper()


def resolve_crs(
    selection: str | None,
    custom: str | None = None,
    suggested: str | None = None,
) -> str:
    """Pick the source CRS of an import.

    An explicit selection always wins over the heuristic suggestion.

    Args:
        selection: A built-in identifier, ``"custom"`` or None (not chosen)
        custom: Free-text EPSG code used with ``"custom"``
        suggested: Result of ``guess_crs`` (or None)

    Returns:
        Normalized CRS identifier
    """
    if selection is not None and selection.strip().lower() == CUSTOM_CRS_SELECTION:
        return normalize_crs_id(custom)
    if selection is not None and selection.strip():
        return normalize_crs_id(selection)
    return normalize_crs_id(suggested)


@dataclass(frozen=True)
class CRSRegistry:
    """Immutable mapping of CRS identifier to projection definition."""

    definitions: Mapping[str, CRS]

    @classmethod
    def from_codes(cls, codes: Iterable[str]) -> CRSRegistry:
        return cls(
            definitions=MappingProxyType(
                {normalize_crs_id(code): CRS.from_user_input(code) for code in codes}
            )
        )

    def __contains__(self, crs_id: object) -> bool:
        if not isinstance(crs_id, str):
            return False
        return self._key(crs_id) is not None

    def _key(self, crs_id: str) -> str | None:
        wanted = normalize_crs_id(crs_id).upper()
        for key in self.definitions:
            if key.upper() == wanted:
                return key
        return None

    def get(self, crs_id: str) -> CRS | None:
        key = self._key(crs_id)
        return self.definitions[key] if key is not None else None

    def can_transform(self, from_crs: str, to_crs: str) -> bool:
        """True if coordinates can be converted between the two CRSs."""
        return same_crs(from_crs, to_crs) or (from_crs in self and to_crs in self)

    def transformer(self, from_crs: str, to_crs: str) -> Transformer:
        """Build a transformer between two registered CRSs.

        Raises:
            KeyError: If either CRS is not registered
        """
        source = self.get(from_crs)
        target = self.get(to_crs)
        if source is None or target is None:
            raise KeyError(f"Unsupported CRS pair: {from_crs} => {to_crs}")
        return Transformer.from_crs(source, target, always_xy=True)


#: Registry of the built-in projections, constructed once
BUILTIN_CRS = CRSRegistry.from_codes(BuiltinCRS.values())
