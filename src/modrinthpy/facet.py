"""
Facets: optimized search filters built from a limited set of criteria.

A facet is a single `type:value` criterion. Facets are combined into groups:
every inner list is an OR block, the outer list ANDs the blocks together.

    # projects supporting 1.18.1 OR 1.19.2, AND that are modpacks
    [[Facet.versions("1.18.1"), Facet.versions("1.19.2")],
     [Facet.project_type("modpack")]]

See https://docs.modrinth.com/docs/tutorials/api_search/#facets
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import *

from .exceptions import InvalidArgumentError

__all__ = ["FacetType", "Facet", "FacetGroups", "normalize_facets", "encode_facets"]

_FACET_PATTERN = re.compile(r'^"?(\w+):(.*?)"?$')
_DECODED_PATTERN = re.compile(r'^(\w+):(.*)$', re.DOTALL)


class FacetType(str, Enum):
    """The supported facet types."""
    categories = "categories"
    versions = "versions"
    license = "license"
    project_type = "project_type"

    @classmethod
    def coerce(cls, value: Union["FacetType", str]) -> "FacetType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            expected = ", ".join(t.value for t in cls)
            raise InvalidArgumentError(f"invalid facet type {value!r} (expected one of {expected})") from None


@dataclass(frozen=True)
class Facet:
    """
    A single facet criterion.

    Parameters
    ----------
    type : FacetType | str
        One of `categories` (loader or category), `versions` (game version),
        `license` (license id) or `project_type`.
    value : str
        The value to match. Must be non-empty.

    Raises
    ------
    InvalidArgumentError
        When `type` is unknown or `value` is empty/None.
    """
    type: FacetType
    value: str

    def __post_init__(self):
        object.__setattr__(self, "type", FacetType.coerce(self.type))
        if self.value is None or str(self.value) == "":
            raise InvalidArgumentError("facet value cannot be empty")
        object.__setattr__(self, "value", str(self.value))

    def __str__(self) -> str:
        return f"{self.type.value}:{self.value}"

    def to_query_token(self) -> str:
        """Return the quoted `"type:value"` token used inside the `facets` query parameter."""
        return json.dumps(str(self))

    @classmethod
    def parse(cls, string: str) -> Optional["Facet"]:
        """
        Parse a `type:value` token, optionally wrapped in double quotes.

        Returns None when the string does not describe a valid facet.
        """
        if not isinstance(string, str):
            return None
        string = string.strip()
        pattern = _FACET_PATTERN
        if len(string) >= 2 and string[0] == string[-1] == '"':
            # JSON-quoted token as produced by to_query_token()
            try:
                string = json.loads(string)
            except ValueError:
                return None
            pattern = _DECODED_PATTERN
        match = pattern.match(string)
        if not match:
            return None
        try:
            return cls(match.group(1), match.group(2))
        except InvalidArgumentError:
            return None

    @classmethod
    def categories(cls, *values: str) -> Union["Facet", List["Facet"]]:
        """Create one or more category facets (a single value returns a single Facet)."""
        return cls._create(FacetType.categories, values)

    @classmethod
    def versions(cls, *values: str) -> Union["Facet", List["Facet"]]:
        """Create one or more game version facets."""
        return cls._create(FacetType.versions, values)

    @classmethod
    def license(cls, *values: str) -> Union["Facet", List["Facet"]]:
        """Create one or more license facets."""
        return cls._create(FacetType.license, values)

    @classmethod
    def project_type(cls, *values: str) -> Union["Facet", List["Facet"]]:
        """Create one or more project type facets."""
        return cls._create(FacetType.project_type, values)

    @classmethod
    def _create(cls, facet_type: FacetType, values: Sequence[str]) -> Union["Facet", List["Facet"]]:
        if not values:
            raise InvalidArgumentError("no facet value specified")
        result = [cls(facet_type, value) for value in values]
        return result if len(result) > 1 else result[0]


FacetGroups = List[List[Facet]]


def _coerce_facet(item: Union[Facet, str]) -> Facet:
    if isinstance(item, Facet):
        return item
    if isinstance(item, str):
        facet = Facet.parse(item)
        if facet is None:
            raise InvalidArgumentError(f"cannot parse facet {item!r}")
        return facet
    raise InvalidArgumentError(f"unsupported facet value {item!r}")


def normalize_facets(value: Any) -> FacetGroups:
    """
    Normalize the accepted facet shapes into AND-of-OR groups.

    - None -> []
    - Facet or token string -> [[facet]]
    - flat sequence of facets/strings -> one AND group per element
    - sequence of sequences -> each inner sequence is one OR group
    """
    if value is None:
        return []
    if isinstance(value, (Facet, str)):
        return [[_coerce_facet(value)]]
    groups: FacetGroups = []
    for item in value:
        if isinstance(item, (Facet, str)):
            groups.append([_coerce_facet(item)])
        else:
            group = [_coerce_facet(f) for f in item]
            if group:
                groups.append(group)
    return groups


def encode_facets(groups: FacetGroups) -> str:
    """Encode groups as the JSON array-of-arrays expected by the search endpoint."""
    return json.dumps([[str(f) for f in group] for group in groups], separators=(",", ":"))
