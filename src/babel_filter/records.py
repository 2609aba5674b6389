"""
records.py - Codecs for the two line-delimited JSON record shapes.

Filter file line (node list):
  {"id": "NCBIGene:672", "name": "BRCA1", "category": ["biolink:Gene"],
   "equivalent_identifiers": ["HGNC:1100"]}

Babel file line (compendium node):
  {"curie": "NCBIGene:672", "names": ["BRCA1"], "types": ["Gene"],
   "preferred_name": "BRCA1", "shortest_name_length": 5, "taxa": []}

Decoding is best effort: anything that is not a JSON object with the required
keys raises DecodeError, and callers report the line and move on. List fields
are required (empty is fine, missing or null is not); only preferred_name,
shortest_name_length and equivalent_identifiers may be absent. Keys not
listed here are ignored when decoding. Matched Babel lines are echoed as raw
text elsewhere, so these classes never need to carry unknown keys.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import orjson


class DecodeError(ValueError):
    """A line could not be decoded into the expected record shape."""


class EncodeError(ValueError):
    """A record could not be serialized to a JSON line."""


@dataclass
class FilterRecord:
    """One node from the filter file."""
    id: str
    name: str
    category: List[str]
    equivalent_identifiers: Optional[List[str]] = None

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'FilterRecord':
        return cls(
            id=_require_str(d, 'id'),
            name=_require_str(d, 'name'),
            category=_str_list(d, 'category'),
            equivalent_identifiers=_optional_str_list(d, 'equivalent_identifiers'),
        )


@dataclass
class BabelRecord:
    """One node from a Babel compendium file."""
    curie: str
    names: List[str]
    types: List[str]
    preferred_name: Optional[str]
    shortest_name_length: Optional[int]
    taxa: List[str]

    def to_dict(self) -> Dict[str, Any]:
        # Key order is the order Babel itself writes
        return {
            'curie': self.curie,
            'names': self.names,
            'types': self.types,
            'preferred_name': self.preferred_name,
            'shortest_name_length': self.shortest_name_length,
            'taxa': self.taxa,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'BabelRecord':
        preferred_name = d.get('preferred_name')
        if preferred_name is not None and not isinstance(preferred_name, str):
            raise DecodeError("field 'preferred_name' must be a string")

        shortest = d.get('shortest_name_length')
        if shortest is not None and (
            isinstance(shortest, bool) or not isinstance(shortest, int) or shortest < 0
        ):
            raise DecodeError("field 'shortest_name_length' must be a non-negative integer")

        return cls(
            curie=_require_str(d, 'curie'),
            names=_str_list(d, 'names'),
            types=_str_list(d, 'types'),
            preferred_name=preferred_name,
            shortest_name_length=shortest,
            taxa=_str_list(d, 'taxa'),
        )


def _load_object(line: str) -> Dict[str, Any]:
    try:
        obj = orjson.loads(line)
    except orjson.JSONDecodeError as e:
        raise DecodeError(f"invalid JSON: {e}") from e
    if not isinstance(obj, dict):
        raise DecodeError(f"expected a JSON object, got {type(obj).__name__}")
    return obj


def _require_str(d: Dict[str, Any], key: str) -> str:
    value = d.get(key)
    if value is None:
        raise DecodeError(f"missing field '{key}'")
    if not isinstance(value, str):
        raise DecodeError(f"field '{key}' must be a string")
    return value


def _str_list(d: Dict[str, Any], key: str) -> List[str]:
    values = _optional_str_list(d, key)
    if values is None:
        raise DecodeError(f"missing field '{key}'")
    return values


def _optional_str_list(d: Dict[str, Any], key: str) -> Optional[List[str]]:
    values = d.get(key)
    if values is None:
        return None
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise DecodeError(f"field '{key}' must be a list of strings")
    return values


def decode_filter_record(line: str) -> FilterRecord:
    """Decode one filter-file line. Raises DecodeError."""
    return FilterRecord.from_dict(_load_object(line))


def decode_babel_record(line: str) -> BabelRecord:
    """Decode one Babel-file line. Raises DecodeError."""
    return BabelRecord.from_dict(_load_object(line))


def encode_babel_record(record: BabelRecord) -> str:
    """Serialize a BabelRecord as one compact JSON line (no newline). Raises EncodeError."""
    try:
        return orjson.dumps(record.to_dict()).decode('utf-8')
    except orjson.JSONEncodeError as e:
        raise EncodeError(f"cannot encode {record.curie!r}: {e}") from e
