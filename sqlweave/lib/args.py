"""
Argument handling for template expansion.

Turns the caller's argument bag into the lookup table used by the
substitution pass. Records (pydantic models, dataclasses and named tuples)
are converted to mappings by an explicit call to `args_fromRecord`; the
conversion is shallow and keeps field values as they are.
"""

from dataclasses import fields, is_dataclass
from typing import Any, Mapping
from pydantic import BaseModel
from sqlweave.lib.errors import UnsupportedArgsTypeError


def args_fromRecord(record: Any) -> dict[str, Any]:
    """Convert a record-like value to a field name -> value mapping.

    Args:
        record: A pydantic model, dataclass or named tuple instance

    Returns:
        dict of the record's declared fields

    Raises:
        UnsupportedArgsTypeError: If the value is not a supported record
    """
    if isinstance(record, BaseModel):
        return {name: getattr(record, name) for name in type(record).model_fields}
    if is_dataclass(record) and not isinstance(record, type):
        return {f.name: getattr(record, f.name) for f in fields(record)}
    if isinstance(record, tuple) and hasattr(record, "_fields"):
        return dict(record._asdict())
    raise UnsupportedArgsTypeError(f"unsupported args type: {type(record).__name__}")


def lookupTable_build(args: Any, marker: str) -> dict[str, Any]:
    """Build the substitution lookup table.

    Args:
        args: A mapping with string keys, or a record accepted by
            args_fromRecord
        marker: Prefix that marks a template token as a variable reference

    Returns:
        dict keyed by ``marker + name``

    Raises:
        UnsupportedArgsTypeError: On an unsupported args type or a
            non-string mapping key
    """
    source: Mapping[Any, Any]
    if isinstance(args, Mapping):
        source = args
    else:
        source = args_fromRecord(args)

    lookup: dict[str, Any] = {}
    for key, value in source.items():
        if not isinstance(key, str):
            raise UnsupportedArgsTypeError(
                f"args keys must be strings, got {type(key).__name__}"
            )
        lookup[f"{marker}{key}"] = value
    return lookup
