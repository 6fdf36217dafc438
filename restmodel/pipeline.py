"""
Attribute admission pipeline

Raw data coming from callers or from the API goes through these steps
before it reaches a model's attribute store:

    extract identifier -> parse -> strip undefined -> strip non-rest keys

Default backfilling (``with_defaults``) is a separate step, run only when
seeding a model from construction data or a fetch response.
"""

import copy
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from .schema import AttributeSchema


class _Undefined:
    """Marker for a value that was explicitly left undefined"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "UNDEFINED"


UNDEFINED = _Undefined()

Parser = Callable[[Dict[str, Any]], Dict[str, Any]]


def has_value(value: Any) -> bool:
    """True for anything usable as an identifier"""
    return value is not None and value is not UNDEFINED and value != ""


def with_defaults(data: Optional[Mapping[str, Any]], defaults: Mapping[str, Any]) -> Dict[str, Any]:
    """Fill in ``defaults`` for keys missing or undefined in ``data``"""
    result = dict(data or {})
    for key, value in defaults.items():
        if result.get(key, UNDEFINED) is UNDEFINED:
            result[key] = copy.deepcopy(value)
    return result


def strip_undefined(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not UNDEFINED}


def strip_non_rest(data: Optional[Mapping[str, Any]], schema: AttributeSchema) -> Optional[Dict[str, Any]]:
    """Drop keys the schema does not recognize. ``None`` passes through"""
    if data is None:
        return None
    return {key: value for key, value in data.items() if schema.recognizes(key)}


def extract_identifier(data: Optional[Mapping[str, Any]], schema: AttributeSchema) -> Any:
    """Identifier carried by ``data``, or UNDEFINED when it carries none"""
    if not data:
        return UNDEFINED
    value = data.get(schema.id_attribute, UNDEFINED)
    return value if has_value(value) else UNDEFINED


def admit(
    data: Optional[Mapping[str, Any]],
    schema: AttributeSchema,
    parse: Optional[Parser] = None,
    strip_undefined_values: bool = True,
    strip_non_rest_keys: bool = True,
) -> Tuple[Any, Dict[str, Any]]:
    """
    Normalize ``data`` for admission into an attribute store

    The identifier is read before anything else so it is never lost to
    ``parse`` or to stripping. Nothing is mutated here; a failing
    ``parse`` therefore leaves the caller's store untouched.

    Args:
        data: Raw attributes
        schema: Schema of the receiving model
        parse: Optional transform applied to the raw data
        strip_undefined_values: Remove keys whose value is UNDEFINED
        strip_non_rest_keys: Remove keys the schema does not recognize

    Returns:
        Tuple of (identifier or UNDEFINED, normalized attributes)
    """
    identifier = extract_identifier(data, schema)
    result = dict(data or {})

    if data is not None and parse is not None:
        result = dict(parse(result) or {})

    if strip_undefined_values:
        result = strip_undefined(result)

    if strip_non_rest_keys:
        result = strip_non_rest(result, schema)

    return identifier, result
