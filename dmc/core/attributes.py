"""Attribute map <-> DMC wire record transformations.

DMC exchanges custom attributes as a list of ``{"name", "value"}`` records.
Callers of this package only ever see flat mappings.

Usage:
    # Caller -> wire
    records = encode({"firstName": "Alice", "score": 3})

    # Wire -> caller
    profile = decode([{"name": "user.firstName", "value": "Alice"}])
    profile["firstName"]
"""
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping, Optional

AttributeMap = Dict[str, Any]
AttributeRecord = List[Dict[str, Any]]


def encode(attributes: Optional[Mapping[str, Any]]) -> AttributeRecord:
    """Convert an attribute map to wire records.

    Args:
        attributes: Mapping of attribute name to scalar value

    Returns:
        One ``{"name", "value"}`` record per entry, values untouched
    """
    if not attributes:
        return []
    return [{"name": name, "value": value} for name, value in attributes.items()]


def _strip_namespace(name: str) -> str:
    # "user.firstName" -> "firstName"; "a.b.c" -> "b". A leading dot is kept.
    if name.find(".") > 0:
        return name.split(".")[1]
    return name


def decode(records: Optional[Iterable[Mapping[str, Any]]]) -> AttributeMap:
    """Convert wire records to an attribute map.

    Names namespaced by the platform (``"group.name"``) keep only the
    segment after the first dot. Names with several dots keep only the
    second segment.

    Args:
        records: Wire records, or None

    Returns:
        Attribute map (empty when records is None)
    """
    result: AttributeMap = {}
    if records is None:
        return result
    if isinstance(records, Mapping):
        records = [records]
    for record in records:
        result[_strip_namespace(str(record.get("name")))] = record.get("value")
    return result


def attribute_records(response: Any) -> Optional[Any]:
    """Return the attribute records carried by a response, or None.

    Accepts the full response (``{"attributes": [...]}``) as well as the
    shapes left after zeep unwraps it: the bare record list or one record.
    """
    if response is None:
        return None
    if isinstance(response, Mapping):
        if "attributes" in response:
            return response["attributes"]
        if "name" in response:
            return [response]
        return None
    return response


def decode_response(response: Any) -> AttributeMap:
    """Decode the attribute records of a DMC response."""
    return decode(attribute_records(response))


def as_list(value: Any) -> List[Any]:
    """Normalize a single value or sequence to a list.

    SOAP responses collapse one-element arrays to the bare element, and
    callers may pass either form.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def group_ids_from_memberships(memberships: Any) -> List[Any]:
    """Extract group ids from a membership list, skipping records without one."""
    return [
        membership["groupId"]
        for membership in as_list(memberships)
        if isinstance(membership, Mapping) and membership.get("groupId") is not None
    ]
