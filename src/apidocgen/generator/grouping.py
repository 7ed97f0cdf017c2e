"""Bucket endpoint records by the first segment of their relative path."""

from __future__ import annotations

from apidocgen.models import EndpointRecord, Group


def group_key(record: EndpointRecord, lowercase: bool = False) -> str:
    """Return the group a record belongs to (``Users/{id}`` -> ``Users``)."""
    key = record.first_segment
    return key.lower() if lowercase else key


def group_records(records: list[EndpointRecord], lowercase: bool = False) -> list[Group]:
    """Group *records* by :func:`group_key`.

    Groups appear in order of first occurrence and each keeps its records in
    input order, so two records with the same first segment always land in
    the same group.
    """
    groups: dict[str, Group] = {}
    for record in records:
        key = group_key(record, lowercase)
        if key not in groups:
            groups[key] = Group(key=key)
        groups[key].records.append(record)
    return list(groups.values())
