"""
Location filter engine.

Filters are expressed as ``FilterBag`` instances: ordered sequences of
``(lookup, value)`` pairs that keep every value of a repeated lookup, so a
match-any bag holding several ``categories`` pairs ORs all of them together.
"""
from __future__ import annotations

import logging
import operator
from collections.abc import Mapping
from contextlib import contextmanager
from functools import reduce
from typing import Iterable, Iterator, List, Optional, Tuple

from django.core.exceptions import FieldDoesNotExist, FieldError, ValidationError
from django.db import InterfaceError, OperationalError, transaction
from django.db.models import BooleanField, Q, QuerySet

from .exceptions import DependencyUnavailable, InvalidFilterValue, UnsupportedFilterKey
from .models import Location

logger = logging.getLogger(__name__)

VISIBILITY_KEY = "show_in_locator"
LATITUDE_KEY = "latitude"
CATEGORY_KEY = "categories"

_QUERY_BOOLEANS = {"true": True, "false": False}


def _targets(key: str, field: str) -> bool:
    return key == field or key == f"{field}__exact"


def _query_value(key: str, raw: str):
    """Turn ``true``/``false`` into booleans only for boolean fields of Location."""
    name, _, lookup = key.partition("__")
    if lookup not in ("", "exact"):
        return raw
    try:
        field = Location._meta.get_field(name)
    except FieldDoesNotExist:
        return raw
    if isinstance(field, BooleanField):
        return _QUERY_BOOLEANS.get(raw.lower(), raw)
    return raw


class FilterBag:
    """Multi-valued collection of ``(lookup, value)`` filter pairs."""

    def __init__(self, pairs: Optional[Iterable[Tuple[str, object]]] = None):
        self._pairs: List[Tuple[str, object]] = []
        for key, value in pairs or ():
            self.add(key, value)

    @classmethod
    def of(cls, **lookups) -> "FilterBag":
        return cls(lookups.items())

    @classmethod
    def coerce(cls, bag) -> "FilterBag":
        """
        Build a bag from None, another bag, an iterable of pairs, or a mapping.
        Mapping values that are lists, tuples or sets expand to one pair each.
        """
        if bag is None:
            return cls()
        if isinstance(bag, FilterBag):
            return cls(bag)
        if isinstance(bag, Mapping):
            out = cls()
            for key, value in bag.items():
                if isinstance(value, (list, tuple, set, frozenset)):
                    out.extend(key, value)
                else:
                    out.add(key, value)
            return out
        return cls(bag)

    @classmethod
    def from_query(cls, raw_values: Iterable[str]) -> "FilterBag":
        """Parse ``lookup:value`` strings as sent in repeated query params."""
        out = cls()
        for raw in raw_values:
            key, sep, value = raw.partition(":")
            key = key.strip()
            if not sep or not key:
                raise UnsupportedFilterKey(raw, f"Malformed filter {raw!r}, expected 'lookup:value'")
            out.add(key, _query_value(key, value.strip()))
        return out

    def add(self, key: str, value) -> "FilterBag":
        self._pairs.append((key, value))
        return self

    def extend(self, key: str, values: Iterable) -> "FilterBag":
        for value in values:
            self.add(key, value)
        return self

    def without(self, field: str) -> "FilterBag":
        return FilterBag((k, v) for k, v in self._pairs if not _targets(k, field))

    def values(self, key: str) -> list:
        return [v for k, v in self._pairs if k == key]

    def keys(self) -> list:
        seen = []
        for k, _ in self._pairs:
            if k not in seen:
                seen.append(k)
        return seen

    def __iter__(self) -> Iterator[Tuple[str, object]]:
        return iter(self._pairs)

    def __len__(self):
        return len(self._pairs)

    def __bool__(self):
        return bool(self._pairs)

    def __eq__(self, other):
        if not isinstance(other, FilterBag):
            return NotImplemented
        return self._pairs == other._pairs

    def __repr__(self):
        return f"FilterBag({self._pairs!r})"


def _apply(qs: QuerySet, method: str, key: str, value) -> QuerySet:
    try:
        return getattr(qs, method)(**{key: value})
    except FieldError as exc:
        raise UnsupportedFilterKey(key) from exc
    except (ValidationError, ValueError, TypeError) as exc:
        raise InvalidFilterValue(key, value) from exc


def get_locations(required=None, excluded=None, match_any=None, queryset: Optional[QuerySet] = None) -> QuerySet:
    """
    Return the locations matching all ``required`` pairs, none of the
    ``excluded`` pairs and, when ``match_any`` is non-empty, at least one of
    its pairs.

    Hidden locations (``show_in_locator`` false) and locations without
    coordinates (``latitude`` 0) are always left out; caller pairs for those
    two lookups are replaced.
    """
    required = FilterBag.coerce(required).without(VISIBILITY_KEY).add(VISIBILITY_KEY, True)
    excluded = FilterBag.coerce(excluded).without(LATITUDE_KEY).add(LATITUDE_KEY, 0)
    match_any = FilterBag.coerce(match_any)

    logger.debug("get_locations required=%r excluded=%r match_any=%r", required, excluded, match_any)

    qs = queryset if queryset is not None else Location.objects.all()
    for key, value in excluded:
        qs = _apply(qs, "exclude", key, value)
    for key, value in required:
        qs = _apply(qs, "filter", key, value)

    if match_any:
        conditions = []
        for key, value in match_any:
            # validate each pair on its own so errors name the offending lookup
            _apply(Location.objects.none(), "filter", key, value)
            conditions.append(Q(**{key: value}))
        qs = qs.filter(reduce(operator.or_, conditions))

    # lookups through categories join one row per matching category
    return qs.distinct()


@contextmanager
def read_snapshot(using: Optional[str] = None):
    """
    Run the enclosed reads inside one transaction so a request sees a
    consistent set of locations. Connection failures surface as
    ``DependencyUnavailable``; nothing is retried.
    """
    try:
        with transaction.atomic(using=using):
            yield
    except (OperationalError, InterfaceError) as exc:
        logger.error("Location store unavailable: %s", exc)
        raise DependencyUnavailable(str(exc)) from exc
