"""Builder and Bimap -- ordered bidirectional label <-> value mapping.

A Bimap is assembled through a Builder::

    class Count(Enum):
        ONE = 1
        TWO = 2
        THREE = 3

    def match(c: Count) -> str:
        if c is Count.ONE:
            return "One"
        if c is Count.TWO:
            return "Two"
        return "Three"

    counts = (
        Builder.init(match)
        .variant("One", Count.ONE)
        .variant("Two", Count.TWO)
        .variant("Three", Count.THREE)
        .build()
    )

``build()`` refuses to produce a Bimap unless every member of the variant set
was registered exactly once under the label the matcher gives it.
"""

from __future__ import annotations

import functools
import logging
from enum import Enum
from typing import Any, Callable, Iterable, Iterator

from .table import OrderedTable
from .types import Ordering

logger = logging.getLogger(__name__)

_BUILD_TOKEN = object()


class IncompleteBuilderError(ValueError):
    """Raised by build() when the registrations do not cover the variant set."""


class DuplicateLabelError(ValueError):
    """Raised by build() when a label or a value was registered twice."""


class Builder:
    """Accumulates (label, value) registrations. Each call returns a new Builder."""

    __slots__ = ("_matcher", "_members", "_table", "_registered")

    def __init__(
        self,
        matcher: Callable[[Any], str],
        members: tuple[Any, ...] | None,
        table: OrderedTable,
        registered: tuple[tuple[str, Any], ...],
    ) -> None:
        self._matcher = matcher
        self._members = members
        self._table = table
        self._registered = registered

    @staticmethod
    def init(
        matcher: Callable[[Any], str],
        members: type[Enum] | Iterable[Any] | None = None,
    ) -> Builder:
        """Start a builder.

        ``members`` is the full variant set: an Enum subclass or an iterable
        of values. When omitted, the Enum class of the registered values is
        used.
        """
        if not callable(matcher):
            raise TypeError(f"matcher must be callable, got {type(matcher).__name__}")
        return Builder(matcher, _member_tuple(members), OrderedTable.empty(), ())

    def variant(self, label: str, value: Any) -> Builder:
        """Register ``value`` under ``label``."""
        if not isinstance(label, str):
            raise TypeError(f"label must be a str, got {type(label).__name__}")
        return Builder(
            self._matcher,
            self._members,
            self._table.insert(label, value),
            self._registered + ((label, value),),
        )

    def build(self) -> Bimap:
        """Finalize into an immutable Bimap.

        Raises IncompleteBuilderError, DuplicateLabelError or ValueError
        before any Bimap is produced.
        """
        self._check_duplicates()
        members = self._resolve_members()
        self._check_coverage(members)
        self._check_matcher()
        logger.debug("built bimap with %d variants", len(self._table))
        return Bimap(self._matcher, self._table, _BUILD_TOKEN)

    # -----------------------------------------------------------------------
    # Construction checks
    # -----------------------------------------------------------------------

    def _check_duplicates(self) -> None:
        seen_labels: set[str] = set()
        seen_values: list[Any] = []
        for label, value in self._registered:
            if label in seen_labels:
                raise DuplicateLabelError(f"Label '{label}' registered more than once")
            if value in seen_values:
                raise DuplicateLabelError(f"Value {value!r} registered more than once")
            seen_labels.add(label)
            seen_values.append(value)

    def _resolve_members(self) -> tuple[Any, ...]:
        if self._members is not None:
            return self._members
        values = [value for _, value in self._registered]
        if not values:
            raise IncompleteBuilderError(
                "No variants registered and no variant set given"
            )
        classes = {type(v) for v in values}
        if len(classes) != 1 or not isinstance(values[0], Enum):
            raise IncompleteBuilderError(
                "Cannot determine the variant set; pass members= to Builder.init"
            )
        return tuple(classes.pop())

    def _check_coverage(self, members: tuple[Any, ...]) -> None:
        registered = [value for _, value in self._registered]
        missing = [m for m in members if m not in registered]
        if missing:
            names = ", ".join(repr(m) for m in missing)
            raise IncompleteBuilderError(f"No label registered for: {names}")
        extra = [v for v in registered if v not in members]
        if extra:
            names = ", ".join(repr(v) for v in extra)
            raise IncompleteBuilderError(f"Values outside the variant set: {names}")

    def _check_matcher(self) -> None:
        for label, value in self._registered:
            try:
                matched = self._matcher(value)
            except Exception as exc:
                raise IncompleteBuilderError(
                    f"Matcher does not handle {value!r}: {exc}"
                ) from exc
            if matched != label:
                raise ValueError(
                    f"Matcher maps {value!r} to '{matched}', registered as '{label}'"
                )


class Bimap:
    """Immutable ordered mapping between string labels and values."""

    __slots__ = ("_matcher", "_table")

    def __init__(
        self,
        matcher: Callable[[Any], str],
        table: OrderedTable,
        _token: object = None,
    ) -> None:
        if _token is not _BUILD_TOKEN:
            raise TypeError("Bimap instances are created by Builder.build()")
        object.__setattr__(self, "_matcher", matcher)
        object.__setattr__(self, "_table", table)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Bimap is immutable; cannot set '{name}'")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Bimap is immutable; cannot delete '{name}'")

    @staticmethod
    def from_enum(
        enum_cls: type[Enum],
        label: Callable[[Any], str] | None = None,
    ) -> Bimap:
        """Build a Bimap over every member of ``enum_cls`` in definition order.

        Labels default to the member value when it is a string, otherwise the
        member name.
        """
        label = label or _default_label
        builder = Builder.init(label, enum_cls)
        for member in enum_cls:
            builder = builder.variant(label(member), member)
        return builder.build()

    @staticmethod
    def from_pairs(
        pairs: Iterable[tuple[str, Any]],
        members: type[Enum] | Iterable[Any] | None = None,
    ) -> Bimap:
        """Build a Bimap from ordered (label, value) pairs."""
        pairs = list(pairs)
        reverse = [(value, label) for label, value in pairs]

        def match(value: Any) -> str:
            for candidate, label in reverse:
                if candidate == value:
                    return label
            raise KeyError(value)

        builder = Builder.init(match, members)
        for label, value in pairs:
            builder = builder.variant(label, value)
        return builder.build()

    @property
    def table(self) -> OrderedTable:
        return self._table

    def to_string(self, value: Any) -> str:
        """Label for ``value``."""
        return self._matcher(value)

    def from_string(self, label: str) -> Any | None:
        """Value registered under ``label``, or None."""
        return self._table.get(label)

    def values(self) -> list[tuple[str, Any]]:
        """All (label, value) pairs in registration order."""
        return self._table.to_list()

    def labels(self) -> list[str]:
        return self._table.keys()

    def to_index(self, value: Any) -> int:
        """Zero-based registration position of ``value``.

        A value that was never registered yields ``len(self)``.
        """
        index = 0
        for candidate in self._table.values():
            if candidate == value:
                return index
            index += 1
        logger.warning("%r is not registered; index falls back to %d", value, index)
        return index

    def from_index(self, index: int) -> Any | None:
        """Value at registration position ``index``, or None."""
        entry = self._table.at(index)
        if entry is None:
            return None
        return entry[1]

    def compare(self, a: Any, b: Any) -> Ordering:
        """Order two values by registration position."""
        return Ordering.of(self.to_index(a), self.to_index(b))

    def sort_key(self, value: Any) -> int:
        return self.to_index(value)

    def sorted(self, values: Iterable[Any], reverse: bool = False) -> list[Any]:
        """Sort ``values`` into registration order."""
        return sorted(values, key=functools.cmp_to_key(self.compare), reverse=reverse)

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._table.values())

    def __contains__(self, value: object) -> bool:
        return value in self._table.values()

    def __repr__(self) -> str:
        labels = ", ".join(self._table.keys())
        return f"Bimap({labels})"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _member_tuple(members: type[Enum] | Iterable[Any] | None) -> tuple[Any, ...] | None:
    if members is None:
        return None
    return tuple(members)


def _default_label(member: Enum) -> str:
    if isinstance(member.value, str):
        return member.value
    return member.name
