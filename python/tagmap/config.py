"""Label sets declared in YAML.

Two document shapes are accepted. A mapping of member name to label::

    one: One
    two: Two
    three: Three

or a list of entries::

    - member: one
      label: One
    - member: two
      label: Two

Document order is registration order. Keys and labels are read as plain
strings, so words like ``YES`` or ``null`` are not turned into booleans or
None. A repeated mapping key is an error.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

import yaml

from .bimap import Bimap, Builder


class _LabelLoader(yaml.BaseLoader):
    """BaseLoader that rejects repeated mapping keys."""

    def construct_mapping(self, node, deep=False):
        seen: set = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if not isinstance(key, str):
                continue
            if key in seen:
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping", node.start_mark,
                    f"found duplicate key '{key}'", key_node.start_mark,
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def load_labels(text: str) -> list[tuple[str, str]]:
    """Parse a label document into ordered (member_name, label) pairs."""
    try:
        data = yaml.load(text, Loader=_LabelLoader)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid label YAML: {exc}") from exc

    if isinstance(data, dict):
        return [(str(k), _label_str(v, k)) for k, v in data.items()]
    if isinstance(data, list):
        return [_parse_entry(entry, i) for i, entry in enumerate(data)]
    raise ValueError(
        f"Label YAML must be a mapping or a list, got {type(data).__name__}"
    )


def bimap_from_yaml(text: str, enum_cls: type[Enum]) -> Bimap:
    """Build a Bimap over ``enum_cls`` from a label document.

    Every member must appear; the normal build() checks apply.
    """
    pairs = [(label, _resolve_member(enum_cls, name)) for name, label in load_labels(text)]
    by_member = {member: label for label, member in pairs}

    def match(member: Enum) -> str:
        return by_member[member]

    builder = Builder.init(match, enum_cls)
    for label, member in pairs:
        builder = builder.variant(label, member)
    return builder.build()


def load_bimap(path: Path | str, enum_cls: type[Enum]) -> Bimap:
    """Read a label document from ``path`` and build a Bimap."""
    text = Path(path).read_text(encoding="utf-8")
    return bimap_from_yaml(text, enum_cls)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _parse_entry(entry: object, position: int) -> tuple[str, str]:
    if not isinstance(entry, dict) or "member" not in entry or "label" not in entry:
        raise ValueError(f"Entry {position} must have 'member' and 'label' keys")
    return str(entry["member"]), _label_str(entry["label"], entry["member"])


def _label_str(label: object, member: object) -> str:
    if not isinstance(label, str):
        raise ValueError(f"Label for '{member}' must be a string, got {label!r}")
    return label


def _resolve_member(enum_cls: type[Enum], name: str) -> Enum:
    """Look up a member by name, falling back to a case-insensitive match."""
    try:
        return enum_cls[name]
    except KeyError:
        pass
    for member_name, member in enum_cls.__members__.items():
        if member_name.lower() == name.lower():
            return member
    raise ValueError(f"{enum_cls.__name__} has no member '{name}'")
