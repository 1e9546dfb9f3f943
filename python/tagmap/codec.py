"""Decoders and encoders that plug a Bimap into JSON and YAML handling.

A decoder takes the bare string token a parser produced and returns the
registered value; an encoder turns a value back into its label, which
``json.dumps`` writes as a JSON string and PyYAML as a plain scalar.
"""

from __future__ import annotations

from typing import Any, Callable

import yaml

from .bimap import Bimap


class DecodeError(ValueError):
    """A token could not be decoded into a registered value."""


def decoder(bimap: Bimap) -> Callable[[Any], Any]:
    """Return a validating decoder for ``bimap``.

    Unknown labels raise DecodeError listing every valid label in
    registration order.
    """
    def decode(token: Any) -> Any:
        if not isinstance(token, str):
            raise DecodeError(
                f"Decode failed; expected a string, got {type(token).__name__}"
            )
        if token not in bimap.table:
            raise DecodeError(_failure_message(bimap, token))
        return bimap.from_string(token)
    return decode


def encoder(bimap: Bimap) -> Callable[[Any], str]:
    """Return an encoder producing the label of a value."""
    def encode(value: Any) -> str:
        return bimap.to_string(value)
    return encode


def decode_field(bimap: Bimap, data: dict, key: str) -> Any:
    """Decode ``data[key]``, prefixing failures with the field name."""
    if key not in data:
        raise DecodeError(f"Field '{key}': missing")
    try:
        return decoder(bimap)(data[key])
    except DecodeError as exc:
        raise DecodeError(f"Field '{key}': {exc}") from exc


def json_default(*bimaps: Bimap) -> Callable[[Any], str]:
    """Build a ``default=`` hook for ``json.dumps``.

    Values registered in any of ``bimaps`` are written as their labels.
    """
    def default(obj: Any) -> str:
        for bimap in bimaps:
            if obj in bimap:
                return bimap.to_string(obj)
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
    return default


def register_yaml(
    bimap: Bimap,
    cls: type,
    dumper: type = yaml.SafeDumper,
    loader: type = yaml.SafeLoader,
    tag: str | None = None,
) -> None:
    """Teach PyYAML to write instances of ``cls`` as their labels.

    With ``tag`` set, values are written as tagged scalars and a constructor
    is registered on ``loader`` that decodes them back. Without it they are
    written as plain strings and come back as strings.
    """
    encode = encoder(bimap)
    decode = decoder(bimap)
    scalar_tag = tag or "tag:yaml.org,2002:str"

    def represent(dumper_: yaml.BaseDumper, value: Any) -> yaml.ScalarNode:
        return dumper_.represent_scalar(scalar_tag, encode(value))

    dumper.add_representer(cls, represent)

    if tag is not None:
        def construct(loader_: yaml.BaseLoader, node: yaml.Node) -> Any:
            token = loader_.construct_scalar(node)
            try:
                return decode(token)
            except DecodeError as exc:
                raise yaml.constructor.ConstructorError(
                    None, None, str(exc), node.start_mark
                ) from exc

        loader.add_constructor(tag, construct)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _failure_message(bimap: Bimap, token: str) -> str:
    expected = "; ".join(bimap.labels())
    return f"Decode failed; {token} is not a valid value. Expected one of: {expected}"
