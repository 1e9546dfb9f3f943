"""tagmap -- ordered bidirectional mapping between string labels and enum values."""

from .table import OrderedTable
from .types import Ordering
from .bimap import Bimap, Builder, IncompleteBuilderError, DuplicateLabelError
from .codec import DecodeError, decoder, encoder, decode_field, json_default, register_yaml
from .config import load_labels, bimap_from_yaml, load_bimap

__all__ = [
    "OrderedTable",
    "Ordering",
    "Bimap",
    "Builder",
    "IncompleteBuilderError",
    "DuplicateLabelError",
    "DecodeError",
    "decoder",
    "encoder",
    "decode_field",
    "json_default",
    "register_yaml",
    "load_labels",
    "bimap_from_yaml",
    "load_bimap",
]
