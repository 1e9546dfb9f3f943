"""Tests for tagmap.codec -- decoders, encoders, JSON and YAML hooks."""

import json
from enum import Enum

import pytest
import yaml

from tagmap.bimap import Builder
from tagmap.codec import (
    DecodeError,
    decode_field,
    decoder,
    encoder,
    json_default,
    register_yaml,
)


class Count(Enum):
    ONE = 1
    TWO = 2
    THREE = 3


class Shape(Enum):
    SQUARE = "square"
    CIRCLE = "circle"


COUNTS = (
    Builder.init(lambda c: c.name.title())
    .variant("One", Count.ONE)
    .variant("Two", Count.TWO)
    .variant("Three", Count.THREE)
    .build()
)

SHAPES = (
    Builder.init(lambda s: s.value)
    .variant("square", Shape.SQUARE)
    .variant("circle", Shape.CIRCLE)
    .build()
)


class TestDecoder:
    def test_decode_known_label(self):
        assert decoder(COUNTS)("Two") is Count.TWO

    def test_decode_failure_message(self):
        with pytest.raises(DecodeError) as excinfo:
            decoder(COUNTS)("Six")
        assert str(excinfo.value) == (
            "Decode failed; Six is not a valid value. Expected one of: One; Two; Three"
        )

    def test_decode_error_is_value_error(self):
        with pytest.raises(ValueError):
            decoder(COUNTS)("one")

    def test_decode_non_string(self):
        with pytest.raises(DecodeError, match="expected a string, got int"):
            decoder(COUNTS)(2)

    def test_decode_from_parsed_json(self):
        doc = json.loads('{"count": "Three"}')
        assert decoder(COUNTS)(doc["count"]) is Count.THREE

    def test_decode_label_registered_to_none(self):
        m = Builder.init(str, members=[None, 1]).variant("None", None).variant("1", 1).build()
        assert decoder(m)("None") is None
        assert decoder(m)("1") == 1
        with pytest.raises(DecodeError, match="Expected one of: None; 1"):
            decoder(m)("2")


class TestEncoder:
    def test_encode_label(self):
        assert encoder(COUNTS)(Count.TWO) == "Two"

    def test_encoded_value_is_json_string(self):
        assert json.dumps(encoder(COUNTS)(Count.TWO)) == '"Two"'

    def test_encode_decode_round_trip(self):
        encode = encoder(COUNTS)
        decode = decoder(COUNTS)
        for value in Count:
            assert decode(encode(value)) is value


class TestDecodeField:
    def test_decode_field(self):
        assert decode_field(COUNTS, {"count": "One"}, "count") is Count.ONE

    def test_decode_field_wraps_message(self):
        with pytest.raises(DecodeError) as excinfo:
            decode_field(COUNTS, {"count": "Six"}, "count")
        assert str(excinfo.value) == (
            "Field 'count': Decode failed; Six is not a valid value. "
            "Expected one of: One; Two; Three"
        )

    def test_decode_field_missing(self):
        with pytest.raises(DecodeError, match="Field 'count': missing"):
            decode_field(COUNTS, {}, "count")


class TestJsonDefault:
    def test_dumps_registered_values(self):
        doc = {"count": Count.ONE, "shape": Shape.CIRCLE, "n": 4}
        out = json.dumps(doc, default=json_default(COUNTS, SHAPES))
        assert json.loads(out) == {"count": "One", "shape": "circle", "n": 4}

    def test_unregistered_object_raises_type_error(self):
        with pytest.raises(TypeError, match="not JSON serializable"):
            json.dumps({"x": object()}, default=json_default(COUNTS))


class TestYaml:
    def test_plain_scalar_representation(self):
        class Dumper(yaml.SafeDumper):
            pass

        register_yaml(COUNTS, Count, dumper=Dumper)
        out = yaml.dump({"count": Count.TWO}, Dumper=Dumper)
        assert out.strip() == "count: Two"
        assert yaml.safe_load(out) == {"count": "Two"}

    def test_tagged_round_trip(self):
        class Dumper(yaml.SafeDumper):
            pass

        class Loader(yaml.SafeLoader):
            pass

        register_yaml(SHAPES, Shape, dumper=Dumper, loader=Loader, tag="!shape")
        out = yaml.dump([Shape.SQUARE, Shape.CIRCLE], Dumper=Dumper)
        assert "!shape" in out
        assert yaml.load(out, Loader=Loader) == [Shape.SQUARE, Shape.CIRCLE]

    def test_tagged_unknown_label(self):
        class Loader(yaml.SafeLoader):
            pass

        register_yaml(SHAPES, Shape, loader=Loader, dumper=type("D", (yaml.SafeDumper,), {}),
                      tag="!shape")
        with pytest.raises(yaml.constructor.ConstructorError, match="Expected one of: square; circle"):
            yaml.load("!shape triangle", Loader=Loader)

    def test_registration_does_not_touch_safe_dumper(self):
        class Dumper(yaml.SafeDumper):
            pass

        register_yaml(COUNTS, Count, dumper=Dumper)
        with pytest.raises(yaml.representer.RepresenterError):
            yaml.safe_dump({"count": Count.ONE})
