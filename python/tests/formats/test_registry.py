"""Unit tests for FormatRegistry and CodecRegistry."""

from content_negotiation.constants import Format
from content_negotiation.formats.registry import Codec, CodecRegistry, FormatRegistry


def encode(value):
    return "encoded"


def decode(body):
    return {"decoded": True}


class TestFormatRegistry:
    """Test content type lookups in both directions."""

    def test_defaults(self):
        registry = FormatRegistry()

        assert registry.content_type_for("json") == "application/json"
        assert registry.content_type_for("xml") == "application/xml"
        assert registry.content_type_for("txt") == "text/plain"
        assert registry.format_for("application/json") == "json"

    def test_enum_keys(self):
        registry = FormatRegistry()

        assert registry.content_type_for(Format.XML) == "application/xml"
        assert registry.has_format(Format.TXT)

    def test_custom_entry(self):
        registry = FormatRegistry({"custom": "application/x-custom"})

        assert registry.has_format("custom")
        assert registry.content_type_for("custom") == "application/x-custom"
        assert registry.format_for("application/x-custom") == "custom"

    def test_custom_entry_overrides_default(self):
        registry = FormatRegistry({"json": "application/vnd.api+json"})

        assert registry.content_type_for("json") == "application/vnd.api+json"

    def test_custom_entries_checked_first_for_content_type(self):
        registry = FormatRegistry({"jsonapi": "application/json"})

        assert registry.format_for("application/json") == "jsonapi"

    def test_content_type_lookup_ignores_case(self):
        registry = FormatRegistry()

        assert registry.format_for("Application/XML") == "xml"

    def test_unknown(self):
        registry = FormatRegistry()

        assert registry.content_type_for("yaml") is None
        assert registry.format_for("application/yaml") is None
        assert not registry.has_format("yaml")

    def test_list_formats(self):
        registry = FormatRegistry({"custom": "x/custom", "json": "x/json"})

        assert registry.list_formats() == ["custom", "json", "xml", "txt"]


class TestCodecRegistry:
    """Test codec priority between defaults and custom entries."""

    def test_default_codec(self):
        codec = Codec(encode=encode, decode=decode)
        registry = CodecRegistry(defaults={"json": codec})

        assert registry.get_codec("json") is codec
        assert registry.get_encoder("json") is encode
        assert registry.get_decoder("json") is decode

    def test_custom_codec_overrides_default(self):
        def custom_encode(value):
            return "custom"

        registry = CodecRegistry(
            defaults={"json": Codec(encode=encode)},
            custom={"json": Codec(encode=custom_encode)},
        )

        assert registry.get_encoder("json") is custom_encode

    def test_encoder_only_override_keeps_default_decoder(self):
        registry = CodecRegistry(
            defaults={"json": Codec(encode=encode, decode=decode)},
            custom={"json": Codec(encode=lambda value: "custom")},
        )

        assert registry.get_decoder("json") is decode

    def test_encoder_only_format_has_no_decoder(self):
        registry = CodecRegistry(custom={"csv": Codec(encode=encode)})

        assert registry.get_encoder("csv") is encode
        assert registry.get_decoder("csv") is None

    def test_missing_codec(self):
        registry = CodecRegistry()

        assert registry.get_codec("json") is None
        assert registry.get_encoder("json") is None
        assert registry.get_decoder("json") is None
        assert not registry.has_codec("json")

    def test_list_codecs(self):
        registry = CodecRegistry(
            defaults={"json": Codec(encode=encode), "xml": Codec(encode=encode)},
            custom={"custom": Codec(encode=encode)},
        )

        assert registry.list_codecs() == ["custom", "json", "xml"]
