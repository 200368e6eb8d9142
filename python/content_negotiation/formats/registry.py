"""Registries mapping format keys to content types and codecs."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ..constants import DEFAULT_CONTENT_TYPES, format_key

Encoder = Callable[[Any], Union[str, bytes]]
Decoder = Callable[[bytes], Any]


@dataclass(frozen=True)
class Codec:
    """Encode/decode pair for a format key.

    Attributes:
        encode: Serializes a response value to ``str`` or ``bytes``
        decode: Parses a request body. Optional: formats without a decoder
                leave request bodies untouched.
    """

    encode: Encoder
    decode: Optional[Decoder] = None


class FormatRegistry:
    """Bidirectional map between format keys and MIME content types.

    Custom entries take priority over the built-in defaults for both
    directions of lookup.
    """

    def __init__(self, content_types: Optional[Mapping[Any, str]] = None) -> None:
        self._default_content_types: Dict[str, str] = dict(DEFAULT_CONTENT_TYPES)
        self._custom_content_types: Dict[str, str] = {}
        for key, content_type in (content_types or {}).items():
            self.set_content_type(key, content_type)

    def set_content_type(self, key: Any, content_type: str) -> None:
        """Register or override the content type for a format key."""
        self._custom_content_types[format_key(key)] = content_type

    def content_type_for(self, key: Any) -> Optional[str]:
        """Get the outbound content type for a format key, or None if unregistered."""
        key = format_key(key)
        if key in self._custom_content_types:
            return self._custom_content_types[key]
        return self._default_content_types.get(key)

    def format_for(self, content_type: str) -> Optional[str]:
        """Get the format key registered for a content type.

        Matching ignores case. Custom entries are checked before defaults.
        """
        content_type = content_type.strip().lower()
        for mapping in (self._custom_content_types, self._default_content_types):
            for key, registered in mapping.items():
                if registered.lower() == content_type:
                    return key
        return None

    def has_format(self, key: Any) -> bool:
        key = format_key(key)
        return key in self._custom_content_types or key in self._default_content_types

    def list_formats(self) -> List[str]:
        """List all format keys, custom entries first."""
        keys = list(self._custom_content_types)
        keys.extend(k for k in self._default_content_types if k not in keys)
        return keys


class CodecRegistry:
    """Registry of codecs by format key with custom-over-default priority."""

    def __init__(
        self,
        defaults: Optional[Mapping[Any, Codec]] = None,
        custom: Optional[Mapping[Any, Codec]] = None,
    ) -> None:
        self._default_codecs: Dict[str, Codec] = {}
        self._custom_codecs: Dict[str, Codec] = {}
        for key, codec in (defaults or {}).items():
            self.set_default(key, codec)
        for key, codec in (custom or {}).items():
            self.set_codec(key, codec)

    def set_default(self, key: Any, codec: Codec) -> None:
        """Set a built-in codec for a format key."""
        self._default_codecs[format_key(key)] = codec

    def set_codec(self, key: Any, codec: Codec) -> None:
        """Set a custom codec, overriding any default for the same key."""
        self._custom_codecs[format_key(key)] = codec

    def get_codec(self, key: Any) -> Optional[Codec]:
        key = format_key(key)
        return self._custom_codecs.get(key) or self._default_codecs.get(key)

    def get_encoder(self, key: Any) -> Optional[Encoder]:
        codec = self.get_codec(key)
        return codec.encode if codec else None

    def get_decoder(self, key: Any) -> Optional[Decoder]:
        """Get the decoder for a format key.

        A custom codec that only provides an encoder keeps the default decoder
        for the same key, if there is one.
        """
        key = format_key(key)
        for codecs in (self._custom_codecs, self._default_codecs):
            codec = codecs.get(key)
            if codec and codec.decode:
                return codec.decode
        return None

    def has_codec(self, key: Any) -> bool:
        key = format_key(key)
        return key in self._custom_codecs or key in self._default_codecs

    def list_codecs(self) -> List[str]:
        keys = list(self._custom_codecs)
        keys.extend(k for k in self._default_codecs if k not in keys)
        return keys
