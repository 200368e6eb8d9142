"""Format keys, content types, codecs and Accept parsing."""

from .accept import MediaRange, parse_accept, parse_media_range
from .codecs import DEFAULT_CODECS
from .registry import Codec, CodecRegistry, FormatRegistry

__all__ = [
    "Codec",
    "CodecRegistry",
    "FormatRegistry",
    "DEFAULT_CODECS",
    "MediaRange",
    "parse_accept",
    "parse_media_range",
]
