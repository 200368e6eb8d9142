"""Accept header parsing with quality values and vendor media types."""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..logging_config import logger

DEFAULT_QUALITY = 1.0

# vnd.<vendor>[-<version>]+<format>
VENDOR_SUBTYPE_PATTERN = re.compile(
    r"^vnd\.(?P<vendor>[^+]+?)(?:-(?P<version>[^-+]+))?\+(?P<format>.+)$"
)


@dataclass(frozen=True)
class MediaRange:
    """A single entry of an Accept header.

    Attributes:
        type: Top-level type (e.g. "application")
        subtype: Full subtype as sent (e.g. "vnd.test-v1+xml")
        params: Media type parameters other than q
        quality: Preference weight, 1.0 when q is absent
        vendor: Vendor name from a ``vnd.`` subtype
        version: API version from a ``vnd.<vendor>-<version>`` subtype
        format_suffix: Structured syntax suffix after the last "+"
    """

    type: str
    subtype: str
    params: Dict[str, str] = field(default_factory=dict)
    quality: float = DEFAULT_QUALITY
    vendor: Optional[str] = None
    version: Optional[str] = None
    format_suffix: Optional[str] = None

    @property
    def mime_type(self) -> str:
        return f"{self.type}/{self.subtype}"

    @property
    def effective_subtype(self) -> str:
        """Subtype used for format lookup: the suffix after "+" when present."""
        return self.format_suffix or self.subtype

    @property
    def effective_mime_type(self) -> str:
        return f"{self.type}/{self.effective_subtype}"

    @property
    def is_vendored(self) -> bool:
        return self.vendor is not None


def parse_media_range(entry: str) -> Optional[MediaRange]:
    """Parse one ``type/subtype[; param=value]*`` entry.

    Returns None when the entry is malformed or has a non-positive or
    unparseable q value.
    """
    media_type, *raw_params = [part.strip() for part in entry.split(";")]
    if media_type.count("/") != 1:
        return None
    type_, subtype = (part.strip().lower() for part in media_type.split("/"))
    if not type_ or not subtype:
        return None

    params: Dict[str, str] = {}
    quality = DEFAULT_QUALITY
    for raw_param in raw_params:
        if "=" not in raw_param:
            continue
        name, value = (part.strip() for part in raw_param.split("=", 1))
        if name.lower() == "q":
            try:
                quality = float(value)
            except ValueError:
                logger.debug(f"Skipping Accept entry with invalid quality: {entry!r}")
                return None
        else:
            params[name.lower()] = value.strip('"')

    if quality <= 0:
        return None

    vendor = version = format_suffix = None
    match = VENDOR_SUBTYPE_PATTERN.match(subtype)
    if match:
        vendor = match.group("vendor")
        version = match.group("version")
        format_suffix = match.group("format")
    elif "+" in subtype:
        format_suffix = subtype.rsplit("+", 1)[1] or None

    return MediaRange(
        type=type_,
        subtype=subtype,
        params=params,
        quality=quality,
        vendor=vendor,
        version=version,
        format_suffix=format_suffix,
    )


def parse_accept(header: Optional[str]) -> List[MediaRange]:
    """Parse an Accept header into media ranges ordered by preference.

    Entries are sorted by descending quality; entries with equal quality keep
    their header order. Malformed entries are skipped.
    """
    if not header:
        return []
    ranges = []
    for entry in header.split(","):
        if not entry.strip():
            continue
        media_range = parse_media_range(entry)
        if media_range is None:
            logger.debug(f"Skipping unparseable Accept entry: {entry!r}")
            continue
        ranges.append(media_range)
    # sorted() is stable, so ties keep header order
    return sorted(ranges, key=lambda media_range: -media_range.quality)
