from enum import Enum
from typing import Union


# Built-in format keys
class Format(str, Enum):
    JSON = "json"
    XML = "xml"
    TXT = "txt"


# Versioning strategy names
class VersionStrategy(str, Enum):
    PATH = "path"
    HEADER = "header"
    PARAM = "param"


# Well-known keys stored in the request context env
API_FORMAT = "api.format"
FORM_HASH = "request.form_hash"
API_VERSION = "api.version"
API_VENDOR = "api.vendor"
API_TYPE = "api.type"
API_SUBTYPE = "api.subtype"

DEFAULT_CONTENT_TYPES = {
    Format.JSON.value: "application/json",
    Format.XML.value: "application/xml",
    Format.TXT.value: "text/plain",
}

DEFAULT_FORMAT = Format.TXT.value

FORMAT_QUERY_PARAM = "format"
CONTENT_TYPE_HEADER = "Content-Type"


def format_key(key: Union[str, Enum]) -> str:
    """Normalize a format key to a plain string.

    Enum members hash by name, so registries and the env bag always store the value.
    """
    if isinstance(key, Enum):
        return str(key.value)
    return str(key)
