"""Versioner middlewares: resolve the requested API version.

Three strategies are available, selected by name with ``Versioner.using``:

- ``path``: ``/v1/users`` -> version ``v1``, path ``/users``
- ``header``: ``Accept: application/vnd.acme-v1+json`` -> version ``v1``
- ``param``: ``/users?apiver=v1`` -> version ``v1``

Each stores the version in ``context["api.version"]`` for the routing layer.
"""

import re
from http import HTTPStatus
from typing import Dict, Optional, Type

from fastapi.exceptions import HTTPException

from ..constants import API_SUBTYPE, API_TYPE, API_VENDOR, API_VERSION, VersionStrategy
from ..context import RequestContext
from ..exceptions import UnsupportedStrategyError
from ..formats.accept import parse_accept
from ..logging_config import logger
from .base import BaseMiddleware

VERSION_NOT_FOUND = "404 API Version Not Found"
NOT_ACCEPTABLE = "406 Not Acceptable"


class BaseVersioner(BaseMiddleware):
    default_options = {"versions": None}

    def check_version(self, version: str) -> None:
        versions = self.options.get("versions")
        if versions is not None and version not in versions:
            logger.info(f"Rejecting unsupported API version: {version}")
            raise HTTPException(
                status_code=HTTPStatus.NOT_FOUND.value, detail=VERSION_NOT_FOUND
            )


class PathVersioner(BaseVersioner):
    """Take the version from the first path segment and strip it from the path.

    Options:
        versions: Accepted versions. None accepts any version matching ``pattern``.
        prefix: Path prefix preceding the version segment (e.g. "/api").
        pattern: Regex a segment must match to be treated as a version.
    """

    default_options = {"versions": None, "prefix": None, "pattern": ".*"}

    def before(self, context: RequestContext) -> None:
        path = context.path
        prefix = self.options.get("prefix")
        if prefix:
            prefix = "/" + prefix.strip("/")
            if path == prefix or path.startswith(prefix + "/"):
                path = path[len(prefix) :] or "/"
            else:
                prefix = ""

        pieces = path.split("/")
        if len(pieces) < 2 or not pieces[1]:
            return
        potential_version = pieces[1]
        pattern = self.options["pattern"]
        if not isinstance(pattern, re.Pattern):
            pattern = re.compile(pattern, re.IGNORECASE)
        if not pattern.fullmatch(potential_version):
            return

        self.check_version(potential_version)
        context[API_VERSION] = potential_version
        context.path = (prefix or "") + "/" + "/".join(pieces[2:])
        logger.debug(f"API version {potential_version!r} taken from path")


class HeaderVersioner(BaseVersioner):
    """Take the version from a vendored Accept media type.

    Options:
        versions: Accepted versions. None accepts any version.
        vendor: Required vendor name. None accepts any vendor.
        strict: Reject requests without a vendored Accept media type with 406.
    """

    default_options = {"versions": None, "vendor": None, "strict": False}

    def before(self, context: RequestContext) -> None:
        media_ranges = parse_accept(context.headers.get("accept"))
        vendored = next((m for m in media_ranges if m.is_vendored), None)

        if vendored is None:
            if self.options["strict"]:
                raise HTTPException(
                    status_code=HTTPStatus.NOT_ACCEPTABLE.value, detail=NOT_ACCEPTABLE
                )
            if media_ranges:
                context[API_TYPE] = media_ranges[0].type
                context[API_SUBTYPE] = media_ranges[0].subtype
            return

        context[API_TYPE] = vendored.type
        context[API_SUBTYPE] = vendored.subtype

        vendor = self.options.get("vendor")
        if vendor is not None and vendored.vendor != vendor:
            raise HTTPException(
                status_code=HTTPStatus.NOT_FOUND.value, detail=VERSION_NOT_FOUND
            )
        context[API_VENDOR] = vendored.vendor

        if vendored.version is not None:
            self.check_version(vendored.version)
            context[API_VERSION] = vendored.version
            logger.debug(f"API version {vendored.version!r} taken from Accept header")


class ParamVersioner(BaseVersioner):
    """Take the version from a query parameter and remove the parameter.

    Options:
        versions: Accepted versions. None accepts any version.
        parameter: Query parameter name, "apiver" by default.
    """

    default_options = {"versions": None, "parameter": "apiver"}

    def before(self, context: RequestContext) -> None:
        parameter = self.options["parameter"]
        version = context.query.get(parameter)
        if not version:
            return
        self.check_version(version)
        context[API_VERSION] = version
        del context.query[parameter]
        logger.debug(f"API version {version!r} taken from {parameter!r} parameter")


STRATEGIES: Dict[str, Type[BaseVersioner]] = {
    VersionStrategy.PATH.value: PathVersioner,
    VersionStrategy.HEADER.value: HeaderVersioner,
    VersionStrategy.PARAM.value: ParamVersioner,
}


def select_strategy(name: Optional[str]) -> Type[BaseVersioner]:
    """Get the versioner class for a strategy name.

    Raises:
        UnsupportedStrategyError: If the name is not path, header or param
    """
    key = name.value if isinstance(name, VersionStrategy) else name
    try:
        return STRATEGIES[key]
    except (KeyError, TypeError):
        raise UnsupportedStrategyError(str(name)) from None


class Versioner:
    """Entry point for selecting a versioning strategy by name."""

    Path = PathVersioner
    Header = HeaderVersioner
    Param = ParamVersioner

    @staticmethod
    def using(name: str) -> Type[BaseVersioner]:
        return select_strategy(name)
