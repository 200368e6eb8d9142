import inspect
from abc import ABC
from collections.abc import Iterable, Mapping
from typing import Any, Dict, List

from pydantic import BaseModel

from ..context import Handler, HandlerResult, RequestContext
from ..logging_config import logger


def _normalize_body(body: Any) -> List[Any]:
    """Turn a handler body into a list of chunks.

    A lone value (string, mapping, model, scalar) is a single chunk; other
    iterables yield one chunk per item.
    """
    if body is None:
        return []
    if isinstance(body, (str, bytes, Mapping, BaseModel)) or not isinstance(
        body, Iterable
    ):
        return [body]
    return list(body)


class BaseMiddleware(ABC):
    """Middleware wrapping a downstream handler.

    Subclasses hook into ``before`` (annotate or rewrite the context) and
    ``after`` (transform the downstream result). Options passed to the
    constructor are merged over the class ``default_options``.
    """

    default_options: Dict[str, Any] = {}

    def __init__(self, app: Handler, **options: Any):
        self.app = app
        self.options = {**self.default_options, **options}

        logger.debug(f"Initialized {self.__class__.__name__} with options: {options}")

    def before(self, context: RequestContext) -> None:
        """Run before the downstream handler."""

    def after(self, context: RequestContext, result: HandlerResult) -> HandlerResult:
        """Run after the downstream handler. Returns the result to hand upstream."""
        return result

    async def call_app(self, context: RequestContext) -> HandlerResult:
        result = self.app(context)
        if inspect.isawaitable(result):
            result = await result
        status, headers, body = result
        return HandlerResult(
            status=status, headers=dict(headers or {}), body=_normalize_body(body)
        )

    async def __call__(self, context: RequestContext) -> HandlerResult:
        self.before(context)
        result = await self.call_app(context)
        return self.after(context, result)
