from http import HTTPStatus
from typing import Any, Optional

from fastapi import Request
from fastapi.exceptions import HTTPException
from starlette.types import Receive, Scope, Send

from ..config import FormatterConfig
from ..context import Handler
from ..exceptions import EncodingError
from ..logging_config import logger
from ..middleware.formatter import Formatter
from ..middleware.versioner import select_strategy
from .utils import build_request_context, to_response


def build_pipeline(
    handler: Handler,
    config: Optional[FormatterConfig] = None,
    version_strategy: Optional[str] = None,
    **version_options: Any,
) -> Formatter:
    """Compose the Formatter, an optional Versioner and the handler.

    Args:
        handler: Downstream handler taking a RequestContext and returning
                 ``(status, headers, body)``.
        config: Formatter configuration. Read from the environment when omitted.
        version_strategy: One of "path", "header" or "param"; None disables versioning.
        **version_options: Options for the selected versioner (versions, prefix, ...).

    Raises:
        UnsupportedStrategyError: If version_strategy is not a known strategy
    """
    app = handler
    if version_strategy is not None:
        versioner_cls = select_strategy(version_strategy)
        app = versioner_cls(handler, **version_options)
        logger.info(f"Using {versioner_cls.__name__} for API versioning")
    return Formatter(app, config=config or FormatterConfig.from_env())


class NegotiationApp:
    """ASGI application running a handler behind the negotiation pipeline.

    Mount it in a FastAPI or Starlette app so the pipeline sees every path
    under the mount point, including ones with a format extension::

        app = FastAPI()
        app.mount("/api", NegotiationApp(handler, version_strategy="path"))
    """

    def __init__(
        self,
        handler: Handler,
        config: Optional[FormatterConfig] = None,
        version_strategy: Optional[str] = None,
        **version_options: Any,
    ):
        self.pipeline = build_pipeline(
            handler, config, version_strategy, **version_options
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            logger.debug(f"Ignoring unsupported ASGI scope type: {scope['type']}")
            return

        request = Request(scope, receive)
        context = await build_request_context(request)

        try:
            result = await self.pipeline(context)
        except EncodingError as e:
            logger.error(f"Response encoding failed: {e}")
            raise HTTPException(
                status_code=HTTPStatus.INTERNAL_SERVER_ERROR.value,
                detail="Unable to encode response",
            ) from e

        response = to_response(result)
        await response(scope, receive, send)
