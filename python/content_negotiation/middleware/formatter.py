"""Formatter middleware: format negotiation and body transcoding."""

from typing import Any, Optional

from ..config import FormatterConfig, merge_config
from ..constants import (
    API_FORMAT,
    CONTENT_TYPE_HEADER,
    FORM_HASH,
    FORMAT_QUERY_PARAM,
    format_key,
)
from ..context import Handler, HandlerResult, RequestContext
from ..exceptions import EncodingError
from ..formats.accept import parse_accept
from ..formats.codecs import DEFAULT_CODECS
from ..formats.registry import CodecRegistry, FormatRegistry
from ..logging_config import logger
from .base import BaseMiddleware


class Formatter(BaseMiddleware):
    """Negotiates the wire format of a request and transcodes bodies.

    On the way in, the format is resolved (path extension, then the ``format``
    query parameter, then the Accept header, then the default) and stored in
    ``context["api.format"]``. A non-empty request body is decoded with that
    format's decoder into ``context["request.form_hash"]``; bodies that fail to
    decode are left unparsed. On the way out, every body chunk is encoded with
    the format's encoder and ``Content-Type`` is set from the format registry.
    """

    def __init__(
        self,
        app: Handler,
        config: Optional[FormatterConfig] = None,
        **options: Any,
    ):
        super().__init__(app, **options)
        if config is None:
            config = FormatterConfig(**options)
        elif options:
            config = merge_config(config, options)
        self.config = config
        self.format_registry = FormatRegistry(config.content_types)
        self.codec_registry = CodecRegistry(
            defaults=DEFAULT_CODECS, custom=config.formatters
        )
        self.default_format = config.default_format

    def before(self, context: RequestContext) -> None:
        fmt = self.detect_format(context)
        context[API_FORMAT] = fmt
        logger.debug(f"Negotiated format {fmt!r} for path {context.path!r}")

        if context.body:
            form_hash = self.decode_body(fmt, context.body)
            if form_hash is not None:
                context[FORM_HASH] = form_hash

    def after(self, context: RequestContext, result: HandlerResult) -> HandlerResult:
        fmt = context[API_FORMAT]
        body = [self.encode_value(fmt, value) for value in result.body]

        # The negotiated content type replaces one set downstream, in any case
        headers = {
            name: value
            for name, value in result.headers.items()
            if name.lower() != CONTENT_TYPE_HEADER.lower()
        }
        content_type = self.format_registry.content_type_for(fmt)
        if content_type:
            headers[CONTENT_TYPE_HEADER] = content_type
        else:
            logger.warning(f"No content type registered for format {fmt!r}")

        return HandlerResult(status=result.status, headers=headers, body=body)

    def detect_format(self, context: RequestContext) -> str:
        return (
            self.format_from_extension(context)
            or self.format_from_params(context)
            or self.format_from_header(context)
            or self.default_format
        )

    def format_from_extension(self, context: RequestContext) -> Optional[str]:
        """Resolve a registered format from the path extension and strip it."""
        head, sep, last_segment = context.path.rpartition("/")
        stem, dot, extension = last_segment.rpartition(".")
        if not dot or not extension or not self.format_registry.has_format(extension):
            return None

        context.path = f"{head}{sep}{stem}"
        logger.debug(f"Format {extension!r} taken from path extension")
        return extension

    def format_from_params(self, context: RequestContext) -> Optional[str]:
        fmt = context.query.get(FORMAT_QUERY_PARAM)
        if fmt:
            logger.debug(f"Format {fmt!r} taken from query parameter")
            return fmt
        return None

    def format_from_header(self, context: RequestContext) -> Optional[str]:
        """Resolve the first registered format among the Accept media ranges.

        The media type is matched as sent first, so registered types such as
        ``application/hal+json`` win over the ``+json`` suffix.
        """
        for media_range in parse_accept(context.headers.get("accept")):
            fmt = self.format_registry.format_for(media_range.mime_type)
            if fmt is None:
                fmt = self.format_registry.format_for(media_range.effective_mime_type)
            if fmt is None and self.format_registry.has_format(
                media_range.effective_subtype
            ):
                fmt = media_range.effective_subtype
            if fmt is not None:
                logger.debug(f"Format {fmt!r} taken from Accept {media_range.mime_type!r}")
                return fmt
        return None

    def decode_body(self, fmt: str, body: bytes) -> Optional[Any]:
        """Decode a request body, returning None when it cannot be decoded."""
        decoder = self.codec_registry.get_decoder(fmt)
        if decoder is None:
            logger.debug(f"No decoder for format {fmt!r}; body left unparsed")
            return None
        try:
            return decoder(body)
        except Exception as e:
            # Bodies in another encoding (e.g. form posts) are not an error
            logger.debug(f"Unable to decode request body as {fmt!r}: {e}")
            return None

    def encode_value(self, fmt: str, value: Any) -> bytes:
        encoder = self.codec_registry.get_encoder(fmt)
        if encoder is None:
            # No codec: pass text through and stringify anything else
            encoder = self.codec_registry.get_encoder("txt")
        try:
            encoded = encoder(value)
        except Exception as e:
            logger.error(f"Unable to encode response value as {fmt!r}: {e}")
            raise EncodingError(format_key(fmt), str(e)) from e

        if isinstance(encoded, str):
            return encoded.encode("utf-8")
        if isinstance(encoded, (bytes, bytearray)):
            return bytes(encoded)
        logger.error(
            f"Encoder for {fmt!r} returned {type(encoded).__name__}, not str or bytes"
        )
        raise EncodingError(
            format_key(fmt), f"encoder returned {type(encoded).__name__}"
        )
