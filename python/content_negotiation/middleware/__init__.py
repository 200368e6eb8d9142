"""Request/response middlewares."""

from .base import BaseMiddleware
from .formatter import Formatter
from .versioner import (
    HeaderVersioner,
    ParamVersioner,
    PathVersioner,
    Versioner,
    select_strategy,
)

__all__ = [
    "BaseMiddleware",
    "Formatter",
    "Versioner",
    "PathVersioner",
    "HeaderVersioner",
    "ParamVersioner",
    "select_strategy",
]
