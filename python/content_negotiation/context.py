"""Per-request context passed through the middleware chain."""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Hashable, List, NamedTuple, Optional, Union

from starlette.datastructures import Headers


class HandlerResult(NamedTuple):
    """Status, headers and body chunks returned by a handler or middleware."""

    status: int
    headers: Dict[str, str]
    body: List[Any]


@dataclass
class RequestContext:
    """Request data plus an opaque env bag shared along the chain.

    Attributes:
        path: Request path. Middlewares may rewrite it before calling downstream.
        headers: Request headers with case-insensitive lookup. Plain mappings
            are converted to ``Headers`` on construction.
        query: Query string parameters.
        body: Fully buffered request body, if any.
        env: Arbitrary annotations keyed by any hashable. Entries the
            middlewares do not know about are left untouched.
    """

    path: str = "/"
    headers: Headers = field(default_factory=Headers)
    query: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    env: Dict[Hashable, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.headers, Headers):
            self.headers = Headers(headers=dict(self.headers or {}))

    def __getitem__(self, key: Hashable) -> Any:
        return self.env[key]

    def __setitem__(self, key: Hashable, value: Any) -> None:
        self.env[key] = value

    def __contains__(self, key: Hashable) -> bool:
        return key in self.env

    def get(self, key: Hashable, default: Any = None) -> Any:
        return self.env.get(key, default)


HandlerReturn = Union[HandlerResult, tuple]
Handler = Callable[[RequestContext], Union[HandlerReturn, Awaitable[HandlerReturn]]]
