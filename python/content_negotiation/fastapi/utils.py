from fastapi import Request, Response

from ..context import HandlerResult, RequestContext


def get_route_path(request: Request) -> str:
    """Get the request path relative to the mount point of the app."""
    path = request.scope["path"]
    root_path = request.scope.get("root_path", "")
    if root_path and path.startswith(root_path):
        path = path[len(root_path) :]
    return path or "/"


async def build_request_context(request: Request) -> RequestContext:
    """Create a RequestContext from a FastAPI/Starlette request.

    :param Request request: The incoming request
    :return RequestContext: Context with path, headers, query params and the buffered body
    """
    body = await request.body()
    return RequestContext(
        path=get_route_path(request),
        headers=request.headers,
        query=dict(request.query_params),
        body=body or None,
    )


def to_response(result: HandlerResult) -> Response:
    """Create a Response from an encoded HandlerResult.

    Body chunks are concatenated in order. Headers, including Content-Type,
    are passed through exactly as the pipeline set them.
    """
    return Response(
        content=b"".join(result.body),
        status_code=result.status,
        headers=result.headers,
    )
