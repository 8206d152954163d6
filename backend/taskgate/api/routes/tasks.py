"""Task Endpoint — single route forwarding every method to the request gate.

Invariants:
    - Every method, including verbs FastAPI has no decorator for (TRACE, custom),
      reaches the gate, so 401/405 ordering matches the serverless entrypoint
    - The raw body bytes are forwarded undecoded; the gate decodes strictly
      after authentication
    - The gate's status, headers and body are returned verbatim

Design Decisions:
    - Plain Starlette route via add_route (methods=None) instead of api_route:
      a method list lets Starlette answer unlisted verbs with its own 405 body
"""

from fastapi import APIRouter, Request, Response

from taskgate.core.envelope import TaskRequest

router = APIRouter(tags=["tasks"])


async def tasks_endpoint(request: Request) -> Response:
    raw = await request.body()
    task_request = TaskRequest(
        method=request.method,
        headers=dict(request.headers),
        body=raw or None,
    )
    result = await request.app.state.gate.handle(task_request)
    return Response(
        content=result.body,
        status_code=result.status_code,
        headers=result.headers,
    )


router.add_route("/api/tasks", tasks_endpoint, include_in_schema=False)
