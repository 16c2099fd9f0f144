import uuid
from typing import Awaitable, Callable, Union

import structlog
from asgiref.sync import iscoroutinefunction, markcoroutinefunction
from django.http import HttpRequest, HttpResponse

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

GetResponse = Union[
    Callable[[HttpRequest], HttpResponse],
    Callable[[HttpRequest], Awaitable[HttpResponse]],
]


class CorrelationIdMiddleware:
    """Tag every request with a correlation ID.

    Reads ``X-Request-ID`` from the incoming request or generates a UUID4,
    binds it to the structlog context so every log line of the request
    carries it, and echoes it back on the response.

    Works under both WSGI and ASGI: when the next handler is a coroutine
    function the middleware runs in async mode and never blocks the loop.
    """

    sync_capable = True
    async_capable = True

    def __init__(self, get_response: GetResponse) -> None:
        self.get_response = get_response
        self._is_async = iscoroutinefunction(get_response)
        if self._is_async:
            markcoroutinefunction(self)

    def __call__(self, request: HttpRequest):
        if self._is_async:
            return self.__acall__(request)
        cid = self._start(request)
        response = self.get_response(request)
        return self._finish(request, response, cid)

    async def __acall__(self, request: HttpRequest) -> HttpResponse:
        cid = self._start(request)
        response = await self.get_response(request)
        return self._finish(request, response, cid)

    def _start(self, request: HttpRequest) -> str:
        cid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=cid)
        logger.info(
            "request_started",
            method=request.method,
            path=request.get_full_path(),
        )
        return cid

    def _finish(
        self, request: HttpRequest, response: HttpResponse, cid: str
    ) -> HttpResponse:
        logger.info(
            "request_finished",
            method=request.method,
            path=request.get_full_path(),
            status_code=response.status_code,
        )
        response[REQUEST_ID_HEADER] = cid
        return response
