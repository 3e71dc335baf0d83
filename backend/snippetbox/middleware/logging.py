"""
Snippetbox — Request Logging Middleware
========================================

What:  Emits one structured log record for every HTTP request.
Why:   Replaces uvicorn's access log with a record that carries the real
       status code, the status text, the duration and, for failed
       requests, the body that was sent back.
How:   Pure ASGI middleware. The downstream app receives a ResponseRecorder
       in place of `send`; the recorder forwards every message unchanged and
       notes the status and the last body chunk on the way through.
Who:   Applied to every request, directly inside the error-recovery layer.

Log record (stdlib logging, fields passed through `extra`):
    {
        "protocol": "http",
        "method": "GET",
        "path": "/snippet/view/1?x=y",
        "status_code": 200,
        "status_text": "OK",
        "duration": 3.21,          # milliseconds
        "body": b"..."             # only when status_code != 200
    }

Severity:
    200 → INFO
    anything else → ERROR, with the last response body chunk attached
"""

import logging
import time
from http import HTTPStatus
from typing import Optional

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

access_logger = logging.getLogger("snippetbox.access")


def status_text(status_code: int) -> str:
    """Reason phrase for a status code, or "" when the code is unknown."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""


def request_uri(scope: Scope) -> str:
    """
    The request target as it appeared on the request line.

    Uses the undecoded `raw_path` when the server provides it, so percent
    escapes are logged as the client sent them.
    """
    raw_path = scope.get("raw_path")
    if raw_path:
        # Some servers include the query in raw_path; it is re-added below
        path = raw_path.split(b"?", 1)[0].decode("latin-1")
    else:
        path = scope.get("root_path", "") + scope.get("path", "")
    query_string = scope.get("query_string", b"")
    if query_string:
        path = f"{path}?{query_string.decode('latin-1')}"
    return path


class ResponseRecorder:
    """
    Drop-in replacement for an ASGI `send` callable that records the response.

    Attributes:
        status_code: Status of the `http.response.start` message, 200 until
                     one has been sent.
        body:        Bytes of the last non-empty body chunk.

    A recorder belongs to a single request and is discarded after logging.
    """

    def __init__(self, send: Send):
        self.send = send
        self.status_code: int = HTTPStatus.OK
        self.body: bytes = b""
        self._start_message: Optional[Message] = None

    @property
    def headers(self) -> MutableHeaders:
        """
        Headers of the response start message.

        Empty until the downstream app has started the response. The
        returned object is bound to the sent message.
        """
        if self._start_message is None:
            return MutableHeaders()
        self._start_message.setdefault("headers", [])
        return MutableHeaders(scope=self._start_message)

    async def __call__(self, message: Message) -> None:
        message_type = message["type"]
        if message_type == "http.response.start":
            self.status_code = message["status"]
            self._start_message = message
        elif message_type == "http.response.body":
            chunk = message.get("body", b"")
            # The closing chunk of a streamed response is empty
            if chunk:
                self.body = bytes(chunk)
        await self.send(message)


class RequestLoggingMiddleware:
    """
    Logs method, path, status and duration of each request.

    Args:
        app:    The ASGI app to observe.
        logger: Where records go. Defaults to the "snippetbox.access"
                logger; tests pass their own to capture records.

    Errors raised by the wrapped app propagate unchanged and are not logged
    here; the recovery layer outside this middleware reports them.
    """

    def __init__(self, app: ASGIApp, logger: Optional[logging.Logger] = None):
        self.app = app
        self.logger = logger or access_logger

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        recorder = ResponseRecorder(send)

        await self.app(scope, receive, recorder)

        duration_ms = (time.perf_counter() - start_time) * 1000
        self.log_request(scope, recorder, duration_ms)

    def log_request(self, scope: Scope, recorder: ResponseRecorder, duration_ms: float) -> None:
        status = int(recorder.status_code)
        fields = {
            "protocol": "http",
            "method": scope.get("method", ""),
            "path": request_uri(scope),
            "status_code": status,
            "status_text": status_text(status),
            "duration": duration_ms,
        }

        if status == HTTPStatus.OK:
            level = logging.INFO
        else:
            level = logging.ERROR
            fields["body"] = recorder.body

        self.logger.log(
            level,
            "received a HTTP request: %s %s %d %s %.1fms",
            fields["method"],
            fields["path"],
            status,
            fields["status_text"],
            duration_ms,
            extra=fields,
        )
