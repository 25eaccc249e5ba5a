"""
Notes API - CORS Middleware
============================

What:  Open CORS policy for the browser client, which is served from a
       different origin than the API.
How:   Starlette's CORSMiddleware configured to allow every origin, with its
       request handling replaced by an unconditional policy:
       - every OPTIONS request is answered with 204 No Content, whatever
         Access-Control-Request-* headers a preflight carries
       - every other response gets the same Access-Control-* headers,
         with or without an Origin header on the request
       OPTIONS never reaches the routers.
"""

from starlette.datastructures import MutableHeaders
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response
from starlette.types import Message, Receive, Scope, Send

ALLOW_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]
ALLOW_HEADERS = ["Content-Type", "Authorization"]


class OpenCORSMiddleware(CORSMiddleware):
    """
    CORSMiddleware that allows every origin and short-circuits OPTIONS with 204.

    Usage:
        app.add_middleware(OpenCORSMiddleware)
    """

    def __init__(self, app, **kwargs) -> None:
        kwargs.setdefault("allow_origins", ["*"])
        kwargs.setdefault("allow_methods", ALLOW_METHODS)
        kwargs.setdefault("allow_headers", ALLOW_HEADERS)
        super().__init__(app, **kwargs)
        self.open_headers = {
            **self.simple_headers,
            "Access-Control-Allow-Methods": ", ".join(kwargs["allow_methods"]),
            "Access-Control-Allow-Headers": ", ".join(kwargs["allow_headers"]),
        }

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        if scope["method"] == "OPTIONS":
            response = Response(status_code=204, headers=self.open_headers)
            await response(scope, receive, send)
            return

        async def send_with_cors(message: Message) -> None:
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                headers = MutableHeaders(scope=message)
                headers.update(self.open_headers)
            await send(message)

        await self.app(scope, receive, send_with_cors)
