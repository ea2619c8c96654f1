"""FastAPI binding for CallbackDispatcher."""

import inspect
import json

from fastapi import Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from ..dispatcher import CallbackDispatcher
from ..models import CallbackRequest
from ..types import AuthenticationError


def fastapi_endpoint(dispatcher: CallbackDispatcher):
    """
    Build an async FastAPI endpoint for the callback URL.

    Example usage:
        ```python
        app.add_api_route("/dingtalk/callback", fastapi_endpoint(dispatcher), methods=["POST"])
        ```

    Awaitable handler or ticket-save results are awaited before the reply is
    read, so async handlers may call ``reply()`` after doing their own I/O.
    """

    async def endpoint(request: Request) -> Response:
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            body = {}

        try:
            result = dispatcher.handle_request(CallbackRequest.from_parts(request.query_params, body))
        except AuthenticationError as e:
            return PlainTextResponse(str(e), status_code=e.status_code)

        if inspect.isawaitable(result.ticket_save_result):
            result.ticket_save_result = await result.ticket_save_result
        if inspect.isawaitable(result.handler_result):
            result.handler_result = await result.handler_result

        if result.replied:
            return JSONResponse(result.response.to_dict())
        if isinstance(result.handler_result, Response):
            return result.handler_result
        return Response(status_code=200)

    return endpoint
