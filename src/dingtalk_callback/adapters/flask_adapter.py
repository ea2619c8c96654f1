"""Flask binding for CallbackDispatcher."""

import inspect

from flask import Response, jsonify, request

from ..dispatcher import CallbackDispatcher
from ..models import CallbackRequest
from ..types import AuthenticationError


def _reject_awaitable(value, name: str) -> None:
    if inspect.isawaitable(value):
        if inspect.iscoroutine(value):
            value.close()
        raise TypeError(
            f"{name} returned an awaitable; the Flask binding needs synchronous "
            "collaborators (use fastapi_endpoint for async ones)"
        )


def flask_view(dispatcher: CallbackDispatcher):
    """
    Build a Flask view function for the callback URL.

    Example usage:
        ```python
        app.add_url_rule(
            "/dingtalk/callback",
            "dingtalk_callback",
            flask_view(dispatcher),
            methods=["POST"],
        )
        ```

    The view answers 401 on a bad signature, the signed JSON acknowledgement
    once a reply exists, the handler's own return value if it gave one without
    replying, and an empty 200 otherwise. Decryption errors propagate to Flask.

    The handler and ticket store must be synchronous; an awaitable result
    raises TypeError.
    """

    def view():
        body = request.get_json(silent=True) or {}
        try:
            result = dispatcher.handle_request(CallbackRequest.from_parts(request.args, body))
        except AuthenticationError as e:
            return Response(str(e), status=e.status_code, mimetype="text/plain")

        _reject_awaitable(result.ticket_save_result, "save_ticket")
        _reject_awaitable(result.handler_result, "handler")

        if result.replied:
            return jsonify(result.response.to_dict())
        if result.handler_result is not None:
            return result.handler_result
        return Response("", status=200)

    return view
