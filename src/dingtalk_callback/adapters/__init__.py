"""
Web framework bindings for CallbackDispatcher.

Each adapter lives in its own module so only the framework you use needs to
be installed:

    from dingtalk_callback.adapters.flask_adapter import flask_view
    from dingtalk_callback.adapters.fastapi_adapter import fastapi_endpoint
"""
