"""WSGI proxy middleware configuration helper."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


def init_app(app: Flask) -> None:
    """Wrap the WSGI app in :class:`~werkzeug.middleware.proxy_fix.ProxyFix`.

    Only applied when ``USE_PROXYFIX`` is truthy; a single trusted hop is
    assumed for every ``X-Forwarded-*`` header.
    """
    if app.config.get("USE_PROXYFIX", True):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)
