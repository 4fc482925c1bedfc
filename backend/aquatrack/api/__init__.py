"""HTTP endpoints, mounted under ``API_BASE_PREFIX``."""

from __future__ import annotations

from flask import Flask


def _join(base: str, relative: str) -> str:
    path = "/".join(part for part in (base.strip("/"), relative.strip("/")) if part)
    return f"/{path}"


def init_app(app: Flask) -> None:
    """Register the health, users and track blueprints.

    ``/api/health``, ``/api/users/...`` and ``/api/track/...`` with the default
    prefix.
    """
    from .health import bp as health_bp
    from .track import bp as track_bp
    from .users import bp as users_bp

    base = app.config.get("API_BASE_PREFIX", "/api")
    for bp, relative in ((health_bp, ""), (users_bp, "users"), (track_bp, "track")):
        app.register_blueprint(bp, url_prefix=_join(base, relative))


__all__ = ["init_app"]
