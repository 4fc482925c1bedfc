"""Expose the application factory at package level.

Provide convenient access to :func:`aquatrack.factory.create_app` so callers
(and ``gunicorn "aquatrack:create_app()"``) can import it from the package root.
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
