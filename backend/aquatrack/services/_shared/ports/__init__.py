"""
aquatrack.services._shared.ports
================================

*Ports* (hexagonal interfaces) the service layer depends on.

Modules
-------
- :mod:`token_provider`:
    Defines :class:`~.TokenProvider`, issuing and validating access and
    refresh tokens.

Concrete adapters live under ``aquatrack.infra``.
"""

from __future__ import annotations

from .token_provider import TokenProvider

__all__ = ["TokenProvider"]
