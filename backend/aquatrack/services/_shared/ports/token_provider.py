from __future__ import annotations

from typing import Any, Protocol


class TokenProvider(Protocol):
    """Port for issuing and validating the access/refresh token pair.

    Implementations raise
    :class:`~aquatrack.services._shared.errors.InvalidTokenError` for every
    validation failure, whatever the underlying cause.

    HTTP requests are not authorized through :meth:`validate_access_token`:
    :func:`aquatrack.api.deps.require_auth` verifies bearer tokens with
    Flask-JWT-Extended directly, so its error loaders shape the ``401``
    responses. Access tokens issued here must therefore be accepted by that
    decorator, and ``validate_access_token`` must agree with it.
    """

    def issue_access_token(self, user_id: int) -> str: ...

    def issue_refresh_token(self, user_id: int) -> str: ...

    def validate_access_token(self, token: str) -> int: ...

    def validate_expired_refresh_token(self, token: str) -> dict[str, Any]: ...
