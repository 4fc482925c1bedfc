# aquatrack/infra/jwt/token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, cast
from uuid import uuid4

import jwt
from flask import current_app
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException

from aquatrack.services._shared.errors import InvalidTokenError
from aquatrack.services._shared.ports import TokenProvider

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    JWT adapter with one signing key per token kind.

    * Access tokens go through Flask-JWT-Extended (``JWT_SECRET_KEY``,
      issuer/audience and ``JWT_ACCESS_TOKEN_EXPIRES`` from the app config), so
      ``@jwt_required``-style verification accepts them as-is.
    * Refresh tokens are signed with PyJWT and ``JWT_REFRESH_SECRET_KEY``. They
      carry a random ``jti`` so two tokens minted in the same second differ.

    .. note::
       Requires an active Flask app context.
    """

    algorithm: str = "HS256"

    # ------------------------------------------------------------------ #
    # Issuing
    # ------------------------------------------------------------------ #

    def issue_access_token(self, user_id: int) -> str:
        return cast(str, create_access_token(identity=str(user_id)))

    def issue_refresh_token(self, user_id: int) -> str:
        now = datetime.now(timezone.utc)
        expires = cast(timedelta, current_app.config["JWT_REFRESH_TOKEN_EXPIRES"])
        payload = {
            current_app.config.get("JWT_IDENTITY_CLAIM", "id"): str(user_id),
            "type": REFRESH_TOKEN_TYPE,
            "jti": uuid4().hex,
            "iat": now,
            "exp": now + expires,
        }
        return jwt.encode(payload, self._refresh_key(), algorithm=self.algorithm)

    # ------------------------------------------------------------------ #
    # Validation
    # ------------------------------------------------------------------ #

    def validate_access_token(self, token: str) -> int:
        """
        Verify signature, issuer, audience and expiry of an access token.

        :param token: Encoded access JWT.
        :type token: str
        :returns: The user id carried by the token.
        :rtype: int
        :raises InvalidTokenError: On any verification failure.
        """
        try:
            claims = cast(dict[str, Any], decode_token(token))
        except (jwt.PyJWTError, JWTExtendedException) as exc:
            raise InvalidTokenError() from exc
        if claims.get("type") != ACCESS_TOKEN_TYPE:
            raise InvalidTokenError()
        return self._user_id(claims)

    def validate_expired_refresh_token(self, token: str) -> dict[str, Any]:
        """
        Verify a refresh token's signature while ignoring its expiry.

        Lifetime is not the gate for refresh tokens: a token is usable exactly
        while it is the one stored for its user.

        :param token: Encoded refresh JWT.
        :type token: str
        :returns: Decoded claims; ``claims["id"]`` is an ``int``.
        :rtype: dict[str, Any]
        :raises InvalidTokenError: When malformed, signed with another key,
            not a refresh token, or missing the ``id`` claim.
        """
        identity_claim = current_app.config.get("JWT_IDENTITY_CLAIM", "id")
        try:
            claims = jwt.decode(
                token,
                self._refresh_key(),
                algorithms=[self.algorithm],
                options={"verify_exp": False, "require": [identity_claim]},
            )
        except jwt.PyJWTError as exc:
            raise InvalidTokenError() from exc
        if claims.get("type") != REFRESH_TOKEN_TYPE:
            raise InvalidTokenError()
        claims[identity_claim] = self._user_id(claims)
        return claims

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _refresh_key() -> str:
        return cast(str, current_app.config["JWT_REFRESH_SECRET_KEY"])

    @staticmethod
    def _user_id(claims: dict[str, Any]) -> int:
        raw = claims.get(current_app.config.get("JWT_IDENTITY_CLAIM", "id"))
        if isinstance(raw, int) and not isinstance(raw, bool):
            return raw
        if isinstance(raw, str) and raw.isdigit():
            return int(raw)
        raise InvalidTokenError()
