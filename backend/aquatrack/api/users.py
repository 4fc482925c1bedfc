"""Account endpoints: registration, session lifecycle and profile."""

from __future__ import annotations

from flask import Blueprint

from aquatrack.api.deps import current_user_id, json_body, json_response, require_auth, timing
from aquatrack.schemas import (
    LoginResponseSchema,
    LoginSchema,
    MessageSchema,
    ProfileUpdateSchema,
    RefreshSchema,
    RegisteredSchema,
    RegisterSchema,
    TokenPairSchema,
    UserProfileSchema,
)
from aquatrack.services import (
    AuthService,
    IdentityService,
    LoginIn,
    ProfileUpdateIn,
    RefreshIn,
    RegisterIn,
)

bp = Blueprint("users", __name__)

register_schema = RegisterSchema()
registered_schema = RegisteredSchema()
login_schema = LoginSchema()
login_response_schema = LoginResponseSchema()
refresh_schema = RefreshSchema()
token_pair_schema = TokenPairSchema()
profile_schema = UserProfileSchema()
profile_update_schema = ProfileUpdateSchema()
message_schema = MessageSchema()


@bp.post("/register")
@timing
def register():
    """Create an account and return its id and email."""

    data = register_schema.load(json_body())
    created = AuthService().register(RegisterIn(**data))
    return json_response(registered_schema.dump(created), status=201)


@bp.post("/login")
@timing
def login():
    """Authenticate credentials and issue a token pair."""

    data = login_schema.load(json_body())
    result = AuthService().login(LoginIn(**data))
    return json_response(login_response_schema.dump(result))


@bp.post("/refresh")
@timing
def refresh():
    """Rotate the refresh token and issue a new pair."""

    data = refresh_schema.load(json_body())
    pair = AuthService().refresh(RefreshIn(**data))
    return json_response(token_pair_schema.dump(pair))


@bp.post("/logout")
@require_auth
@timing
def logout():
    """Revoke the caller's refresh token."""

    AuthService().logout(current_user_id())
    return json_response(message_schema.dump({"message": "Logged out successfully"}))


@bp.get("/current")
@require_auth
@timing
def current():
    """Return the authenticated user's profile."""

    profile = IdentityService().get_current(current_user_id())
    return json_response(profile_schema.dump(profile))


@bp.put("/update")
@require_auth
@timing
def update():
    """Apply a partial profile update."""

    data = profile_update_schema.load(json_body())
    profile = IdentityService().update_profile(current_user_id(), ProfileUpdateIn(**data))
    return json_response(profile_schema.dump(profile))
