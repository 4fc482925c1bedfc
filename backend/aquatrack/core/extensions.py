"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from flask import Flask
from flask_jwt_extended import JWTManager
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

# Global naming convention so constraint names are stable across dialects
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
jwt = JWTManager()


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy and JWT extensions.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`aquatrack.models` package so SQLAlchemy metadata knows every
        table before ``create_all`` runs.
    """
    db.init_app(app)

    from aquatrack import models as _models  # noqa: F401

    jwt.init_app(app)

    from aquatrack.core.errors import register_jwt_handlers

    register_jwt_handlers(jwt)
