"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

from flask import Flask

from aquatrack.core.config import BaseConfig, get_config
from aquatrack.core.logger import configure_logging, init_app as init_logging


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    :param config: Config object, import path, or ``None`` to select one from
        ``APP_ENV``.
    :param instance_relative_config: Look for overrides in the instance folder.
    :param instance_config_filename: Override file read with ``from_pyfile``.
    :returns: Ready-to-serve application.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from aquatrack.core import proxy

    proxy.init_app(app)

    from aquatrack.core import extensions

    extensions.init_app(app)

    init_logging(app)

    from aquatrack.core import cors

    cors.init_app(app)

    from aquatrack.api import init_app as init_api

    init_api(app)

    from aquatrack.core import errors

    errors.init_app(app)

    from aquatrack import cli as app_cli

    app_cli.init_app(app)

    return app
