"""Dash app factory for the Workout Mapper UI."""

import logging
from typing import Optional

from dash import Dash
import dash_bootstrap_components as dbc

from .layout import build_layout
from .callbacks import register_callbacks
from .session import SessionManager, default_session_factory
from .utils.config import WorkoutMapperConfig, get_config

logger = logging.getLogger(__name__)


def create_app(config: Optional[WorkoutMapperConfig] = None,
               manager: Optional[SessionManager] = None) -> Dash:
    """Create and configure the Dash application instance.

    Args:
        config: Configuration to use, the global one by default.
        manager: Session manager to drive, built from ``config`` by default.

    Returns:
        Dash: Configured Dash application.
    """
    config = config or get_config()
    config.validate_configuration()
    manager = manager or SessionManager(default_session_factory(config))

    app = Dash(
        __name__,
        title="Workout Mapper",
        external_stylesheets=[dbc.themes.BOOTSTRAP],
        suppress_callback_exceptions=True,
    )

    app.layout = build_layout()
    register_callbacks(app, manager)
    logger.info("Workout Mapper app created, snapshot at %s", config.snapshot_path)

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    _config = get_config()
    _app = create_app(_config)
    _app.run(debug=_config.server.debug, host=_config.server.host, port=_config.server.port)
