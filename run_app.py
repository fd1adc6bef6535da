"""Entrypoint to run the Workout Mapper Dash application."""

import logging

from workout_mapper.app import create_app
from workout_mapper.utils.config import get_config

logging.basicConfig(level=logging.INFO)

config = get_config()
app = create_app(config)


if __name__ == "__main__":
    app.run(debug=config.server.debug, host=config.server.host, port=config.server.port)
