"""Application entry point."""

import uvicorn

from streamboard.config import Config
from streamboard.app import create_app
from streamboard.logging_setup import configure_logging

# Configure logging
configure_logging()


def main():
    """Run the application."""
    config = Config.from_env()
    app = create_app(config)

    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
    )


if __name__ == "__main__":
    main()
