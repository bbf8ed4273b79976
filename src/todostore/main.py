"""Application entry point for the todostore server."""

from todostore.app import App
from todostore.config import Config
from todostore.logging import setup_logging
from todostore.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
