"""Application entry point for the blognote backend server."""

from blognote.app import App
from blognote.config import Config
from blognote.logging import setup_logging
from blognote.web.runner import run_server


def main() -> None:
    config = Config()  # type: ignore[call-arg]
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
