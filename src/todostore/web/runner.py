"""Uvicorn server runner with custom configuration."""

import copy

import structlog
import uvicorn
from uvicorn.config import LOGGING_CONFIG

from todostore.app import App
from todostore.config import Config
from todostore.web.server import create_fastapi_app

logger = structlog.get_logger(__name__)


def run_server(app: App, config: Config) -> None:
    """Run the Uvicorn server with custom logging configuration."""
    fastapi_app = create_fastapi_app(app, config)

    log_config = copy.deepcopy(LOGGING_CONFIG)
    log_config["formatters"]["access"]["fmt"] = '%(asctime)s - "%(request_line)s" %(status_code)s'
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s - %(levelname)s - %(message)s"

    logger.info("starting_server", url=f"http://{config.host}:{config.port}", data_path=config.data_path)
    uvicorn.run(fastapi_app, host=config.host, port=config.port, log_config=log_config, access_log=True)
