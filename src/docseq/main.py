"""Entry point for the `docseq` command."""

import structlog

from docseq.app import App
from docseq.config import Config
from docseq.logging import setup_logging
from docseq.web.runner import run_server

logger = structlog.get_logger(__name__)


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    logger.info(
        "server_starting",
        host=config.host,
        port=config.port,
        counters_record_id=config.counters_record_id,
        git_commit_hash=config.git_commit_hash,
    )
    run_server(App(config), config)


if __name__ == "__main__":
    main()
