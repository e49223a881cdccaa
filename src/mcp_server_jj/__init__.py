import asyncio
import logging
import os
import sys
from datetime import datetime
from pathlib import Path

import click
from pydantic import ValidationError

from .config import ServerConfig, load_environment_variables
from .logging_config import configure_logging
from .server import serve


@click.command()
@click.option("--repository", "-r", type=Path, help="Default jj workspace path")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
@click.option("--jj-binary", help="jj executable to run (default: jj on PATH)")
@click.option("--timeout", type=float, help="Seconds before a jj invocation is abandoned")
@click.option(
    "--enable-file-logging",
    is_flag=True,
    help="Enable logging to file in logs/ directory",
)
def main(
    repository: Path | None,
    verbose: int,
    jj_binary: str | None,
    timeout: float | None,
    enable_file_logging: bool,
) -> None:
    """MCP jj Server - Jujutsu functionality for MCP"""
    load_environment_variables(repository)

    log_level = None
    if verbose == 1:
        log_level = "INFO"
    elif verbose >= 2:
        log_level = "DEBUG"

    try:
        config = ServerConfig.from_env(
            repository=repository,
            jj_binary=jj_binary,
            timeout_seconds=timeout,
            log_level=log_level,
        )
    except ValidationError as e:
        raise click.BadParameter(str(e)) from e

    log_file = None
    if enable_file_logging:
        session_id = os.environ.get(
            "MCP_SESSION_ID", datetime.now().strftime("%Y%m%d_%H%M%S")
        )
        logs_dir = (config.repository or Path.cwd()) / "logs"
        log_file = logs_dir / f"mcp_jj_debug-{session_id}.log"
        print(f"Debug logging enabled: {log_file}", file=sys.stderr)

    configure_logging(config.log_level, log_file=log_file)
    logging.getLogger(__name__).debug(f"Configuration: {config}")

    asyncio.run(serve(config))


if __name__ == "__main__":
    main()
