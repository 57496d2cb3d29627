"""
CLI Dev Command

Development start: the same application, supervised by uvicorn's
file-watching reloader. Each reload re-imports the app through the
create_app factory in a fresh worker process, so overrides are handed
over through the environment.

Usage:
    hello-api dev
    hello-api dev --reload-dir api --reload-dir core
"""

from __future__ import annotations

import logging
import os
from argparse import Namespace

import uvicorn

from core.config.runtime import LOG_LEVEL_ENV, PORT_ENV
from hello_cli.commands.start import EXIT_SUCCESS, resolve_server_config


logger = logging.getLogger(__name__)


APP_FACTORY = "api.app:create_app"


def dev_cmd(args: Namespace) -> int:
    config = resolve_server_config(args)

    os.environ[PORT_ENV] = str(config.port)
    os.environ[LOG_LEVEL_ENV] = config.log_level

    reload_dirs = args.reload_dir or None
    logger.info(
        f"Starting dev server on {config.base_url} "
        f"(watching {', '.join(reload_dirs) if reload_dirs else 'current directory'})"
    )
    uvicorn.run(
        APP_FACTORY,
        factory=True,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        reload=True,
        reload_dirs=reload_dirs,
    )
    return EXIT_SUCCESS
