import logging

import typer

import bitbucket_server.client.file.cli as file

from .config import settings

logger = logging.getLogger(__name__)


def init():
    logging.basicConfig(level=settings.log_level)


cli = typer.Typer(no_args_is_help=True, callback=init)

cli.add_typer(file.cli, name="file")
