"""Command line interface."""

from contextlib import ExitStack
from typing import Any

import click

from storeconfig.config.settings import Settings
from storeconfig.database.mysql import MysqlClient
from storeconfig.domain.config import Scope
from storeconfig.domain.errors import StoreConfigError
from storeconfig.formatting.value_formatter import ValueFormatter
from storeconfig.logger.logger import get_logger, init_logger
from storeconfig.logger.types import Category, Level, param
from storeconfig.logger.writer import StderrWriter
from storeconfig.pipeline.config_get import ConfigGetPipeline, ConfigGetRequest
from storeconfig.render.table import FORMATS
from storeconfig.repository.config_repository import ConfigDataRepository, ConfigStore
from storeconfig.security.encryptor import MagentoDecryptor

GET_HELP = """Get a store config item.

If PATH is not set, all available config items will be listed.
PATH may contain wildcards (*). If PATH ends with a trailing slash,
all child items will be listed, e.g.

\b
    config:store:get web/
is the same as
    config:store:get web/*
"""


class EchoSink:
    """Writes lines to stdout."""

    def writeln(self, line: str) -> None:
        click.echo(line)


def _build_formatter(settings: Settings, decrypt: bool) -> ValueFormatter:
    if decrypt and settings.crypt.is_configured:
        return ValueFormatter(MagentoDecryptor(settings.crypt.key or ""))
    return ValueFormatter()


@click.group()
@click.version_option(package_name="storeconfig")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Inspect and export Magento store configuration."""
    settings = Settings()
    init_logger(
        service_name=settings.service_name,
        environment=settings.environment,
        writer=StderrWriter(Level.parse(settings.log_level, Level.WARN)),
    )
    get_logger().with_category(Category.CLI).debug(
        "Starting storeconfig",
        param("environment", settings.environment),
        param("version", settings.service_version),
        param("command", ctx.invoked_subcommand),
    )
    ctx.ensure_object(dict)
    ctx.obj.setdefault("settings", settings)


@cli.command("config:store:get", help=GET_HELP)
@click.argument("path", required=False)
@click.option(
    "--scope",
    type=click.Choice([scope.value for scope in Scope]),
    help="The config value's scope (default, websites, stores)",
)
@click.option("--scope-id", type=int, help="The config value's scope ID")
@click.option("--decrypt", is_flag=True, help="Decrypt the config value using the crypt key")
@click.option("--update-script", is_flag=True, help="Output as update script lines")
@click.option("--magerun-script", is_flag=True, help="Output for usage with config:store:set")
@click.option(
    "--format",
    "table_format",
    help=f"Output Format. One of [{','.join(FORMATS)}]",
)
@click.pass_obj
def config_store_get(
    obj: dict[str, Any],
    path: str | None,
    scope: str | None,
    scope_id: int | None,
    decrypt: bool,
    update_script: bool,
    magerun_script: bool,
    table_format: str | None,
) -> None:
    settings: Settings = obj["settings"]
    logger = get_logger().with_category(Category.CLI)
    request = ConfigGetRequest(
        path=path,
        scope=Scope(scope) if scope else None,
        scope_id=scope_id,
        decrypt=decrypt,
        update_script=update_script,
        magerun_script=magerun_script,
        table_format=table_format,
    )

    try:
        with ExitStack() as stack:
            store: ConfigStore | None = obj.get("store")
            if store is None:
                client = stack.enter_context(MysqlClient(settings.database))
                store = ConfigDataRepository(client, settings.database.table_prefix)

            pipeline = ConfigGetPipeline(
                store=store,
                formatter=_build_formatter(settings, decrypt),
                sink=obj.get("sink") or EchoSink(),
            )
            pipeline.run(request)
    except StoreConfigError as e:
        logger.error("config:store:get failed", e, param("path", path))
        raise click.ClickException(str(e)) from e
