"""
Rentomatic - Management CLI
============================

What:  Orchestration commands for development, testing and production stacks.
Why:   Docker Compose, Postgres provisioning and the integration test run all
       need the same environment variables. This CLI loads them from one JSON
       file per configuration, then shells out.
How:   APPLICATION_CONFIG (default: development) selects
       <config-dir>/<APPLICATION_CONFIG>.json, a JSON array of
       {"name": ..., "value": ...} objects. Each entry is exported ONLY if the
       variable is not already set, so the real environment always wins.

Usage:
    rentomatic-manage compose up -d          docker compose -p development -f docker/development.yml up -d
    rentomatic-manage compose logs -f web    any arguments are forwarded verbatim
    rentomatic-manage init-postgres          CREATE DATABASE $APPLICATION_DB (idempotent)
    rentomatic-manage test -k rooms          compose up, wait, provision, pytest --integration, compose down

Exit codes mirror the wrapped process (docker compose, pytest).
"""

import asyncio
import logging
import os
import signal
import subprocess
from pathlib import Path
from typing import List, Sequence

import click
from pydantic import BaseModel, TypeAdapter, ValidationError
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from rentomatic.config import Settings
from rentomatic.exceptions import ConfigurationError
from rentomatic.logging_setup import setup_logging

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "APPLICATION_CONFIG"
DEFAULT_CONFIG = "development"
DEFAULT_CONFIG_DIR = "config"
DOCKER_DIR = "docker"

# Postgres SQLSTATE for "database ... already exists"
DUPLICATE_DATABASE_SQLSTATE = "42P04"


# ══════════════════════════════════════════════════════════════════════════
# Configuration files
# ══════════════════════════════════════════════════════════════════════════

class EnvironmentVariable(BaseModel):
    name: str
    value: str

    # Allow {"name": "POSTGRES_PORT", "value": 5433}
    model_config = {"coerce_numbers_to_str": True}


_CONFIGURATION_ADAPTER = TypeAdapter(List[EnvironmentVariable])


def current_config() -> str:
    return os.getenv(CONFIG_ENV_VAR, DEFAULT_CONFIG)


def read_json_configuration(config: str, config_dir: str = DEFAULT_CONFIG_DIR) -> List[EnvironmentVariable]:
    """
    Load <config_dir>/<config>.json.

    Raises:
        ConfigurationError: The file is missing, unreadable, or not a list
            of {"name", "value"} objects.
    """
    path = Path(config_dir) / f"{config}.json"
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            message=f"Cannot read configuration file {path}: {e.strerror or e}",
            path=str(path),
        ) from e

    try:
        return _CONFIGURATION_ADAPTER.validate_json(raw)
    except ValidationError as e:
        raise ConfigurationError(
            message=f"Invalid configuration file {path}: {e.error_count()} error(s)",
            path=str(path),
        ) from e


def setenv(name: str, value: str) -> bool:
    """Set an environment variable unless it is already set. Returns True if set."""
    if name in os.environ:
        logger.debug("Keeping %s from the environment", name)
        return False
    os.environ[name] = value
    return True


def configure_app(config: str, config_dir: str = DEFAULT_CONFIG_DIR) -> None:
    for variable in read_json_configuration(config, config_dir):
        setenv(variable.name, variable.value)


# ══════════════════════════════════════════════════════════════════════════
# Subprocesses
# ══════════════════════════════════════════════════════════════════════════

def docker_compose_cmdline(config: str, args: Sequence[str] = ()) -> List[str]:
    compose_file = os.path.join(DOCKER_DIR, f"{config}.yml")
    return ["docker", "compose", "-p", config, "-f", compose_file, *args]


def run_command(cmdline: Sequence[str]) -> int:
    """
    Run a child process and wait for it.

    Ctrl-C is forwarded to the child as SIGINT, then we wait again so the
    child can shut down cleanly (docker compose stops its containers).
    """
    logger.debug("Running: %s", " ".join(cmdline))
    process = subprocess.Popen(list(cmdline))
    try:
        process.wait()
    except KeyboardInterrupt:
        process.send_signal(signal.SIGINT)
        process.wait()
    return process.returncode


# ══════════════════════════════════════════════════════════════════════════
# Postgres provisioning
# ══════════════════════════════════════════════════════════════════════════

def is_duplicate_database_error(exc: DBAPIError) -> bool:
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate == DUPLICATE_DATABASE_SQLSTATE:
        return True
    return "already exists" in str(orig).lower()


async def create_application_database(settings: Settings) -> bool:
    """
    CREATE DATABASE <APPLICATION_DB> through the admin database.

    CREATE DATABASE cannot run inside a transaction, hence AUTOCOMMIT.

    Returns:
        True if the database was created, False if it already existed.

    Raises:
        DBAPIError: Any failure other than "database already exists".
    """
    engine = create_async_engine(
        settings.admin_database_url,
        isolation_level="AUTOCOMMIT",
        poolclass=NullPool,
    )
    try:
        async with engine.connect() as conn:
            name = conn.dialect.identifier_preparer.quote(settings.application_db)
            await conn.execute(text(f"CREATE DATABASE {name}"))
    except DBAPIError as e:
        if is_duplicate_database_error(e):
            logger.info(
                "The database %s already exists and will not be recreated",
                settings.application_db,
            )
            return False
        raise
    finally:
        await engine.dispose()

    logger.info("Created database %s", settings.application_db)
    return True


async def wait_for_postgres(settings: Settings, attempts: int = 30, delay: float = 1.0) -> None:
    """Block until the admin database accepts connections (SELECT 1)."""
    engine = create_async_engine(settings.admin_database_url, poolclass=NullPool)
    try:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=wait_fixed(delay),
            retry=retry_if_exception_type((OSError, DBAPIError)),
            before_sleep=before_sleep_log(logger, logging.INFO),
            reraise=True,
        ):
            with attempt:
                async with engine.connect() as conn:
                    await conn.execute(text("SELECT 1"))
    finally:
        await engine.dispose()
    logger.info("Postgres is accepting connections on %s:%d",
                settings.postgres_hostname, settings.postgres_port)


# ══════════════════════════════════════════════════════════════════════════
# Commands
# ══════════════════════════════════════════════════════════════════════════

def _configure_or_abort(config: str, config_dir: str) -> None:
    try:
        configure_app(config, config_dir)
    except ConfigurationError as e:
        raise click.ClickException(e.message) from e


def _provision(settings: Settings) -> None:
    try:
        asyncio.run(create_application_database(settings))
    except DBAPIError as e:
        logger.error("Database provisioning failed: %s", e.orig)
        raise click.ClickException(f"Database provisioning failed: {e.orig}") from e


@click.group()
@click.option(
    "--config-dir",
    envvar="APPLICATION_CONFIG_DIR",
    default=DEFAULT_CONFIG_DIR,
    show_default=True,
    type=click.Path(file_okay=False),
    help="Directory holding <config>.json environment files.",
)
@click.pass_context
def cli(ctx: click.Context, config_dir: str) -> None:
    """Rentomatic management commands."""
    setup_logging(os.getenv("LOG_LEVEL", "INFO"))
    ctx.ensure_object(dict)
    ctx.obj["config_dir"] = config_dir


@cli.command(context_settings={"ignore_unknown_options": True})
@click.argument("subcommand", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def compose(ctx: click.Context, subcommand: Sequence[str]) -> None:
    """Run docker compose for the current APPLICATION_CONFIG."""
    config = current_config()
    _configure_or_abort(config, ctx.obj["config_dir"])

    returncode = run_command(docker_compose_cmdline(config, subcommand))
    ctx.exit(returncode)


@cli.command("init-postgres")
@click.pass_context
def init_postgres(ctx: click.Context) -> None:
    """Create the application database; a no-op if it already exists."""
    _configure_or_abort(current_config(), ctx.obj["config_dir"])
    _provision(Settings())


@cli.command(context_settings={"ignore_unknown_options": True})
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def test(ctx: click.Context, args: Sequence[str]) -> None:
    """Run the test suite, integration tests included, against a throwaway stack."""
    os.environ[CONFIG_ENV_VAR] = "testing"
    _configure_or_abort("testing", ctx.obj["config_dir"])

    returncode = run_command(docker_compose_cmdline("testing", ["up", "-d"]))
    if returncode != 0:
        ctx.exit(returncode)

    try:
        settings = Settings()
        asyncio.run(wait_for_postgres(settings))
        _provision(settings)
        returncode = run_command(["pytest", "--integration", *args])
    finally:
        run_command(docker_compose_cmdline("testing", ["down"]))

    ctx.exit(returncode)


if __name__ == "__main__":
    cli()
