"""
LMS Seeder - CLI entrypoint

    lms-seeder users   # upsert the administrative/test accounts
    lms-seeder demo    # seed the demo course and assessments
"""
import asyncio
import logging
import sys

import click

from lms_seeder.core.config import ConfigurationError, Settings, load_settings
from lms_seeder.core.store import StoreError
from lms_seeder.tasks import seed_demo, seed_users

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 78  # sysexits EX_CONFIG


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stdout)


def _settings_or_exit() -> Settings:
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        _configure_logging("INFO")
        logger.error("%s", exc)
        sys.exit(EXIT_CONFIG)
    _configure_logging(settings.LOG_LEVEL)
    return settings


@click.group()
def cli():
    """Seed the LMS backing store with fixed accounts and demo content."""


@cli.command("users")
def users_command():
    """Upsert the super-admin, admin and learner accounts."""
    settings = _settings_or_exit()
    report = asyncio.run(seed_users.run(settings))
    if not report.ok:
        logger.error("%d of %d users failed to seed", len(report.failed),
                     len(report.failed) + len(report.succeeded))
        sys.exit(EXIT_FAILED)


@cli.command("demo")
def demo_command():
    """Seed a demo course with practice and test assessments (MCQ + coding)."""
    settings = _settings_or_exit()
    try:
        asyncio.run(seed_demo.run(settings))
    except StoreError as exc:
        logger.error("Demo seeding failed: %s", exc.message)
        sys.exit(EXIT_FAILED)


if __name__ == "__main__":
    cli()
