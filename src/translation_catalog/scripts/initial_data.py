"""Seed the catalog with the configured locales and tags.

Safe to run repeatedly: both registries create only what is missing.
"""

import logging

from sqlmodel import Session

from translation_catalog.core.config import settings
from translation_catalog.core.db import engine
from translation_catalog.locales import create_or_retrieve_locales_by_code
from translation_catalog.tags import create_or_retrieve_tags

# Imported so the Translation mapper is configured before any session use
from translation_catalog.translations.models import Translation  # noqa: F401

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def init(session: Session) -> None:
    locales = create_or_retrieve_locales_by_code(
        session=session, codes=settings.SEED_LOCALE_CODES
    )
    logger.info(f"Locales available: {', '.join(locale.code for locale in locales)}")

    tags = create_or_retrieve_tags(session=session, names=settings.SEED_TAG_NAMES)
    logger.info(f"Tags available: {', '.join(tag.name for tag in tags)}")


def main() -> None:
    logger.info("Creating initial data")
    with Session(engine) as session:
        init(session)
    logger.info("Initial data created")


if __name__ == "__main__":
    main()
