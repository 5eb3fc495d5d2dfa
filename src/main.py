#!/usr/bin/env python3
"""
Cocktail Companion
Loads the cocktail catalog through the client core and prints it
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add src and the project root to Python path
sys.path.insert(0, str(Path(__file__).parent))
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import Settings
from companion.context import AppContext
from state.cocktails import fetch_cocktails
from state.ingredients import fetch_ingredients
from state.lifecycle import AsyncStatus
from state.selectors import (
    get_cocktails_list_error,
    get_cocktails_list_status,
    select_all_cocktails,
    select_cocktail_name,
    select_ingredients_by_category,
    select_language,
)

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings):
    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.log_file)
        ]
    )


async def main():
    """Main entry point for the cocktail companion client"""
    settings = Settings()
    configure_logging(settings)

    try:
        async with AppContext.create(settings) as context:
            store = context.store
            await asyncio.gather(
                store.run(fetch_cocktails),
                store.run(fetch_ingredients),
            )

            if get_cocktails_list_status(store.state) != AsyncStatus.SUCCEEDED:
                logger.error(f"Could not load cocktails: {get_cocktails_list_error(store.state)}")
                return 1

            language = select_language(store.state)
            cocktails = select_all_cocktails(store.state)
            logger.info(f"Loaded {len(cocktails)} cocktails")
            for cocktail in cocktails:
                print(f"{cocktail.get('cocktail_id')}: {select_cocktail_name(cocktail, language)}")

            for category, ingredients in select_ingredients_by_category(store.state, language).items():
                logger.info(f"{category or 'Other'}: {len(ingredients)} ingredient(s)")

    except KeyboardInterrupt:
        logger.info("Shutdown requested by user")
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        raise
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
