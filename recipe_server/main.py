"""recipe-server command-line entry point."""
import argparse
import logging
import sys

import uvicorn
from pydantic import ValidationError

from .app import create_app
from .config import LOG_LEVELS, Settings
from .db import init_db, make_engine, make_sessionmaker
from .errors import InvalidConfiguration, RecipeImportError, StoreIOError
from .recipes import seed_from_file


log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _build_parser():
    parser = argparse.ArgumentParser(
        prog="recipe-server",
        description="Serve random recipes as HTML and JSON",
    )
    parser.add_argument("--init-from", metavar="PATH",
                        help="Seed the database from a JSON recipe file and exit")
    parser.add_argument("--database-url", metavar="URL",
                        help="Database connection string (default: $RECIPE_DATABASE_URL)")
    parser.add_argument("--host", help="Address to listen on")
    parser.add_argument("--port", type=int, help="Port to listen on")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS,
                        help="Logging level (default: $RECIPE_LOG_LEVEL or INFO)")
    return parser


def _settings_from_args(args) -> Settings:
    overrides = {
        "database_url": args.database_url,
        "host": args.host,
        "port": args.port,
        "log_level": args.log_level,
    }
    return Settings(**{k: v for k, v in overrides.items() if v is not None})


def init_from(settings: Settings, path) -> int:
    engine = make_engine(settings.database_url)
    try:
        init_db(engine)
        db = make_sessionmaker(engine)()
        try:
            return seed_from_file(db, path)
        finally:
            db.close()
    finally:
        engine.dispose()


def main(argv=None):
    args = _build_parser().parse_args(argv)
    try:
        settings = _settings_from_args(args)
    except ValidationError as e:
        logging.basicConfig(format=LOG_FORMAT)
        log.error("invalid configuration: %s", e)
        return 2
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    try:
        if args.init_from:
            try:
                added = init_from(settings, args.init_from)
            except RecipeImportError as e:
                log.error("seeding failed: %s", e)
                return 1
            log.info("seeded %d recipe(s) from %s", added, args.init_from)
            return 0

        app = create_app(settings)
    except (InvalidConfiguration, StoreIOError) as e:
        log.error("startup failed: %s", e)
        return 2

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
