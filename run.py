"""Server entry point."""

import logging
import os
import sys

from waitress import serve

from petfeeder import create_app
from petfeeder.config import get_settings
from petfeeder.consts import DEFAULT_BACKEND_PORT
from petfeeder.database import check_db_connection


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    settings = get_settings()
    app = create_app(settings)

    # Nothing can be served without the database
    with app.app_context():
        if not check_db_connection():
            app.logger.critical("Cannot connect to database, exiting")
            sys.exit(1)

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", str(DEFAULT_BACKEND_PORT)))

    if settings.DEBUG:
        app.logger.info("Running in debug mode with Flask development server")
        app.run(host=host, port=port, debug=True)
    else:
        app.logger.info("Running in production mode with Waitress")
        serve(app, host=host, port=port, threads=4)


if __name__ == "__main__":
    main()
