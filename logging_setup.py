import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(app):
    """Give ``app.logger`` a single stderr handler at ``LOG_LEVEL``.

    Existing handlers are removed first so building several apps in one
    process (tests, reloader) does not print every line twice.
    """
    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    for h in list(app.logger.handlers):
        app.logger.removeHandler(h)
    app.logger.addHandler(handler)
    app.logger.setLevel(level)
