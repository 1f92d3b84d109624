import logging.config

from intlcat.settings import PRODUCTION

__all__ = ("LOGGING", "configure")


LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plaintext": {"format": ("%(levelname)s %(asctime)s %(name)s %(message)s")},
        "json": {"class": "intlcat.logging.json.JsonFormatter"},
    },
    "handlers": {
        "console": {
            "level": "DEBUG",
            "class": "logging.StreamHandler",
            "formatter": "json" if PRODUCTION else "plaintext",
        }
    },
    "loggers": {
        "": {"handlers": ["console"], "level": "INFO", "propagate": True},
        # One line per file and per translation is too much by default.
        "intlcat.i18n.catalogs": {"level": "INFO"},
        "babel": {"level": "WARNING"},
    },
}


def configure(level: str = None) -> None:
    """Install LOGGING. `level` overrides the level of the `intlcat` loggers."""
    logging.config.dictConfig(LOGGING)
    if level:
        for name in ("intlcat", "intlcat.i18n.catalogs"):
            logging.getLogger(name).setLevel(level)
