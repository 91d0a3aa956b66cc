import logging
import logging.config

console_only_logger_config = {
    "handlers": ["console"],
    "propagate": False,
}


def setup_logging(level: str = "INFO", global_level: str = "WARNING"):
    """
    Send log records to the console.

    `level` applies to the minigrid_core loggers; DEBUG shows resets and
    episode endings. `global_level` applies to everything else.
    """
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "loggers": {
            "": {
                "level": global_level,
                "handlers": ["console"],
            },
            "minigrid_core": {
                "level": level,
                **console_only_logger_config,
            },
        }}
    )
