# --- src/dcsim_core/log_config.py ---
import logging
import os
import sys

#: Environment variable that overrides the level chosen by the caller, e.g. DCSIM_LOG_LEVEL=DEBUG.
LOG_LEVEL_ENV_VAR = "DCSIM_LOG_LEVEL"


def _resolve_level(level):
    override = os.environ.get(LOG_LEVEL_ENV_VAR)
    if override:
        level = override
    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        # getLevelName returns "Level X" for names it does not know.
        return resolved if isinstance(resolved, int) else logging.INFO
    return level


def setup_logging(level=logging.INFO):
    """ Sends solver logs to stdout, one line per record. """
    log_formatter = logging.Formatter(
        "%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s"
    )
    root_logger = logging.getLogger()

    # Replace any handlers installed by a previous call.
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    root_logger.setLevel(_resolve_level(level))
    root_logger.addHandler(console_handler)
    logging.getLogger(__name__).debug(f"Logging configured at level {logging.getLevelName(root_logger.level)}.")
