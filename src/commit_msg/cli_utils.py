"""Shared CLI utility functions for commit-msg."""

import logging
import sys


def setup_logging(log: str, module_name: str = __name__) -> logging.Logger:
    """Configure logging for a CLI command based on the --log option value.

    Args:
        log: Value of the --log CLI option.  One of "none", "INFO", "DEBUG"
             (case-insensitive).  "none" keeps warnings visible so that
             fallbacks taken during a commit are not silent.
        module_name: The ``__name__`` of the calling module, used to create
                     a properly-named logger.

    Returns:
        A configured :class:`logging.Logger` for the calling module.

    Example::

        logger = setup_logging(log, __name__)
    """
    log_level = logging.WARNING if log.upper() == "NONE" else getattr(logging, log.upper())

    logging.basicConfig(
        level=log_level,
        format="[%(levelname)s] %(filename)s:%(lineno)d - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
    # Propagate the level to the package namespace so all sub-module
    # loggers pick it up without extra configuration.
    logging.getLogger("commit_msg").setLevel(log_level)

    module_logger = logging.getLogger(module_name)
    if log_level < logging.WARNING:
        module_logger.info("Logging enabled at %s level", logging.getLevelName(log_level))
    return module_logger
