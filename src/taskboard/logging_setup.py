from __future__ import annotations

import logging
import sys

_HANDLER_NAME = "taskboard-console"


def setup_logging(*, level: str | int = logging.INFO) -> None:
    """Attach one console handler to the ``taskboard`` logger.

    Safe to call more than once (every ``create_app()`` calls it); the root
    logger is left alone so test harnesses can still capture records.
    """
    logger = logging.getLogger("taskboard")
    logger.setLevel(level if isinstance(level, int) else str(level).upper())

    if any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)
