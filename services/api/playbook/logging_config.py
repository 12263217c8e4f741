"""Logging setup shared by the API server and the provisioning command.

Every module logs through `logging.getLogger(__name__)`; this helper only
installs one stream handler with a consistent format on the root logger so the
API and the provisioning job emit the same line shape.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once.

    Args:
        level: Log level name (case-insensitive), e.g. "INFO" or "debug".
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, force=True)
