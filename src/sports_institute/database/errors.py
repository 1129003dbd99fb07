from __future__ import annotations

import logging
from contextlib import contextmanager

import mysql.connector

from ..core.exceptions import RemoteOperationError


@contextmanager
def remote_operation(description: str, logger: logging.Logger):
    """Turn driver failures into RemoteOperationError for the caller."""
    try:
        yield
    except mysql.connector.Error as e:
        logger.error("Store call failed (%s): %s", description, e)
        raise RemoteOperationError(f"Could not {description}, please try again") from e
