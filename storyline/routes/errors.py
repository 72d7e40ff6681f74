"""Translate service errors into HTTP errors."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import HTTPException

from storyline.errors import InvalidChoiceError, NotFoundError, TransactionFailedError

logger = logging.getLogger(__name__)


@contextmanager
def http_errors() -> Iterator[None]:
    """NotFound → 404, InvalidChoice → 400, TransactionFailed → 500."""
    try:
        yield
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    except InvalidChoiceError as e:
        raise HTTPException(400, str(e))
    except TransactionFailedError as e:
        logger.error("Transaction failed: %s", e)
        raise HTTPException(500, "Could not save game state")
