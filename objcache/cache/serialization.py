"""
objcache - Value Serialization

Pickle-based serialization shared by the out-of-process backends and by the
diagnostics payload size.
"""

import logging
import pickle
from typing import Any

logger = logging.getLogger(__name__)


def dumps(value: Any) -> bytes:
    """Serialize a value using pickle."""
    return pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL)


def loads(data: bytes) -> Any:
    """Deserialize bytes produced by dumps()."""
    return pickle.loads(data)


def payload_size(value: Any) -> int:
    """
    Serialized byte length of a value, as reported in diagnostics.

    Falsy values report 0. Values that cannot be pickled also report 0.
    """
    if not value:
        return 0

    try:
        return len(dumps(value))
    except (pickle.PicklingError, TypeError, AttributeError) as e:
        logger.debug(
            f"Could not measure payload of type {type(value).__name__}: {e}",
            extra={"value_type": type(value).__name__, "error": str(e)},
        )
        return 0
