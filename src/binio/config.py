"""Runtime configuration for binio.

The active configuration lives in a context variable, so each thread (and
each asyncio task) sees its own value. Combinators read it at call time,
so changing it affects combinators that were built earlier.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import Any, Iterator

logger = logging.getLogger(__name__)

ENV_CHECK_ROUNDTRIP = "BINIO_CHECK_ROUNDTRIP"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class CodecConfig:
    """Configuration for combinator behaviour.

    Attributes:
        check_roundtrip: Verify on every decode through ``Combinator.map`` that
            ``backward(forward(x)) == x``. Catches conversion pairs that are not
            exact inverses, at the cost of one extra conversion per value.
            Intended for development and tests (default False).
    """

    check_roundtrip: bool = False

    @classmethod
    def from_env(cls) -> CodecConfig:
        """Build a configuration from ``BINIO_*`` environment variables."""
        raw = os.environ.get(ENV_CHECK_ROUNDTRIP, "")
        return cls(check_roundtrip=raw.strip().lower() in _TRUTHY)


_active: ContextVar[CodecConfig] = ContextVar("binio_config", default=CodecConfig.from_env())


def get_config() -> CodecConfig:
    """Return the configuration active in the current context."""
    return _active.get()


def set_config(config: CodecConfig) -> None:
    """Replace the configuration for the current context."""
    logger.debug("binio config set to %s", config)
    _active.set(config)


@contextmanager
def configure(**overrides: Any) -> Iterator[CodecConfig]:
    """Temporarily override fields of the active configuration.

    The override is visible only in the current thread or task.

    Example:
        >>> with configure(check_roundtrip=True):
        ...     read(stream, my_combinator)
    """
    config = replace(get_config(), **overrides)
    logger.debug("binio config set to %s", config)
    token = _active.set(config)
    try:
        yield config
    finally:
        _active.reset(token)
