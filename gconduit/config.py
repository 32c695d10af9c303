"""Process-wide optimization settings for Graph Conduit.

BFS-family entry points consult these settings once, at call entry, to decide
whether to run the CSR + direction-optimized engine. The defaults can be
toggled via configure_optimizations(...) or the GCONDUIT_OPTIMIZED environment
variable.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Iterator, Optional

from .exceptions import ConfigurationError

_OPTIMIZED_ENV_VAR = "GCONDUIT_OPTIMIZED"

DEFAULT_ALPHA = 15.0
DEFAULT_BETA = 18.0


@dataclass(frozen=True)
class OptimizationConfig:
    """
    Immutable snapshot of the optimization settings.

    Attributes:
        enabled: Whether BFS-family calls use the direction-optimized engine.
        alpha: Top-down to bottom-up switch divisor; switch when
            ``frontier > unvisited / alpha``.
        beta: Bottom-up to top-down switch divisor; switch back when
            ``frontier < vertex_count / beta``.
    """

    enabled: bool = False
    alpha: float = DEFAULT_ALPHA
    beta: float = DEFAULT_BETA

    def __post_init__(self) -> None:
        validate_thresholds(self.alpha, self.beta)


def validate_thresholds(alpha: float, beta: float) -> None:
    """Raise ConfigurationError unless alpha and beta are positive numbers."""
    if not alpha > 0:
        raise ConfigurationError(f"alpha must be positive, got {alpha}")
    if not beta > 0:
        raise ConfigurationError(f"beta must be positive, got {beta}")


def _default_config() -> OptimizationConfig:
    enabled = os.getenv(_OPTIMIZED_ENV_VAR, "0").lower() in ("1", "true", "yes", "on")
    return OptimizationConfig(enabled=enabled)


_config: OptimizationConfig = _default_config()


def get_optimization_config() -> OptimizationConfig:
    """
    Return the current optimization settings.

    Returns:
        The active OptimizationConfig.
    """
    return _config


def configure_optimizations(
    enabled: bool,
    alpha: Optional[float] = None,
    beta: Optional[float] = None,
) -> OptimizationConfig:
    """
    Set the process-wide optimization settings.

    Calling it twice with the same arguments leaves the same state. Omitted
    thresholds keep their current values. Calls already running keep the
    settings they started with.

    Args:
        enabled: Whether BFS-family calls use the direction-optimized engine.
        alpha: Optional new top-down to bottom-up divisor.
        beta: Optional new bottom-up to top-down divisor.

    Returns:
        The new active OptimizationConfig.

    Raises:
        ConfigurationError: If alpha or beta is not positive.

    Example:
        >>> from gconduit import configure_optimizations
        >>> configure_optimizations(True, alpha=14.0)
        OptimizationConfig(enabled=True, alpha=14.0, beta=18.0)
    """
    global _config
    changes: dict = {"enabled": bool(enabled)}
    if alpha is not None:
        changes["alpha"] = float(alpha)
    if beta is not None:
        changes["beta"] = float(beta)
    _config = replace(_config, **changes)
    return _config


def reset_optimizations() -> OptimizationConfig:
    """
    Restore the default settings.

    GCONDUIT_OPTIMIZED is read again on every call, so an environment change
    made after import takes effect here. Thresholds return to DEFAULT_ALPHA
    and DEFAULT_BETA.
    """
    global _config
    _config = _default_config()
    return _config


@contextmanager
def optimization_context(
    enabled: bool = True,
    alpha: Optional[float] = None,
    beta: Optional[float] = None,
) -> Iterator[OptimizationConfig]:
    """
    Context manager to temporarily override the optimization settings.

    Example:
        >>> with optimization_context(True):
        ...     result = bfs(graph, "A")  # direction-optimized engine
    """
    global _config
    prev = _config
    try:
        yield configure_optimizations(enabled, alpha=alpha, beta=beta)
    finally:
        _config = prev


__all__ = [
    "DEFAULT_ALPHA",
    "DEFAULT_BETA",
    "OptimizationConfig",
    "configure_optimizations",
    "get_optimization_config",
    "optimization_context",
    "reset_optimizations",
    "validate_thresholds",
]
