"""Core type definitions for tickwork."""

from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta
from typing import TypeAlias

Action: TypeAlias = Callable[[], object]
"""Zero-argument callable submitted as a unit of work. Return value is ignored."""

Cancel: TypeAlias = Callable[[], None]
"""Handle returned by delayed scheduling. Calling it removes the task if still pending."""

DurationLike: TypeAlias = timedelta | int | float
"""A duration as a timedelta, or a number of seconds."""

ZERO = timedelta(0)

EPOCH = timedelta.min
"""Default starting clock: the most negative representable timedelta."""


def as_duration(value: DurationLike) -> timedelta:
    """Normalize a duration given as timedelta or seconds.

    Args:
        value: A timedelta, or an int/float number of seconds.

    Returns:
        The equivalent timedelta.

    Raises:
        TypeError: If value is neither a timedelta nor a real number.
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise TypeError(f"Expected timedelta or seconds, got {type(value).__name__}")
    return timedelta(seconds=value)
