"""Tunable parameters for the excursion pincher."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PinchConfig:
    """Settings used by the refinement engine.

    Attributes:
        min_linear_length: A run of boundary vertices is only collapsed to a
            straight segment once its perimeter exceeds this length.
        max_linear_deviation: Maximum distance an intermediate vertex may lie
            from the straight line between the run's end points.
    """

    min_linear_length: float = 20.0
    max_linear_deviation: float = 1.0

    def __post_init__(self) -> None:
        if self.min_linear_length < 0:
            raise ValueError("min_linear_length must be non-negative")
        if self.max_linear_deviation < 0:
            raise ValueError("max_linear_deviation must be non-negative")


DEFAULT_CONFIG = PinchConfig()


__all__ = [
    "PinchConfig",
    "DEFAULT_CONFIG",
]
