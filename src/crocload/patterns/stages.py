"""Stage-based load profiles.

A stage is ``(duration, target)``: over *duration* seconds the number of
virtual users moves linearly from the previous stage's target to this
stage's *target*.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from crocload._internal.errors import ConfigError
from crocload.patterns.base import _validate_non_negative, _validate_positive
from crocload.patterns.composite import CompositePattern
from crocload.patterns.constant import ConstantPattern
from crocload.patterns.ramp import RampPattern

if TYPE_CHECKING:
    from collections.abc import Sequence

    from crocload.patterns.base import LoadPattern


@dataclass(frozen=True)
class Stage:
    """One segment of a load profile.

    Attributes:
        duration: Length of the stage in seconds.
        target: Virtual users to reach by the end of the stage.
    """

    duration: float
    target: int


# Ramp to 5 VUs over 30s, hold 5 for 30s, ramp down to 0 over 30s.
DEFAULT_STAGES: tuple[Stage, ...] = (
    Stage(duration=30.0, target=5),
    Stage(duration=30.0, target=5),
    Stage(duration=30.0, target=0),
)


def stages_to_pattern(stages: Sequence[Stage], start_users: int = 0) -> CompositePattern:
    """Build a :class:`CompositePattern` from a list of stages.

    Args:
        stages: Stages in order. Must not be empty.
        start_users: Virtual users before the first stage.

    Returns:
        A composite of ramps (target changes) and holds (target unchanged).

    Raises:
        ConfigError: If *stages* is empty or a stage is out of range.
    """
    if not stages:
        msg = "a load profile needs at least one stage"
        raise ConfigError(msg)
    _validate_non_negative(start_users, "start_users")

    phases: list[tuple[LoadPattern, float]] = []
    current = start_users
    for i, stage in enumerate(stages):
        _validate_positive(stage.duration, f"stages[{i}].duration")
        _validate_non_negative(stage.target, f"stages[{i}].target")
        pattern: LoadPattern
        if stage.target == current:
            pattern = ConstantPattern(users=stage.target)
        else:
            pattern = RampPattern(
                start_users=current,
                end_users=stage.target,
                ramp_duration=stage.duration,
            )
        phases.append((pattern, stage.duration))
        current = stage.target
    return CompositePattern(phases)


def default_load_profile() -> CompositePattern:
    """Return the scenario's standard ramp-up, hold, ramp-down profile."""
    return stages_to_pattern(DEFAULT_STAGES)
