"""Load profiles for the crocodile scenario.

Every pattern implements :class:`LoadPattern`: ``users_at(t)`` gives the
target number of virtual users at time *t*, and ``iter_concurrency`` samples
that at a fixed tick. Stages (``duration``, ``target``) are the usual way to
describe a profile; :func:`stages_to_pattern` turns them into a pattern.
"""

from __future__ import annotations

from crocload.patterns.base import LoadPattern
from crocload.patterns.composite import CompositePattern
from crocload.patterns.constant import ConstantPattern
from crocload.patterns.ramp import RampPattern
from crocload.patterns.stages import (
    DEFAULT_STAGES,
    Stage,
    default_load_profile,
    stages_to_pattern,
)

__all__ = [
    "DEFAULT_STAGES",
    "CompositePattern",
    "ConstantPattern",
    "LoadPattern",
    "RampPattern",
    "Stage",
    "default_load_profile",
    "stages_to_pattern",
]
