"""crocload: a CRUD load-test scenario for the crocodile API."""

from __future__ import annotations

from crocload.client.http_client import HttpClient, RequestMetric
from crocload.engine.virtual_user import run_virtual_user
from crocload.metrics.custom import Counter, Rate, Trend
from crocload.metrics.scenario_metrics import ScenarioMetrics
from crocload.patterns.stages import DEFAULT_STAGES, Stage, default_load_profile
from crocload.scenario.crocodiles import CrocodileScenario, IterationResult, Step, StepOutcome

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_STAGES",
    "CrocodileScenario",
    "Counter",
    "HttpClient",
    "IterationResult",
    "Rate",
    "RequestMetric",
    "ScenarioMetrics",
    "Stage",
    "Step",
    "StepOutcome",
    "Trend",
    "default_load_profile",
    "run_virtual_user",
]
