"""Operators: pluggable per-cycle behaviour.

This package implements the operator pipeline:
- Operator: the change(state) protocol every operator satisfies
- CycleStopOperator: stop condition at a target cycle
- SexualReproduction / NoGenomeSexualReproduction: offspring creation
- KillOlderGenerations: culling of previous generations
- StatisticsOperator / GenomeCountStatistics / SexStatistics: per-cycle statistics
- ObservableOperator / EventSink: push cycle state to subscribers
- OperatorRegistry: build operators by name
"""

from __future__ import annotations

from metis.operators.base import CycleStopOperator, Operator
from metis.operators.culling import KillOlderGenerations
from metis.operators.observable import EventSink, ObservableOperator
from metis.operators.registry import OperatorRegistry
from metis.operators.reproduction import (
    NoGenomeSexualReproduction,
    SexualReproduction,
    reproduce_offspring,
)
from metis.operators.statistics import (
    GenomeCountStatistics,
    SexStatistics,
    StatisticsOperator,
)

__all__ = [
    "Operator",
    "OperatorRegistry",
    "CycleStopOperator",
    "SexualReproduction",
    "NoGenomeSexualReproduction",
    "reproduce_offspring",
    "KillOlderGenerations",
    "StatisticsOperator",
    "GenomeCountStatistics",
    "SexStatistics",
    "EventSink",
    "ObservableOperator",
]
