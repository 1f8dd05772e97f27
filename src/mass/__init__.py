"""Mass properties — cavity analysis and mass/CoG aggregation."""

from .aggregator import (
    MassProperties,
    ResidualBudget,
    aggregate,
    aggregate_uniform,
    residual_budget,
)
from .cavity_analyzer import (
    BodyProperties,
    analyze_body,
    analyze_bottom_pocket,
    analyze_cavity,
    analyze_through_cut,
    cut_volume,
)

__all__ = [
    "BodyProperties",
    "MassProperties",
    "ResidualBudget",
    "aggregate",
    "aggregate_uniform",
    "analyze_body",
    "analyze_bottom_pocket",
    "analyze_cavity",
    "analyze_through_cut",
    "cut_volume",
    "residual_budget",
]
