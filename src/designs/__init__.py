"""Reference cavity designs and the recommendation step."""

from .catalog import (
    DIFFERENTIAL_CONFIGURATIONS,
    FRONT_WINDOW,
    REAR_WINDOW,
    BudgetSummary,
    CatalogReport,
    GridSearchOutcome,
    PairConfiguration,
    budget_summary,
    design_a,
    design_b,
    design_c,
    design_d,
    design_e,
    design_f,
    design_g,
    design_h,
    recommend,
    run_all,
)

__all__ = [
    # Reference geometry
    "DIFFERENTIAL_CONFIGURATIONS",
    "FRONT_WINDOW",
    "REAR_WINDOW",
    "PairConfiguration",
    # Results
    "BudgetSummary",
    "CatalogReport",
    "GridSearchOutcome",
    # Designs
    "budget_summary",
    "design_a",
    "design_b",
    "design_c",
    "design_d",
    "design_e",
    "design_f",
    "design_g",
    "design_h",
    "recommend",
    "run_all",
]
