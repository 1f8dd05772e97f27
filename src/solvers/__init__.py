"""
Target solvers — fill fractions and cavity placement for mass and CoG targets.

- single_fill: closed-form common fill fraction (mass only)
- grid_search: brute-force spans, one or two cavities
- bisection: cavity end for a required volume
- differential_fill: exact 2×2 solve, one fraction per cavity
- precise_volume: single 100 %-filled cavity back-solve
"""

from .bisection import BisectionConfig, bisect_end
from .candidates import build_candidate
from .differential_fill import (
    DifferentialFillConfig,
    DifferentialFillSolver,
    FillSystem,
    build_fill_system,
    solve_differential_fill,
    solve_fill_system,
)
from .grid_search import (
    GridSearchConfig,
    GridSearchSolver,
    PairSearchConfig,
    SearchWindow,
    grid_points,
)
from .precise_volume import (
    PreciseVolumeConfig,
    PreciseVolumeResult,
    PreciseVolumeSolver,
    RegionMatch,
)
from .single_fill import SingleFillConfig, SingleFillSolver, solve_fill_fraction

__all__ = [
    # Configs
    "BisectionConfig",
    "DifferentialFillConfig",
    "GridSearchConfig",
    "PairSearchConfig",
    "PreciseVolumeConfig",
    "SingleFillConfig",
    # Solvers
    "DifferentialFillSolver",
    "GridSearchSolver",
    "PreciseVolumeSolver",
    "SingleFillSolver",
    # Results
    "FillSystem",
    "PreciseVolumeResult",
    "RegionMatch",
    "SearchWindow",
    # Functions
    "bisect_end",
    "build_candidate",
    "build_fill_system",
    "grid_points",
    "solve_differential_fill",
    "solve_fill_fraction",
    "solve_fill_system",
]
