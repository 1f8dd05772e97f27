"""
Domain models and value objects.

Contains the body configuration (ObjectSpec, HeightProfile), cavity models
and solver result types.
"""

from src.core.domain.cavity import Cavity, CavityGeometry, CavityShape
from src.core.domain.object_spec import (
    DERBY_LENGTH,
    DERBY_RAW_MASS,
    DERBY_STOCK_HEIGHT,
    DERBY_WHEEL_AXLE_MASS,
    DERBY_WIDTH,
    TUNGSTEN_PUTTY_DENSITY,
    AuxiliaryMass,
    ObjectSpec,
    Region,
    permitted_regions,
    pinewood_derby_spec,
    reserved_zones,
)
from src.core.domain.profile import HeightProfile
from src.core.domain.solution import (
    REASON_FRACTION_OUT_OF_RANGE,
    REASON_OUTSIDE_REGION,
    REASON_SINGULAR_SYSTEM,
    REASON_ZERO_CAPACITY,
    CavityFill,
    SolutionCandidate,
    SolverStrategy,
)

__all__ = [
    # Profile
    "HeightProfile",
    # Object spec
    "DERBY_LENGTH",
    "DERBY_WIDTH",
    "DERBY_STOCK_HEIGHT",
    "DERBY_RAW_MASS",
    "DERBY_WHEEL_AXLE_MASS",
    "TUNGSTEN_PUTTY_DENSITY",
    "AuxiliaryMass",
    "ObjectSpec",
    "Region",
    "permitted_regions",
    "pinewood_derby_spec",
    "reserved_zones",
    # Cavity
    "Cavity",
    "CavityGeometry",
    "CavityShape",
    # Solution
    "CavityFill",
    "SolutionCandidate",
    "SolverStrategy",
    "REASON_FRACTION_OUT_OF_RANGE",
    "REASON_OUTSIDE_REGION",
    "REASON_SINGULAR_SYSTEM",
    "REASON_ZERO_CAPACITY",
]
