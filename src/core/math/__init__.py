"""
Core math modules

Численные примитивы с гарантиями устойчивости: защищённое деление и
интегратор Симпсона фиксированного порядка.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_DETERMINANT,
    EPS_GRID,
    EPS_MASS,
    EPS_VOLUME,
    # Safe division
    is_valid_float,
    safe_divide,
    sanitize_float,
    # Feasibility
    in_unit_interval,
    # Validation
    validate_positive,
)

# Integration
from src.core.math.integration import (
    DEFAULT_PANELS,
    even_panels,
    integrate,
    simpson_weights,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_DETERMINANT",
    "EPS_GRID",
    "EPS_MASS",
    "EPS_VOLUME",
    # Numerical Safeguards — Safe division
    "is_valid_float",
    "safe_divide",
    "sanitize_float",
    # Numerical Safeguards — Feasibility
    "in_unit_interval",
    # Numerical Safeguards — Validation
    "validate_positive",
    # Integration
    "DEFAULT_PANELS",
    "even_panels",
    "integrate",
    "simpson_weights",
]
