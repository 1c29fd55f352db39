"""Slate Planner credit estimation and plan recommendation engine."""
from .services.calculator import CalculationResult, calculate
from .services.estimator import FeatureConfiguration

__version__ = "1.0.0"

__all__ = ["CalculationResult", "FeatureConfiguration", "__version__", "calculate"]
