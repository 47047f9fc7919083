"""weigh-in: personal body-composition tracker."""

__version__ = "0.1.0"
