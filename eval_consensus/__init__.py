"""Consensus aggregation for multi-evaluator candidate assessments."""

__version__ = "1.0.0"
