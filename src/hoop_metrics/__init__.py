"""hoop-metrics: basketball training tracker with an AI trainer."""

__version__ = "0.1.0"
