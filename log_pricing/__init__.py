"""
Log Pricing Calculator.

Computes tiered log ingestion cost plus a flat per-user cost.
"""

__version__ = "0.1.0"
