"""
Core modules for the Log Pricing Calculator.

This package contains the pricing table, the pure cost calculations
and the validation of raw text input.
"""
