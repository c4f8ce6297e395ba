"""
Configuration loading for pricing tables and runtime settings.
"""
