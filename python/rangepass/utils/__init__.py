"""
Validation and randomness helpers for Rangepass.
"""
