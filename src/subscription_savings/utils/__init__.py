"""
Utility helpers for merchant normalization, similarity scoring,
anonymization and performance tracking.
"""
