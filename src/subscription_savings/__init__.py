"""
Subscription savings analysis.

Detects recurring charges in a transaction history, matches them against a
catalog of known subscription services and builds a savings report.
"""

__version__ = "0.1.0"
