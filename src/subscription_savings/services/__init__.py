"""
Services for recurring charge detection, catalog matching and savings reports.
"""
