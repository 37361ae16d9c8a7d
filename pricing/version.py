"""
Calculator Version

Stamped on every priced route as calculator_version. Bump on any change
to the aggregation or pricing logic.
"""

VERSION = "2025.11.1"
