"""
Horizon - short-term ARS placement comparator.

Compares caución (repo) offers, a daily-compounding money market and a basket of
LECAPs over a chosen horizon, and recommends the placement that clears a minimum
profit hurdle.
"""

__version__ = "0.1.0"
