"""
Finance Tracker - Source Package

Personal finance tracking core: transactions, accounts, categories,
budgets and goals in; aggregated views and compound-interest projections out.

DESIGN PRINCIPLES:
1. The core is pure: records and parameters in, values out
2. "Now" is always passed in, never read inside a calculation
3. Bad numbers produce zeroed results, never NaN or exceptions
4. Storage and presentation are swappable collaborators
"""

__version__ = "1.0.0"
__author__ = "Finance Tracker Team"
