"""
Expense Tracker - Source Package

A small personal expense recording tool driven from the command line
and backed by a single relational table.

DESIGN PRINCIPLES:
1. Validate input before touching storage
2. Fail early, fail visibly
3. Storage layer is swappable (any SQLAlchemy URL)
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
