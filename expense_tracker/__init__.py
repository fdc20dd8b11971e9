"""
Expense Tracker - Source Package

A command-line expense tracker that records, lists, edits, deletes and
summarizes expenses kept in a local JSON file.

DESIGN PRINCIPLES:
1. Validate arguments before touching the file
2. Fail early, fail visibly (except update amounts, which are ignored)
3. Every write replaces the whole file
4. Storage is injected, never global
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
