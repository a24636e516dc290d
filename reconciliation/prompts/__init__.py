"""
Prompts Package

Role instructions and section messages for the three reconciliation operations.

Files:
- consolidation.py: canonical-name consolidation
- categorization.py: category-label assignment
- fuzzy_matching.py: fuzzy cross-list matching
"""

from . import categorization, consolidation, fuzzy_matching

__all__ = ["categorization", "consolidation", "fuzzy_matching"]
