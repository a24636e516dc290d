"""
Entity Preprocessors Package

Pure, stateless clean-up applied to entities before they are submitted:

- NameCleaner: Normalises organisation names with ordered regex rules
"""

from .base import BasePreprocessor, PreprocessorResult
from .name_cleaner import NameCleaner, NameRule, default_rules, strip_names

__all__ = [
    "BasePreprocessor",
    "PreprocessorResult",
    "NameCleaner",
    "NameRule",
    "default_rules",
    "strip_names",
]
