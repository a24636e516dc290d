"""
Name Cleaner Preprocessor

Normalises organisation names before they are submitted, so that trivially
different spellings never reach the completion service:
- Transliterating accented characters to ASCII
- Removing bracketed remarks, a leading "The" and a trailing ", the"
- Removing "& Co", punctuation and legal-form suffixes (Ltd, GmbH, Inc, ...)
- Removing group suffixes (Group, Corporation, Corp, Company)
- Removing blanks and upper-casing

The regex part is an ordered list of NameRule objects and can be replaced or
extended through the configuration.
"""

import re
import unicodedata
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .base import BasePreprocessor

LEGAL_FORM_SUFFIXES = (
    " co inc", " saag", " coltd", " ltd", " gmbh", " ag", " sarl", " inc",
    " limited", " ab", " llc", " sa", " ca", " pte", " co", " plc", " lp",
    " proforma", " se", " llp", " spa",
)

GROUP_SUFFIXES = (" group", " corporation", " corp", " company")


@dataclass
class NameRule:
    """A regex substitution applied to every name."""

    pattern: str
    replacement: str = ""
    flags: int = 0
    compiled: Any = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        self.compiled = re.compile(self.pattern, self.flags)

    def apply(self, text: str) -> str:
        return self.compiled.sub(self.replacement, text)


def _suffix_rule(suffixes: Sequence[str]) -> NameRule:
    # One pass: only the final suffix is removed, "Foo Co Ltd" keeps " Co"
    alternation = "|".join(re.escape(suffix) for suffix in suffixes)
    return NameRule(rf"(?:{alternation})$", flags=re.IGNORECASE)


def default_rules() -> List[NameRule]:
    """The default ordered rule set for organisation names."""
    return [
        NameRule(r" ?\([^)]+\)"),
        NameRule(r" ?\[[^\]]+\]"),
        NameRule(r"^the ", flags=re.IGNORECASE),
        NameRule(r", the$", flags=re.IGNORECASE),
        NameRule(r" ?& ?Co\b", flags=re.IGNORECASE),
        NameRule(r"[^\w\s]|_"),
        _suffix_rule(LEGAL_FORM_SUFFIXES),
        _suffix_rule(GROUP_SUFFIXES),
        NameRule(r"[ \t]+"),
    ]


def transliterate(text: str) -> str:
    """Replace accented characters with their ASCII base letters."""
    # Letters without a canonical decomposition
    replacements = {
        "ß": "ss",  # sharp s
        "Æ": "AE",
        "æ": "ae",
        "Ø": "O",
        "ø": "o",
        "Œ": "OE",
        "œ": "oe",
        "Ł": "L",
        "ł": "l",
        "Đ": "D",
        "đ": "d",
    }
    for old, new in replacements.items():
        text = text.replace(old, new)

    decomposed = unicodedata.normalize("NFKD", text)
    return decomposed.encode("ascii", "ignore").decode("ascii")


class NameCleaner(BasePreprocessor):
    """Preprocessor for cleaning organisation names."""

    name = "NameCleaner"

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the name cleaner.

        Args:
            config: Configuration dictionary with options:
                - rules: Ordered list of NameRule (default: default_rules())
                - extra_rules: Rules appended after the default rules
                - transliterate: Convert to ASCII first (default: True)
                - uppercase: Upper-case the result (default: True)
        """
        super().__init__(config)
        rules = self.get_config_value("rules")
        self.rules: List[NameRule] = list(rules) if rules is not None else default_rules()
        self.rules.extend(self.get_config_value("extra_rules", []))

    def transform(self, name: str) -> str:
        """Apply the configured cleaning to one name."""
        text = name
        if self.get_config_value("transliterate", True):
            text = transliterate(text)
        for rule in self.rules:
            text = rule.apply(text)
        if self.get_config_value("uppercase", True):
            text = text.upper()
        return text


def strip_names(name: str) -> str:
    """Clean one organisation name with the default rules."""
    return NameCleaner().transform(name)
