# passengers/address_cleaner.py
"""
Address cleanup before geocoding.

Strips apartment, floor and building details that confuse the geocoder. The
rules are an ordered table of regex substitutions; each is a best-effort strip,
not a grammar.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class CleanupRule:
    """One ordered substitution step of the address cleaner."""

    name: str
    pattern: re.Pattern
    replacement: str = ''

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


def _rule(name: str, pattern: str, replacement: str = '') -> CleanupRule:
    return CleanupRule(name=name, pattern=re.compile(pattern, re.IGNORECASE), replacement=replacement)


# Leading separators are consumed with the token so "123, Apt 4" becomes "123".
_SEP = r'[\s,;]*'

ADDRESS_RULES: tuple[CleanupRule, ...] = (
    _rule(
        'label_prefix',
        r'^\s*(?:direcci[oó]n|address|calle|street|avenida|avda\.?|av\.?)\s*:\s*',
    ),
    _rule(
        'unit',
        _SEP + r'(?:\b(?:apartamento|apto|apt|unidad|unit|departamento|dpto|dept|dpt'
        r'|n[uú]mero|num|no)\b\.?|#)\s*\d+[a-z]*\b',
    ),
    _rule(
        'floor_word_number',
        _SEP + r'\b(?:piso|floor|nivel|level)\s*\d+[a-z]*\b',
    ),
    # A bare number only counts as a floor when it opens a comma-separated part,
    # otherwise "Calle 10 Piso" would lose its street number.
    _rule(
        'floor_number_word',
        r'(?:' + _SEP + r'\b\d+(?:er|do|ro|th|st|nd|rd|o)|(?:^|\s*[,;])\s*\d+)'
        r'\s*(?:piso|floor|nivel|level)\b',
    ),
    _rule(
        'building',
        _SEP + r'\b(?:edificio|building|bloque|block|torre|tower|complejo|complex)\s+[a-z0-9]+\b',
    ),
    _rule('whitespace', r'\s+', ' '),
    _rule('edge_punctuation', r'^[\s,;:]+|[\s,;:]+$'),
)


def apply_rules(address: str, rules: tuple[CleanupRule, ...] = ADDRESS_RULES) -> str:
    """Apply each rule once, in order."""
    text = address
    for rule in rules:
        text = rule.apply(text)
    return text.strip()


def clean_address(address: str | None, rules: tuple[CleanupRule, ...] = ADDRESS_RULES) -> str:
    """
    Normalize a free-text address for geocoding.

    The rule table is re-applied until the text stops changing, so removing one
    token can never expose another one that survives a second call.

    Args:
        address: Raw address text (may be None).
        rules: Ordered cleanup rules.

    Returns:
        Cleaned address, or '' for empty input. Never raises.
    """
    text = str(address or '').strip()
    if not text:
        return ''

    while True:
        cleaned = apply_rules(text, rules)
        if cleaned == text:
            return cleaned
        text = cleaned
