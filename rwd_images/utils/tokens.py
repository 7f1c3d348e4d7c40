"""Placeholder substitution for caller-supplied markup templates."""
from __future__ import annotations

import re
from typing import Mapping


def substitute(template: str, tokens: Mapping[str, str]) -> str:
    """Replace every token key in ``template`` with its value in one pass.

    Longer keys win over shorter ones sharing a prefix, and substituted
    values are never scanned again.
    """

    if not tokens:
        return template
    pattern = re.compile("|".join(re.escape(key) for key in sorted(tokens, key=len, reverse=True)))
    return pattern.sub(lambda match: tokens[match.group(0)], template)
