"""
Placeholder extraction and substitution for prompt templates.

Placeholders are double-brace spans: ``{{name}}``. The name is whatever sits
between the delimiters, surrounding whitespace trimmed; there is no
character-set restriction and ``{{}}`` is a (degenerate) variable named "".

Two substitution modes share one engine:
  - PREVIEW: only variables with a non-blank value are filled; the rest stay
    visible as ``{{name}}`` so the user sees what is still missing.
  - FINAL:   every supplied variable is filled, blanks become "".
"""

import re
from enum import Enum
from typing import Mapping, Optional

# Non-greedy: "{{a}}{{b}}" is two placeholders, not one spanning "a}}{{b".
PLACEHOLDER_RE = re.compile(r"\{\{(.*?)\}\}")

# Whitespace allowed around a name inside the delimiters: anything "." spans.
_PAD = r"[^\S\n]*"


class FillMode(str, Enum):
    """How substitute-time blanks are treated."""
    PREVIEW = "preview"
    FINAL = "final"


def extract_variables(template: Optional[str]) -> list[str]:
    """Return unique placeholder names in first-occurrence order."""
    if not template:
        return []
    seen: set[str] = set()
    out: list[str] = []
    for match in PLACEHOLDER_RE.finditer(template):
        name = match.group(1).strip()
        if name in seen:
            continue
        seen.add(name)
        out.append(name)
    return out


def _lookup_table(values: Mapping[str, Optional[str]]) -> dict[str, str]:
    """Map trimmed name -> replacement. Keys that are already trimmed win over padded ones."""
    table: dict[str, str] = {}
    for key, value in values.items():
        if key == key.strip():
            table[key] = value or ""
    for key, value in values.items():
        table.setdefault(key.strip(), value or "")
    return table


def substitute_variables(template: Optional[str], values: Mapping[str, Optional[str]]) -> str:
    """
    Replace ``{{key}}`` for every key in values; unknown placeholders stay literal.

    Single pass over the template: a replacement value that itself looks like
    ``{{other}}`` is emitted as-is and never substituted again, so the result
    does not depend on the iteration order of values.
    """
    if not template:
        return ""
    if not values:
        return template
    table = _lookup_table(values)
    exact = {key: value or "" for key, value in values.items()}
    # Longest names first so overlapping literals resolve the same way every time.
    names = sorted(table, key=lambda n: (-len(n), n))
    pattern = re.compile(
        r"\{\{(%s(?:%s)%s)\}\}" % (_PAD, "|".join(re.escape(n) for n in names), _PAD)
    )

    def _replace(match: re.Match) -> str:
        raw = match.group(1)
        if raw in exact:
            return exact[raw]
        return table[raw.strip()]

    return pattern.sub(_replace, template)


def preview_values(values: Mapping[str, Optional[str]]) -> dict[str, str]:
    """Keep only the entries the user has actually filled in (non-blank after trimming)."""
    return {name: value for name, value in values.items() if value and value.strip()}


def render(
    template: Optional[str],
    values: Mapping[str, Optional[str]],
    mode: FillMode = FillMode.FINAL,
) -> str:
    """Substitute values into template in PREVIEW or FINAL mode."""
    if FillMode(mode) is FillMode.PREVIEW:
        return substitute_variables(template, preview_values(values))
    return substitute_variables(template, values)
