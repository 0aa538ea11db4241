import re
from typing import Iterable

CATEGORY_PREFIXES = {
    "anglo": "ST00A",
    "franco": "ST00F",
    "bilingue": "ST00B",
}

_TRAILING_NUMBER = re.compile(r"(\d+)$")


def next_identifier(category: str, existing: Iterable[str | None]) -> str:
    """
    category "anglo", existing ["ST00A1", "ST00A7", "ST00F3"] -> "ST00A8"
    Highest trailing number under the category prefix + 1, or 1.
    """
    prefix = CATEGORY_PREFIXES[category]
    numbers = []
    for ident in existing:
        if not ident or not ident.startswith(prefix):
            continue
        m = _TRAILING_NUMBER.search(ident[len(prefix):])
        if m and int(m.group(1)) > 0:
            numbers.append(int(m.group(1)))
    return f"{prefix}{max(numbers) + 1 if numbers else 1}"
