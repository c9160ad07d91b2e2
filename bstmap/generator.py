"""
Synthetic phone book rows.

Rows match the schema PhoneBook.load_entries expects (name, phone).
Names are built from syllables so they sort in a reasonably random
order; pass ordered=True to get the sorted, worst-case insertion order
that degrades the index to a linked list.
"""

import random
from typing import Dict, Iterator, List, Optional


SYLLABLES = [
    "al", "an", "bar", "bel", "cor", "da", "el", "fin", "gar", "han",
    "is", "jo", "ka", "lin", "mar", "nor", "ol", "pet", "ra", "sam",
    "ta", "ul", "vi", "wen", "xa", "yor", "zel",
]


def _make_name(rng: random.Random) -> str:
    first = "".join(rng.choice(SYLLABLES) for _ in range(rng.randint(2, 3)))
    last = "".join(rng.choice(SYLLABLES) for _ in range(rng.randint(2, 4)))
    return f"{first.capitalize()} {last.capitalize()}"


def _make_phone(rng: random.Random) -> str:
    return f"555-{rng.randint(0, 9999):04d}"


def generate(count: int, seed: Optional[int] = None, ordered: bool = False) -> Iterator[Dict[str, str]]:
    """Yield `count` rows with unique names."""
    if count < 0:
        raise ValueError("count must be non-negative")

    rng = random.Random(seed)
    seen = set()
    rows: List[Dict[str, str]] = []
    while len(rows) < count:
        name = _make_name(rng)
        if name in seen:
            # suffix the row number to keep names unique
            name = f"{name} {len(rows)}"
            if name in seen:
                continue
        seen.add(name)
        rows.append({"name": name, "phone": _make_phone(rng)})

    if ordered:
        rows.sort(key=lambda row: row["name"])
    yield from rows
