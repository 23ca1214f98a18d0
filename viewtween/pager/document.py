# pager/document.py

import re
from dataclasses import dataclass, field
from typing import List, Tuple

FOLD_MARKER = re.compile(r'\{\{\{|\}\}\}')
FOLD_START = '{{{'


def parse_marker_folds(lines: List[str]) -> List[Tuple[int, int]]:
    """
    Find ``{{{`` / ``}}}`` marker regions.

    Markers nest; a start marker without a matching end marker extends to the
    last line. Stray end markers are ignored.

    Args:
        lines: Document lines

    Returns:
        Sorted list of ``(start, end)`` 1-based line pairs
    """
    stack: List[int] = []
    folds: List[Tuple[int, int]] = []

    for lnum, text in enumerate(lines, 1):
        for marker in FOLD_MARKER.finditer(text):
            if marker.group() == FOLD_START:
                stack.append(lnum)
            elif stack:
                folds.append((stack.pop(), lnum))

    while stack:
        folds.append((stack.pop(), len(lines)))

    return sorted(folds)


@dataclass
class Document:
    """Text shown by the pager, with its marker folds."""
    lines: List[str]
    name: str = ""
    folds: List[Tuple[int, int]] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str, name: str = "") -> "Document":
        lines = text.splitlines() or [""]
        return cls(lines=lines, name=name, folds=parse_marker_folds(lines))

    @classmethod
    def from_file(cls, path: str) -> "Document":
        with open(path, encoding='utf-8', errors='replace') as f:
            return cls.from_text(f.read(), name=path)

    def fold_label(self, start: int, end: int) -> str:
        """Placeholder text for a closed region, like Vim's ``+--  12 lines: ...``."""
        text = FOLD_MARKER.sub('', self.lines[start - 1]).strip()
        return f"+--{end - start + 1:>4} lines: {text}"
