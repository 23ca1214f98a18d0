# folds.py

"""
Snapshots of closed regions ("folds") along a scroll path.

A closed region renders as a single visual row, so stepping onto one of its
boundaries in the direction of travel moves straight to the opposite
boundary. A ``FoldMap`` records, for each boundary line, the paired boundary:

    >>> folds = FoldMap({10: FoldEdge(bottom=20), 20: FoldEdge(top=10)})
    >>> folds.edge(10, 1), folds.edge(20, -1), folds.edge(20, 1)
    (20, 10, None)

Only the outermost closed region at a line is ever visible to the host query,
so nested regions are never recorded.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from .utils import sign as get_sign


@dataclass(frozen=True)
class FoldEdge:
    top: Optional[int] = None
    bottom: Optional[int] = None


class FoldMap(Mapping):
    """Immutable mapping of boundary line to ``FoldEdge``."""

    def __init__(self, edges: Optional[Dict[int, FoldEdge]] = None):
        self._edges = dict(edges or {})

    def __getitem__(self, line: int) -> FoldEdge:
        return self._edges[line]

    def __iter__(self) -> Iterator[int]:
        return iter(self._edges)

    def __len__(self) -> int:
        return len(self._edges)

    def __repr__(self):
        return "FoldMap(%s)" % self._edges

    def edge(self, line: int, direction: int) -> Optional[int]:
        """The boundary paired with ``line`` when travelling in ``direction``, if any."""
        fold_edge = self._edges.get(line)
        if fold_edge is None:
            return None
        return fold_edge.bottom if direction > 0 else fold_edge.top

    def step(self, line: int, direction: int) -> int:
        """Move one visual row from ``line`` in ``direction``."""
        paired = self.edge(line, direction)
        return (line if paired is None else paired) + direction


class _FoldScan:
    """Walks content lines one visual row at a time, recording closed regions."""

    def __init__(self, host, viewport_id: int, line_from: int, direction: int):
        self.host = host
        self.viewport_id = viewport_id
        self.line_from = line_from
        self.direction = direction
        self.cur = line_from
        self._edges: Dict[int, Dict[str, int]] = {}

    def step(self) -> None:
        fold = self.host.closed_fold_at(self.viewport_id, self.cur)
        if not fold:
            self.cur += self.direction
            return

        start, end = fold
        # Regions entered before the scan started are skipped, not recorded
        entry = start if self.direction > 0 else end
        if (entry - self.line_from) * self.direction >= 0:
            self._edges.setdefault(start, {})['bottom'] = end
            self._edges.setdefault(end, {})['top'] = start

        exit_edge = end if self.direction > 0 else start
        self.cur = exit_edge + self.direction

    def result(self) -> FoldMap:
        return FoldMap({line: FoldEdge(**edge) for line, edge in self._edges.items()})


def find_folds_range(host, viewport_id: int, line_from: int, line_to: int) -> FoldMap:
    """
    Find closed regions between two lines.

    Args:
        host: Host to query
        viewport_id: Viewport whose regions are scanned
        line_from: First line of the walk
        line_to: Line at which the walk stops

    Returns:
        FoldMap of the regions met on the way
    """
    direction = get_sign(line_to - line_from)
    scan = _FoldScan(host, viewport_id, line_from, direction)
    if direction == 0:
        return scan.result()

    while (line_to - scan.cur) * direction > 0:
        scan.step()

    return scan.result()


def find_folds_delta(host, viewport_id: int, line_from: int, delta: int) -> FoldMap:
    """
    Find closed regions within ``abs(delta)`` visual rows of a line.

    Args:
        host: Host to query
        viewport_id: Viewport whose regions are scanned
        line_from: First line of the walk
        delta: Signed number of visual rows to walk

    Returns:
        FoldMap of the regions met on the way
    """
    scan = _FoldScan(host, viewport_id, line_from, get_sign(delta))

    for _ in range(int(abs(delta))):
        scan.step()

    return scan.result()
