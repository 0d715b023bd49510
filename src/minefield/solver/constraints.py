"""Constraints ("linked groups"): exactly `mines` of these closed cells are mines."""

from collections.abc import Iterable, Iterator

from sortedcontainers import SortedSet


class Constraint:
    """A set of closed, unflagged cell indices holding exactly `mines` mines.

    Two constraints are equal if their cell sets are equal, whatever their mine counts.
    """

    __slots__ = ("cells", "mines")

    def __init__(self, cells: Iterable[int], mines: int) -> None:
        self.cells: SortedSet = SortedSet(cells)
        """Sorted cell indices."""

        self.mines: int = mines
        """Exact number of mines among `cells`."""

    @property
    def key(self) -> tuple[int, ...]:
        """The sorted cell indices as a hashable tuple."""
        return tuple(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[int]:
        return iter(self.cells)

    def __contains__(self, index: object) -> bool:
        return index in self.cells

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Constraint):
            return NotImplemented
        return self.cells == other.cells

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"Constraint({list(self.cells)}, mines={self.mines})"

    def issubset(self, cells: Iterable[int]) -> bool:
        """Whether every cell of this constraint is in `cells`."""
        return self.cells.issubset(cells)

    def isdisjoint(self, cells: Iterable[int]) -> bool:
        """Whether this constraint shares no cell with `cells`."""
        return self.cells.isdisjoint(cells)

    def count_outside(self, cells: Iterable[int]) -> int:
        """Number of cells of this constraint that are not in `cells`."""
        return len(self.cells.difference(cells))


class ConstraintSet:
    """An insertion-ordered collection of distinct constraints.

    Constraints with no mines, or whose cell set is already registered, are rejected.
    """

    def __init__(self) -> None:
        self._items: list[Constraint] = []
        self._keys: set[tuple[int, ...]] = set()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Constraint]:
        return iter(self._items)

    def __getitem__(self, i: int) -> Constraint:
        return self._items[i]

    def __contains__(self, constraint: object) -> bool:
        return isinstance(constraint, Constraint) and constraint.key in self._keys

    def add(self, constraint: Constraint) -> bool:
        """Register a constraint. Returns whether it was new and useful."""
        if constraint.mines <= 0 or not constraint.cells:
            return False
        key = constraint.key
        if key in self._keys:
            return False
        self._keys.add(key)
        self._items.append(constraint)
        return True

    def has_subset_of(self, cells: Iterable[int]) -> bool:
        """Whether some registered constraint lies entirely inside `cells`."""
        cells = set(cells)
        return any(constraint.issubset(cells) for constraint in self._items)


def merge_disjoint(constraints: Iterable[Constraint]) -> Constraint:
    """Sum the constraints that do not overlap any constraint taken before them."""
    cells: set[int] = set()
    mines = 0
    for constraint in constraints:
        if constraint.isdisjoint(cells):
            cells.update(constraint.cells)
            mines += constraint.mines
    return Constraint(cells, mines)
