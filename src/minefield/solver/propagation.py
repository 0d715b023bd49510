"""Constraint propagation over the open-cell frontier.

The same passes back both the solvability check and the hint generator:

1. direct pass: a numbered cell whose flags (or closed cells) match its number forces its
   remaining closed neighbors safe (or mines); any other frontier cell yields a constraint;
2. combination pass: constraints nested inside a cell's closed neighborhood are subtracted
   from it, and disjoint ones are summed, until no new constraint appears;
3. application pass: each constraint overlapping a cell's neighborhood may force the
   neighbors outside the constraint safe or mines;
4. global fallback: the number of mines left over may force every other closed cell safe.

A `Propagator` either applies its deductions to the board (solver) or only records them
(hints).
"""

from dataclasses import dataclass, field
from time import time
from typing import TextIO

from minefield.cell import Cell
from minefield.grid import Grid
from minefield.opening import neighbor_stats, open_zone
from minefield.solver.constraints import Constraint, ConstraintSet, merge_disjoint
from minefield.util import counted, elapsed, report


@dataclass
class Deduction:
    """A set of cells proven safe or proven to be mines."""

    cells: list[int]
    """Indices of the deduced cells."""

    safe: bool
    """True if the cells are safe to open, False if they are mines."""

    context: list[int]
    """Indices of the cells the deduction was drawn from (cause cell and surroundings)."""


@dataclass
class PropagationStats:
    """Statistics collected during propagation."""

    iterations: int = 0
    """Number of completed iterations."""

    constraints_built: int = 0
    """Total number of constraints registered over all iterations."""

    cells_opened: int = 0
    """Number of cells opened by the propagator (apply mode only)."""

    cells_flagged: int = 0
    """Number of cells flagged by the propagator (apply mode only)."""

    start_time: float = field(default_factory=time)
    """Timestamp when propagation started."""


class Propagator:
    """Runs the deduction passes on a list of cells.

    In apply mode, deduced cells are opened or flagged immediately, so later checks in the
    same pass see the new state. In record mode the cells are never modified and every
    deduction is kept in `deductions`.
    """

    def __init__(
        self,
        cells: list[Cell],
        grid: Grid,
        *,
        apply: bool,
        total_mines: int | None = None,
    ) -> None:
        self.cells = cells
        self.grid = grid
        self.apply = apply

        self.total_mines: int = (
            sum(cell.is_mine for cell in cells) if total_mines is None else total_mines
        )
        """Number of mines on the board, used by the global fallback."""

        self.constraints = ConstraintSet()
        """Constraints of the current iteration."""

        self.deductions: list[Deduction] = []
        """Every deduction made so far, in discovery order."""

        self.stats = PropagationStats()

    def frontier(self) -> list[int]:
        """Indices of open cells with at least one closed, unflagged neighbor."""
        cells = self.cells
        return [
            i
            for i, cell in enumerate(cells)
            if cell.is_open
            and any(
                not cells[n].is_open and not cells[n].is_flag for n in self.grid.neighbors(i)
            )
        ]

    def _is_unknown(self, index: int) -> bool:
        cell = self.cells[index]
        return not cell.is_open and not cell.is_flag

    def _is_live(self, constraint: Constraint) -> bool:
        """A constraint only holds while all its cells are still closed and unflagged."""
        return not self.apply or all(self._is_unknown(i) for i in constraint)

    def _deduce(self, indices: list[int], safe: bool, context: list[int]) -> bool:
        """Record (and in apply mode, carry out) a deduction. Returns whether anything changed."""
        targets = [i for i in indices if self._is_unknown(i)]
        if not targets:
            return False

        if self.apply:
            for i in targets:
                if safe:
                    self.cells[i].is_open = True
                else:
                    self.cells[i].is_flag = True
            if safe:
                self.stats.cells_opened += len(targets)
            else:
                self.stats.cells_flagged += len(targets)

        self.deductions.append(Deduction(targets, safe, context))
        return True

    def _register(self, constraint: Constraint) -> bool:
        if self.constraints.add(constraint):
            self.stats.constraints_built += 1
            return True
        return False

    def direct_pass(self, frontier: list[int]) -> bool:
        """Deduce from each frontier cell alone, registering a constraint where that fails."""
        progress = False
        for i in frontier:
            cell = self.cells[i]
            if not cell.is_open:
                continue
            stats = neighbor_stats(self.cells, self.grid, i)
            if not stats.unflagged:
                continue
            context = [*self.grid.neighbors(i), i]

            if cell.mines == 0:
                if self.apply:
                    opened = open_zone(self.cells, self.grid, i)
                    if opened:
                        self.stats.cells_opened += len(opened)
                        self.deductions.append(Deduction(opened, True, context))
                        progress = True
                else:
                    progress |= self._deduce(stats.unflagged, True, context)
            elif cell.mines == stats.flagged:
                progress |= self._deduce(stats.unflagged, True, context)
            elif cell.mines == stats.closed:
                progress |= self._deduce(stats.unflagged, False, context)
            else:
                self._register(Constraint(stats.unflagged, cell.mines - stats.flagged))
        return progress

    def combination_pass(self, frontier: list[int]) -> None:
        """Derive new constraints by subtracting and summing existing ones, to a fixpoint."""
        added = True
        while added:
            added = False
            for i in frontier:
                cell = self.cells[i]
                if not cell.is_open:
                    continue
                stats = neighbor_stats(self.cells, self.grid, i)
                closed = set(stats.unflagged)
                if not closed:
                    continue

                summed = set()
                summed_mines = 0

                # Constraints registered during this loop are visited too
                k = 0
                while k < len(self.constraints):
                    constraint = self.constraints[k]
                    k += 1
                    if len(constraint) >= len(closed) or not constraint.issubset(closed):
                        continue
                    if not self._is_live(constraint):
                        continue

                    rest = closed.difference(constraint.cells)
                    rest_mines = cell.mines - constraint.mines - stats.flagged
                    if rest_mines > 0 and not self.constraints.has_subset_of(rest):
                        added |= self._register(Constraint(rest, rest_mines))

                    if constraint.isdisjoint(summed):
                        summed.update(constraint.cells)
                        summed_mines += constraint.mines

                if summed_mines > 0:
                    added |= self._register(Constraint(summed, summed_mines))

    def _constraint_context(self, index: int, nearby: tuple[int, ...], constraint: Constraint) -> list[int]:
        """Cells explaining a constraint-based deduction: the cause cell, its neighbors, and the
        neighborhoods of open neighbors that surround the whole constraint."""
        context = list(nearby)
        for n in nearby:
            if not self.cells[n].is_open:
                continue
            around = self.grid.neighbors(n)
            if constraint.issubset(around):
                context.extend(around)
        context.append(index)
        return list(dict.fromkeys(context))

    def application_pass(self, frontier: list[int]) -> bool:
        """Deduce from each frontier cell combined with each constraint touching it."""
        progress = False
        for i in frontier:
            cell = self.cells[i]
            if not cell.is_open:
                continue
            nearby = self.grid.neighbors(i)
            nearby_set = set(nearby)

            for constraint in list(self.constraints):
                if constraint.isdisjoint(nearby_set) or not self._is_live(constraint):
                    continue

                flagged = 0
                unknown: list[int] = []
                for n in nearby:
                    neighbor = self.cells[n]
                    if neighbor.is_open:
                        continue
                    if neighbor.is_flag:
                        flagged += 1
                    elif n not in constraint:
                        unknown.append(n)
                if not unknown:
                    continue

                outside = constraint.count_outside(nearby_set)
                if cell.mines == flagged + constraint.mines - outside:
                    # All the constraint's mines that can be here already account for the number
                    progress |= self._deduce(
                        unknown, True, self._constraint_context(i, nearby, constraint)
                    )
                elif cell.mines == flagged + constraint.mines + len(unknown):
                    progress |= self._deduce(
                        unknown, False, self._constraint_context(i, nearby, constraint)
                    )
        return progress

    def global_fallback(self) -> bool:
        """Use the remaining mine count to open every cell outside the known constraints.

        A greedy disjoint sum depends on the order the constraints are taken in, so two
        orders are tried: smallest first, and by the text of their cell lists. Every single
        constraint is tried on its own as well.
        """
        closed = [i for i in range(len(self.cells)) if self._is_unknown(i)]
        if not closed:
            return False

        flags = sum(cell.is_flag for cell in self.cells)
        remaining = self.total_mines - flags
        if remaining == 0:
            return self._deduce(closed, True, closed)

        live = [c for c in self.constraints if self._is_live(c)]
        by_size = sorted(live, key=lambda c: (len(c), c.key))
        by_text = sorted(live, key=lambda c: ",".join(map(str, c.key)))
        candidates = [merge_disjoint(by_size), merge_disjoint(by_text), *live]

        progress = False
        for constraint in candidates:
            if constraint.mines != remaining:
                continue
            safe = [i for i in closed if i not in constraint]
            if safe:
                progress |= self._deduce(safe, True, safe)
        return progress

    def step(self, *, exhaustive: bool = False) -> bool:
        """Run one iteration of the passes, stopping at the first one that makes progress.

        Args:
            exhaustive: Run every pass even after one made progress (used for hints).

        Returns:
            Whether any deduction was made.
        """
        self.constraints = ConstraintSet()
        frontier = self.frontier()

        progress = self.direct_pass(frontier)
        if not progress or exhaustive:
            self.combination_pass(frontier)
            progress |= self.application_pass(frontier)
            if not progress or exhaustive:
                progress |= self.global_fallback()

        self.stats.iterations += 1
        return progress

    def run(
        self,
        *,
        max_iterations: int | None = None,
        out: TextIO | None = None,
        report_interval: int = 10,
    ) -> PropagationStats:
        """Iterate until an iteration makes no deduction (or `max_iterations` is reached).

        Args:
            max_iterations: Optional cap on the number of iterations.
            out: Optional text stream for progress reports.
            report_interval: Report progress every this many iterations.
        """
        while max_iterations is None or self.stats.iterations < max_iterations:
            progress = self.step()

            if self.stats.iterations % report_interval == 0:
                report(
                    out,
                    f"Iteration {self.stats.iterations:,} after "
                    f"{elapsed(self.stats.start_time)}: "
                    f"{counted(len(self.constraints), 'constraint')}, "
                    f"{self.stats.cells_opened:,} opened, "
                    f"{self.stats.cells_flagged:,} flagged.",
                )
            if not progress:
                break
        else:
            report(out, f"Stopped after {counted(self.stats.iterations, 'iteration')}.")

        return self.stats
