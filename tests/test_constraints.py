from minefield.solver.constraints import Constraint, ConstraintSet, merge_disjoint


def test_constraint_equality_ignores_order_and_mines():
    a = Constraint([3, 1, 2], 1)
    b = Constraint([1, 2, 3], 2)
    assert a == b
    assert hash(a) == hash(b)
    assert a.key == (1, 2, 3)
    assert list(a) == [1, 2, 3]


def test_constraint_set_operations():
    c = Constraint([1, 2], 1)
    assert c.issubset({1, 2, 3})
    assert not c.issubset({2, 3})
    assert c.isdisjoint([3, 4])
    assert c.count_outside([2, 5]) == 1
    assert 2 in c
    assert len(c) == 2


def test_constraint_set_rejects_useless_and_duplicate_constraints():
    constraints = ConstraintSet()
    assert constraints.add(Constraint([1, 2], 1))
    assert not constraints.add(Constraint([2, 1], 1))
    assert not constraints.add(Constraint([3, 4], 0))
    assert not constraints.add(Constraint([], 1))
    assert constraints.add(Constraint([2, 3], 1))

    assert len(constraints) == 2
    assert constraints[1].key == (2, 3)
    assert Constraint([1, 2], 5) in constraints
    assert Constraint([1, 3], 1) not in constraints


def test_has_subset_of():
    constraints = ConstraintSet()
    constraints.add(Constraint([1, 2], 1))
    assert constraints.has_subset_of([0, 1, 2])
    assert not constraints.has_subset_of([1, 3])


def test_merge_disjoint_skips_overlaps():
    merged = merge_disjoint([Constraint([0, 1], 1), Constraint([1, 2], 1), Constraint([3], 1)])
    assert merged.key == (0, 1, 3)
    assert merged.mines == 2


def test_merge_nothing():
    merged = merge_disjoint([])
    assert len(merged) == 0
    assert merged.mines == 0
