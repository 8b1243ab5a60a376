"""Tests for ConstraintStore"""

import threading

import pytest
import z3

from symsmt.config import SolverConfig
from symsmt.expr import Bool, Int, Ints, Operation, OperatorKind, Real
from symsmt.smt import Constraints, ConstraintStore, constraint_store, issatisfiable
from symsmt.tests import TestCase, main
from symsmt.utils import SolverResult, TranslationError, UnsupportedOperatorError


class TestConstraintStore(TestCase):

    def setUp(self):
        self.x, self.y = Ints("x y")
        self.store = ConstraintStore([self.x >= 1, self.y >= 1])

    def test_background(self):
        self.assertEqual(len(self.store), 2)
        self.assertEqual(self.store.constraints, (self.x >= 1, self.y >= 1))
        self.assertEqual([bc.index for bc in self.store.background], [1, 2])
        self.assertEqual(self.store.check_background(), SolverResult.SAT)

    def test_labels_are_tracked(self):
        labels = self.store.labels
        self.assertEqual(len(labels), 2)
        self.assertTrue(str(labels[0]).startswith("constraint_1"))
        self.assertTrue(str(labels[1]).startswith("constraint_2"))
        self.assertEqual(self.store.index_of_label(labels[0]), 1)
        self.assertEqual(self.store.index_of_label(labels[1]), 2)
        self.assertIsNone(self.store.index_of_label(z3.Bool("constraint_1", self.store.context.ctx)))

    def test_labels_do_not_clash_with_user_variables(self):
        c1 = Bool("constraint_1")
        store = ConstraintStore([~c1])
        self.assertEqual(store.check_background(), SolverResult.SAT)
        self.assertTrue(issatisfiable(~c1, store))

    def test_speculative_check_leaves_background_alone(self):
        depth = self.store.context.solver.num_scopes()
        n = len(self.store.context.solver.assertions())
        self.assertEqual(self.store.speculative_check(self.x + self.y <= 0), SolverResult.UNSAT)
        self.assertEqual(self.store.speculative_check(self.x + self.y >= 100), SolverResult.SAT)
        self.assertEqual(self.store.context.solver.num_scopes(), depth)
        self.assertEqual(len(self.store.context.solver.assertions()), n)
        self.assertEqual(self.store.check_background(), SolverResult.SAT)

    def test_failed_query_pops_scope(self):
        depth = self.store.context.solver.num_scopes()
        with self.assertRaises(UnsupportedOperatorError):
            self.store.speculative_check(Operation("max", (self.x, self.y)))
        with self.assertRaises(TranslationError):
            self.store.speculative_check(self.x + 1)
        self.assertEqual(self.store.context.solver.num_scopes(), depth)
        self.assertEqual(self.store.check_background(), SolverResult.SAT)

    def test_str(self):
        self.assertEqual(str(self.store), "Constraints:\n  x >= 1 ∧\n  y >= 1")

    def test_select(self):
        self.assertEqual(self.store.select([2]), [self.y >= 1])
        with self.assertRaises(IndexError):
            self.store.select([3])
        with self.assertRaises(IndexError):
            self.store.select([0])


def test_empty_store():
    store = ConstraintStore()
    assert len(store) == 0
    assert store.check_background() is SolverResult.SAT
    assert str(store) == "Constraints:"


def test_alias_and_factory():
    x = Int("x")
    assert Constraints is ConstraintStore
    store = constraint_store([x > 0], timeout_ms=1000)
    assert store.config.timeout_ms == 1000
    assert store.check_background() is SolverResult.SAT


def test_non_boolean_constraint_rejected():
    with pytest.raises(TranslationError):
        ConstraintStore([Int("x") + 1])


def test_invalid_operator_in_background():
    with pytest.raises(UnsupportedOperatorError):
        ConstraintStore([Operation(OperatorKind.NOT, ())])


def test_logic_config():
    x = Real("x")
    store = ConstraintStore([x > 0], SolverConfig(logic="QF_LIA"))
    assert store.speculative_check(x < 0) is SolverResult.UNSAT


def test_fork_is_independent():
    x = Int("x")
    store = ConstraintStore([x > 0, x < 10])
    other = store.fork()
    assert other is not store
    assert other.context.ctx is not store.context.ctx
    assert other.constraints == store.constraints
    assert other.speculative_check(x > 8) is SolverResult.SAT


def test_forked_stores_in_threads():
    x = Int("x")
    base = ConstraintStore([x >= 0, x <= 100])
    results = {}

    def worker(i):
        store = base.fork()
        results[i] = store.speculative_check(x > i * 50)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert results == {0: SolverResult.SAT, 1: SolverResult.SAT, 2: SolverResult.UNSAT}


def test_scope_pops_when_body_raises():
    x = Int("x")
    store = ConstraintStore([x > 0])
    ctx = store.context
    with pytest.raises(RuntimeError, match="inside the scope"):
        with ctx.scope() as solver:
            solver.add(ctx.declare("x", x.kind) < 0)
            raise RuntimeError("inside the scope")
    assert ctx.solver.num_scopes() == 0
    assert store.check_background() is SolverResult.SAT


if __name__ == '__main__':
    main()
