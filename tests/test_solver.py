import logging

import pytest
from scipy.optimize import OptimizeResult

from lpexpr import Constr, Problem, RelOp, Sense, SolutionStatus, Status, Var, VType
from lpexpr.event import Event
from lpexpr.solver import DefaultSolver, ScipyLpSolver, SolverError, SolverInfo, scipy_lp


class TestEvent:
    def test_invoke(self):
        calls = []
        event = Event[[int]]()
        callback = event.register(lambda x: calls.append(x))
        event.invoke(1)
        assert calls == [1]
        assert len(event) == 1

        event.deregister(callback)
        event.invoke(2)
        assert calls == [1]

    def test_clear(self):
        event = Event[[int]]()
        event.register(print)
        event.clear()
        assert len(event) == 0


class TestDefaultSolver:
    def test_assigns_zero(self):
        x = Var("x", 1, 4)
        y = Var("y")
        prob = Problem("p")
        prob += x + y
        prob += x + y >= 2
        assert DefaultSolver(prob).solve() == Status.OPTIMAL
        assert x.value() == 0.0 and y.value() == 0.0

    def test_events(self):
        x = Var("x")
        prob = Problem("p")
        prob += x
        solver = DefaultSolver(prob)
        found = []
        infos = []
        solver.solution_found.register(lambda s, sol: found.append(sol))
        solver.solved.register(lambda s, info: infos.append(info))
        prob.solve(solver)
        assert found == [{"x": 0.0}]
        assert len(infos) == 1
        assert isinstance(infos[0], SolverInfo)
        assert infos[0].status == Status.OPTIMAL

    def test_other_problem(self):
        solver = DefaultSolver(Problem("a"))
        with pytest.raises(AssertionError):
            Problem("b").solve(solver)


class TestScipyLpSolver:
    def test_minimize(self):
        x = Var("x", 0)
        y = Var("y", 0)
        prob = Problem("p", Sense.MINIMIZE)
        prob += x + y
        prob += x + y >= 2, "demand"
        prob += x - y == 0, "balance"
        prob += x <= 5, "cap"
        assert prob.solve(ScipyLpSolver(prob)) == Status.OPTIMAL
        assert x.value() == pytest.approx(1)
        assert y.value() == pytest.approx(1)
        assert prob.objective_value() == pytest.approx(2)
        assert prob.constraints()["demand"].slack() == pytest.approx(0)
        assert prob.constraints()["cap"].slack() == pytest.approx(4)
        assert prob.constraints()["demand"].dual() == pytest.approx(1)

    def test_maximize(self):
        x = Var("x", 0, 3)
        y = Var("y", 0)
        prob = Problem("p", Sense.MAXIMIZE)
        prob += 3 * x + 2 * y
        prob += x + y <= 4
        prob += x + 3 * y <= 6
        assert prob.solve(ScipyLpSolver(prob)) == Status.OPTIMAL
        assert x.value() == pytest.approx(3)
        assert y.value() == pytest.approx(1)
        assert prob.objective_value() == pytest.approx(11)
        assert prob.is_feasible(1e-6)

    def test_integer(self):
        x = Var("x", 0, vtype=VType.INTEGER)
        prob = Problem("p")
        prob += x
        prob += 2 * x >= 3
        assert prob.is_mip()
        assert prob.solve(ScipyLpSolver(prob)) == Status.OPTIMAL
        prob.round_solution()
        assert x.value() == 2.0

    def test_infeasible(self):
        x = Var("x", 0, 1)
        prob = Problem("p")
        prob += x
        prob += x >= 2
        assert prob.solve(ScipyLpSolver(prob)) == Status.INFEASIBLE
        assert prob.status() == Status.INFEASIBLE
        assert x.value() is None

    def test_unbounded(self):
        x = Var("x", 0)
        prob = Problem("p", Sense.MAXIMIZE)
        prob += x
        assert prob.solve(ScipyLpSolver(prob)) == Status.UNBOUNDED
        assert prob.sol_status() == SolutionStatus.UNBOUNDED

    def test_reduced_costs(self):
        x = Var("x", 1)
        y = Var("y", 0, 4)
        prob = Problem("p")
        prob += 2 * x + y
        prob += x + y <= 10, "cap"
        assert prob.solve(ScipyLpSolver(prob)) == Status.OPTIMAL
        assert x.reduced_cost() == pytest.approx(2)
        assert y.reduced_cost() == pytest.approx(1)
        assert prob.constraints()["cap"].dual() == pytest.approx(0)
        assert prob.constraints()["cap"].slack() == pytest.approx(9)

    @pytest.mark.parametrize(
        "op, expected",
        [(RelOp.LE, Status.OPTIMAL), (RelOp.GE, Status.INFEASIBLE)],
    )
    def test_no_variables(self, op, expected):
        prob = Problem("p")
        prob.set_objective(5)
        prob += Constr(None, op, rhs=3), "c"
        assert prob.solve(ScipyLpSolver(prob)) == expected
        assert prob.status() == expected
        assert prob.objective_value() == 5
        if expected == Status.OPTIMAL:
            assert prob.constraints()["c"].slack() == 3

    def test_stopped_early(self, monkeypatch, caplog):
        x = Var("x", 0)
        prob = Problem("p")
        prob += x
        monkeypatch.setattr(
            scipy_lp, "linprog", lambda *args, **kwargs: OptimizeResult(status=1, message="Iteration limit reached.")
        )
        with caplog.at_level(logging.WARNING, logger="lpexpr.solver.scipy_lp"):
            assert prob.solve(ScipyLpSolver(prob)) == Status.NOT_SOLVED
        assert "Iteration limit" in caplog.text
        assert x.value() is None

    def test_numerical_difficulties(self, monkeypatch):
        x = Var("x", 0)
        prob = Problem("p")
        prob += x
        solver = ScipyLpSolver(prob)
        monkeypatch.setattr(
            scipy_lp, "linprog", lambda *args, **kwargs: OptimizeResult(status=4, message="Numerical difficulties.")
        )
        with pytest.raises(SolverError) as info:
            prob.solve(solver)
        assert info.value.solver is solver
