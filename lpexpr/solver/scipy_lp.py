import logging
from typing import Optional

import numpy as np
from scipy.optimize import linprog
from scipy.sparse import csr_array

from ..config import settings
from ..expr import Problem, RelOp, Sense, Status
from ._base import Solver, SolverError

logger = logging.getLogger(__name__)

_Row = list[tuple[int, float]]


class ScipyLpSolver(Solver):
    """LP and MILP through `scipy.optimize.linprog` (HiGHS)."""

    def __init__(self, problem: Problem, time_limit: Optional[float] = None):
        super().__init__(problem)
        self._time_limit = time_limit
        self._vars = problem.variables()
        col = {v.index(): i for i, v in enumerate(self._vars)}
        n_vars = len(self._vars)

        self.bounds = [(v.lb(), v.ub()) for v in self._vars]
        self.integrality = np.array([1 if v.is_integer() else 0 for v in self._vars])

        A_ub_: list[_Row] = []
        B_ub_: list[float] = []
        A_eq_: list[_Row] = []
        B_eq_: list[float] = []
        # (constraint name, row, row sign); the row sign undoes the flip of `>=` rows
        self._ub_rows: list[tuple[str, int, int]] = []
        self._eq_rows: list[tuple[str, int]] = []

        for name, constr in problem.constraints().items():
            terms = [(col[t.var.index()], t.coeff) for t in constr.terms().values()]
            rhs = -constr.constant()
            match constr.get_op():
                case RelOp.EQ:
                    self._eq_rows.append((name, len(A_eq_)))
                    A_eq_.append(terms)
                    B_eq_.append(rhs)
                case RelOp.LE:
                    self._ub_rows.append((name, len(A_ub_), 1))
                    A_ub_.append(terms)
                    B_ub_.append(rhs)
                case RelOp.GE:
                    self._ub_rows.append((name, len(A_ub_), -1))
                    A_ub_.append([(var, -coeff) for var, coeff in terms])
                    B_ub_.append(-rhs)

        obj = problem.get_objective()
        c_ = [] if obj is None else [(col[t.var.index()], t.coeff) for t in obj.terms().values()]
        self._sign = -1 if problem.sense() == Sense.MAXIMIZE else 1

        self.c = _create_vector(n_vars, c_) * self._sign
        self.A_ub = _create_matrix(n_vars, A_ub_)
        self.B_ub = np.array(B_ub_) if B_ub_ else None
        self.A_eq = _create_matrix(n_vars, A_eq_)
        self.B_eq = np.array(B_eq_) if B_eq_ else None

    def _solve(self) -> Status:
        if len(self._vars) == 0:
            # linprog rejects an empty cost vector; term-less rows reduce to their constants
            if not all(c.is_satisfied(settings.eps) for c in self._problem.constraints().values()):
                return Status.INFEASIBLE
            self._assign_slacks()
            return Status.OPTIMAL

        options = {} if self._time_limit is None else {"time_limit": self._time_limit}
        res = linprog(
            self.c,
            A_ub=self.A_ub,
            b_ub=self.B_ub,
            A_eq=self.A_eq,
            b_eq=self.B_eq,
            bounds=self.bounds,
            method="highs",
            integrality=self.integrality if self.integrality.any() else None,
            options=options,
        )
        status = res["status"]
        if status == 1:
            logger.warning("linprog stopped early: %s", res["message"])
            return Status.NOT_SOLVED
        elif status == 2:
            return Status.INFEASIBLE
        elif status == 3:
            return Status.UNBOUNDED
        elif status == 4:
            raise SolverError(self, "Numerical difficulties encountered")

        for var, x in zip(self._vars, res["x"]):
            var.set_value(float(x))
        self._assign_slacks()
        self._assign_marginals(res)
        return Status.OPTIMAL

    def _assign_slacks(self) -> None:
        slacks = {}
        for name, constr in self._problem.constraints().items():
            value = constr.value()
            slacks[name] = None if value is None else -value
        self._problem.assign_slacks(slacks)

    def _assign_marginals(self, res) -> None:
        # HiGHS reports marginals for continuous problems only
        if self.integrality.any():
            return
        duals = {}
        ineqlin, eqlin = res.get("ineqlin"), res.get("eqlin")
        if ineqlin is not None:
            for name, row, row_sign in self._ub_rows:
                duals[name] = float(ineqlin.marginals[row]) * row_sign * self._sign
        if eqlin is not None:
            for name, row in self._eq_rows:
                duals[name] = float(eqlin.marginals[row]) * self._sign
        self._problem.assign_duals(duals)
        lower, upper = res.get("lower"), res.get("upper")
        if lower is not None and upper is not None:
            for var, lo, up in zip(self._vars, lower.marginals, upper.marginals):
                var.set_reduced_cost(float(lo + up) * self._sign)


# Utils


def _create_vector(size: int, data: _Row) -> np.ndarray:
    res = np.zeros((size,))
    for var, coeff in data:
        res[var] += coeff
    return res


def _create_matrix(m: int, data: list[_Row]) -> Optional[csr_array]:
    if len(data) == 0 or m == 0:
        return None
    rows, cols, vals = [], [], []
    for i, terms in enumerate(data):
        for var, coeff in terms:
            rows.append(i)
            cols.append(var)
            vals.append(coeff)
    return csr_array((vals, (rows, cols)), shape=(len(data), m))
