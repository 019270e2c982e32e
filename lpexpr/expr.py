import itertools
import logging
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Iterable, NamedTuple, Optional, Union

from typeguard import typechecked

from . import lp_format
from .config import settings

if TYPE_CHECKING:
    from .solver import Solver

logger = logging.getLogger(__name__)


class VType(Enum):
    CONTINUOUS = "Continuous"
    INTEGER = "Integer"
    BINARY = "Binary"


class Sense(Enum):
    MAXIMIZE = -1
    MINIMIZE = 1


class RelOp(IntEnum):
    """Constraint sense as a signed code: `expr <= 0`, `expr == 0`, `expr >= 0`."""

    LE = -1
    EQ = 0
    GE = 1

    @property
    def symbol(self) -> str:
        return _RELOP_SYMBOL[self]


_RELOP_SYMBOL = {RelOp.LE: "<=", RelOp.EQ: "=", RelOp.GE: ">="}


class Status(IntEnum):
    NOT_SOLVED = 0
    OPTIMAL = 1
    INFEASIBLE = -1
    UNBOUNDED = -2
    UNDEFINED = -3

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


class SolutionStatus(IntEnum):
    NO_SOLUTION_FOUND = 0
    OPTIMAL = 1
    INTEGER_FEASIBLE = 2
    INFEASIBLE = -1
    UNBOUNDED = -2


_STATUS_TO_SOLUTION = {
    Status.NOT_SOLVED: SolutionStatus.INFEASIBLE,
    Status.OPTIMAL: SolutionStatus.OPTIMAL,
    Status.INFEASIBLE: SolutionStatus.INFEASIBLE,
    Status.UNBOUNDED: SolutionStatus.UNBOUNDED,
    Status.UNDEFINED: SolutionStatus.INFEASIBLE,
}


# --------------
# Interfaces

Solution = dict[str, float]
Number = Union[float, int]
LinOperand = Union["Var", "LinExpr", float, int]

# Placeholder variable that is feasible even without a value.
DUMMY_NAME = "__dummy"

_ids = itertools.count()


def _is_number(x) -> bool:
    return isinstance(x, (float, int))


class Bound(NamedTuple):
    min: Optional[Number]
    max: Optional[Number]


# --------------
# Variable


class Var:
    @typechecked
    def __init__(
        self,
        name: str,
        lb: Optional[Number] = None,
        ub: Optional[Number] = None,
        vtype: VType = VType.CONTINUOUS,
    ):
        if vtype == VType.BINARY:
            lb, ub, vtype = 0, 1, VType.INTEGER
        self._idx = next(_ids)
        self._name = name
        self._lb = self._lb_original = lb
        self._ub = self._ub_original = ub
        self._vtype = vtype
        self._value: Optional[Number] = None
        self._dj: Optional[float] = None
        self.modified = True

    @classmethod
    def dicts(
        cls,
        name: str,
        indices: Iterable,
        lb: Optional[Number] = None,
        ub: Optional[Number] = None,
        vtype: VType = VType.CONTINUOUS,
    ) -> dict:
        return {i: cls(f"{name}_{i}", lb, ub, vtype) for i in indices}

    # ------
    # Getters

    def index(self) -> int:
        return self._idx

    def name(self) -> str:
        return self._name

    def lb(self) -> Optional[Number]:
        return self._lb

    def ub(self) -> Optional[Number]:
        return self._ub

    def bound(self) -> Bound:
        return Bound(self._lb, self._ub)

    def type(self) -> VType:
        return self._vtype

    def value(self) -> Optional[Number]:
        return self._value

    def set_value(self, value: Optional[Number]) -> None:
        self._value = value

    def reduced_cost(self) -> Optional[float]:
        return self._dj

    def set_reduced_cost(self, dj: Optional[float]) -> None:
        self._dj = dj

    # ------
    # Predicates

    def is_integer(self) -> bool:
        return self._vtype == VType.INTEGER

    def is_binary(self) -> bool:
        return self._vtype == VType.INTEGER and self._lb == 0 and self._ub == 1

    def is_free(self) -> bool:
        return self._lb is None and self._ub is None

    def is_constant(self) -> bool:
        return self._lb is not None and self._ub == self._lb

    # ------
    # Bounds

    @typechecked
    def set_bounds(self, lb: Optional[Number], ub: Optional[Number]) -> None:
        """Sets the bounds and remembers them as the ones `unfix` restores."""
        self._lb = self._lb_original = lb
        self._ub = self._ub_original = ub
        self.modified = True

    def fix(self) -> None:
        if self._value is not None:
            self._lb = self._ub = self._value
            self.modified = True

    def unfix(self) -> None:
        self._lb = self._lb_original
        self._ub = self._ub_original
        self.modified = True

    # ------
    # Values

    def value_or_default(self) -> Number:
        """The assigned value, or the point of the bound interval closest to 0."""
        if self._value is not None:
            return self._value
        lb, ub = self._lb, self._ub
        if lb is not None:
            if ub is not None:
                if lb <= 0 <= ub:
                    return 0
                return lb if lb >= 0 else ub
            return 0 if lb <= 0 else lb
        if ub is not None:
            return 0 if ub >= 0 else ub
        return 0

    def is_feasible(self, eps: Optional[float] = None) -> bool:
        if eps is None:
            eps = settings.eps
        if self._value is None:
            return self._name == DUMMY_NAME
        if self._ub is not None and self._value > self._ub + eps:
            return False
        if self._lb is not None and self._value < self._lb - eps:
            return False
        if self._vtype == VType.INTEGER and abs(round(self._value) - self._value) > eps:
            return False
        return True

    def rounded_value(self, eps: Optional[float] = None) -> Optional[Number]:
        if eps is None:
            eps = settings.rounding_eps
        if self._vtype == VType.INTEGER and self._value is not None and abs(self._value - round(self._value)) <= eps:
            return float(round(self._value))
        return self._value

    # ------
    # Output

    def as_lp_variable(self) -> str:
        return lp_format.variable_bounds(self._name, self._lb, self._ub, self._vtype == VType.CONTINUOUS)

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        if self._value is not None:
            return f"<{self._name}={self._value}>"
        return f"<{self._name}>"

    def __hash__(self):
        return self._idx

    # ------
    # Operators

    def __add__(self, other: LinOperand) -> "LinExpr":
        return LinExpr(self) + other

    def __radd__(self, other: LinOperand) -> "LinExpr":
        return LinExpr(self) + other

    def __sub__(self, other: LinOperand) -> "LinExpr":
        return LinExpr(self) - other

    def __rsub__(self, other: LinOperand) -> "LinExpr":
        return LinExpr(self).__rsub__(other)

    def __mul__(self, other: Number) -> "LinExpr":
        return LinExpr(self) * other

    def __rmul__(self, other: Number) -> "LinExpr":
        return LinExpr(self) * other

    def __truediv__(self, other: Number) -> "LinExpr":
        return LinExpr(self) / other

    def __neg__(self) -> "LinExpr":
        return -LinExpr(self)

    def __pos__(self) -> "LinExpr":
        return LinExpr(self)

    def __le__(self, other: LinOperand) -> "Constr":
        return LinExpr(self) <= other

    def __ge__(self, other: LinOperand) -> "Constr":
        return LinExpr(self) >= other

    def __eq__(self, other: LinOperand) -> "Constr":
        return LinExpr(self).__eq__(other)


# --------------
# Expression


class Term(NamedTuple):
    var: Var
    coeff: Number


class LinExpr:
    """`constant + sum(coeff * var)`, with terms keyed by `Var.index()`.

    `e` may be a number, a `Var`, another `LinExpr` (its terms and constant
    are copied) or an iterable of `(var, coeff)` pairs. Terms whose
    coefficient cancels to zero are kept.
    """

    def __init__(self, e=None, constant: Number = 0, name: Optional[str] = None):
        self._name = name
        self._const: Number = constant
        self._terms: dict[int, Term] = {}
        if e is None:
            return
        if isinstance(e, LinExpr):
            self._const = e._const
            self._terms = dict(e._terms)
        elif isinstance(e, Var):
            self.add_term(e, 1)
        elif _is_number(e):
            self._const = e
        else:
            for var, coeff in e:
                self.add_term(var, coeff)

    # -------------
    # Getters

    def name(self) -> Optional[str]:
        return self._name

    def set_name(self, name: Optional[str]) -> None:
        self._name = name

    def terms(self) -> dict[int, Term]:
        return self._terms

    def lin_expr(self) -> dict[Var, Number]:
        return {t.var: t.coeff for t in self._terms.values()}

    def const_expr(self) -> Number:
        return self._const

    def is_numerical_constant(self) -> bool:
        return len(self._terms) == 0

    def is_atomic(self) -> bool:
        if len(self._terms) != 1 or self._const != 0:
            return False
        return abs(next(iter(self._terms.values())).coeff - 1) < 1e-10

    def atom(self) -> Var:
        return next(iter(self._terms.values())).var

    def copy(self) -> "LinExpr":
        """Duplicates the term map; the variables themselves are shared."""
        res = LinExpr(constant=self._const, name=self._name)
        res._terms = dict(self._terms)
        return res

    # -------------
    # Mutation

    def add_term(self, var: Var, coeff: Number) -> None:
        idx = var.index()
        term = self._terms.get(idx)
        if term is None:
            self._terms[idx] = Term(var, coeff)
        else:
            self._terms[idx] = Term(var, term.coeff + coeff)

    def add_in_place(self, other: Optional[LinOperand], sign: int = 1) -> "LinExpr":
        if other is None:
            return self
        if _is_number(other):
            self._const += other * sign
        elif isinstance(other, Var):
            self.add_term(other, sign)
        elif isinstance(other, LinExpr):
            self._const += other._const * sign
            for term in list(other._terms.values()):
                self.add_term(term.var, term.coeff * sign)
        else:
            raise TypeError(f"Cannot add {type(other).__name__} to LinExpr")
        return self

    def sub_in_place(self, other: Optional[LinOperand]) -> "LinExpr":
        return self.add_in_place(other, -1)

    def _map_coeffs(self, op) -> "LinExpr":
        res = LinExpr(constant=op(self._const))
        res._terms = {idx: Term(t.var, op(t.coeff)) for idx, t in self._terms.items()}
        return res

    # -------------
    # Evaluation

    def value(self) -> Optional[Number]:
        res = self._const
        for term in self._terms.values():
            value = term.var.value()
            if value is None:
                return None
            res += value * term.coeff
        return res

    def value_or_default(self) -> Number:
        res = self._const
        for term in self._terms.values():
            res += term.var.value_or_default() * term.coeff
        return res

    # -------------
    # Operators

    def __add__(self, other: LinOperand) -> "LinExpr":
        if not _is_linear(other):
            return NotImplemented
        return self.copy().add_in_place(other)

    def __radd__(self, other: LinOperand) -> "LinExpr":
        return self.__add__(other)

    def __sub__(self, other: LinOperand) -> "LinExpr":
        if not _is_linear(other):
            return NotImplemented
        return self.copy().sub_in_place(other)

    def __rsub__(self, other: LinOperand) -> "LinExpr":
        if not _is_linear(other):
            return NotImplemented
        return (-self).add_in_place(other)

    def __iadd__(self, other: LinOperand) -> "LinExpr":
        if not _is_linear(other):
            return NotImplemented
        return self.add_in_place(other)

    def __isub__(self, other: LinOperand) -> "LinExpr":
        if not _is_linear(other):
            return NotImplemented
        return self.sub_in_place(other)

    def __mul__(self, other: Number) -> "LinExpr":
        if not _is_number(other):
            raise TypeError(f"Cannot multiply LinExpr by {type(other).__name__}")
        return self._map_coeffs(lambda c: c * other)

    def __rmul__(self, other: Number) -> "LinExpr":
        return self.__mul__(other)

    def __truediv__(self, other: Number) -> "LinExpr":
        if not _is_number(other):
            raise TypeError(f"Cannot divide LinExpr by {type(other).__name__}")
        if other == 0:
            raise ZeroDivisionError("division of LinExpr by zero")
        return self._map_coeffs(lambda c: c / other)

    def __neg__(self) -> "LinExpr":
        return self * -1

    def __pos__(self) -> "LinExpr":
        return self.copy()

    # ---------------
    # Comparator

    def _compare(self, op: RelOp, other: LinOperand) -> "Constr":
        if _is_number(other):
            return Constr(self, op, rhs=other)
        if isinstance(other, (Var, LinExpr)):
            return Constr(self - other, op)
        return NotImplemented

    def __le__(self, other: LinOperand) -> "Constr":
        return self._compare(RelOp.LE, other)

    def __ge__(self, other: LinOperand) -> "Constr":
        return self._compare(RelOp.GE, other)

    def __eq__(self, other: LinOperand) -> "Constr":
        return self._compare(RelOp.EQ, other)

    # ---------------
    # Output

    def _sorted_terms(self) -> list[Term]:
        return sorted(self._terms.values(), key=lambda t: t.var.name())

    def _named_coeffs(self) -> list[tuple[str, Number]]:
        return [(t.var.name(), t.coeff) for t in self._sorted_terms()]

    def to_string(self, include_constant: bool = True, override_constant: Optional[Number] = None) -> str:
        res = ""
        for var, coeff in self._sorted_terms():
            if coeff < 0:
                res += " - " if res else "-"
                coeff = -coeff
            elif res:
                res += " + "
            res += var.name() if coeff == 1 else f"{lp_format.format_number(coeff)}*{var.name()}"
        if include_constant:
            const = self._const if override_constant is None else override_constant
            if res == "":
                return lp_format.format_number(const)
            res += lp_format.constant_token(const)
        elif res == "":
            res = "0"
        return res

    def _raw_repr(self, const: Number) -> str:
        parts = [f"{t.coeff}*{t.var.name()}" for t in self._sorted_terms()]
        parts.append(str(const))
        return " + ".join(parts)

    def as_lp_affine_expression(
        self, name: str, include_constant: bool = True, override_constant: Optional[Number] = None
    ) -> str:
        const = self._const if override_constant is None else override_constant
        return lp_format.affine_expression(name, self._named_coeffs(), const, include_constant)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return self._raw_repr(self._const)


def _is_linear(x) -> bool:
    return _is_number(x) or isinstance(x, (Var, LinExpr))


# --------------------
# Constraint


class Constr:
    """`expr <sense> 0`, with any right-hand side folded into the constant."""

    def __init__(
        self,
        e: Optional[LinOperand] = None,
        sense: RelOp = RelOp.EQ,
        name: Optional[str] = None,
        rhs: Optional[Number] = None,
    ):
        self._expr = e.copy() if isinstance(e, LinExpr) else LinExpr(e)
        self._const: Number = self._expr.const_expr()
        if rhs is not None:
            self._const -= rhs
        self._sense = RelOp(sense)
        self._name = name
        self._pi: Optional[float] = None
        self._slack: Optional[float] = None
        self.modified = True

    # -------------
    # Getters

    def name(self) -> Optional[str]:
        return self._name

    def set_name(self, name: Optional[str]) -> None:
        self._name = name

    def get_op(self) -> RelOp:
        return self._sense

    def constant(self) -> Number:
        return self._const

    def get_expr(self) -> LinExpr:
        """The left-hand side `expr` of `expr <sense> 0`."""
        res = self._expr.copy()
        res._const = self._const
        return res

    def terms(self) -> dict[int, Term]:
        return self._expr.terms()

    def lin_expr(self) -> dict[Var, Number]:
        return self._expr.lin_expr()

    def lower_bound(self) -> Optional[Number]:
        if self._sense in (RelOp.GE, RelOp.EQ):
            return -self._const
        return None

    def upper_bound(self) -> Optional[Number]:
        if self._sense in (RelOp.LE, RelOp.EQ):
            return -self._const
        return None

    def dual(self) -> Optional[float]:
        return self._pi

    def set_dual(self, pi: Optional[float]) -> None:
        self._pi = pi

    def slack(self) -> Optional[float]:
        return self._slack

    def set_slack(self, slack: Optional[float]) -> None:
        self._slack = slack

    def copy(self) -> "Constr":
        res = Constr(self._expr, self._sense, self._name)
        res._const = self._const
        return res

    # -------------
    # Mutation

    def add_term(self, var: Var, coeff: Number) -> None:
        self._expr.add_term(var, coeff)

    @typechecked
    def change_rhs(self, rhs: Number) -> None:
        self._const = -rhs
        self.modified = True

    def add_in_place(self, other: Union["Constr", LinOperand], sign: int = 1) -> "Constr":
        if isinstance(other, Constr):
            if self._sense * other._sense < 0:
                sign = -sign
            self._const += other._const * sign
            self._expr.add_in_place(other._expr, sign)
            # Signed codes are merged with a bitwise or, e.g. EQ | LE == LE.
            self._sense = RelOp(self._sense | other._sense * sign)
        elif _is_number(other):
            self._const += other * sign
        elif isinstance(other, LinExpr):
            self._const += other.const_expr() * sign
            self._expr.add_in_place(other, sign)
        elif isinstance(other, Var):
            self._expr.add_in_place(other, sign)
        else:
            raise TypeError(f"Cannot add {type(other).__name__} to Constr")
        return self

    def sub_in_place(self, other: Union["Constr", LinOperand]) -> "Constr":
        return self.add_in_place(other, -1)

    def __iadd__(self, other: Union["Constr", LinOperand]) -> "Constr":
        return self.add_in_place(other)

    def __isub__(self, other: Union["Constr", LinOperand]) -> "Constr":
        return self.sub_in_place(other)

    # -------------
    # Evaluation

    def value(self) -> Optional[Number]:
        res = self._const
        for term in self._expr.terms().values():
            value = term.var.value()
            if value is None:
                return None
            res += value * term.coeff
        return res

    def is_satisfied(self, eps: float = 0) -> bool:
        value = self.value()
        if value is None:
            return False
        match self._sense:
            case RelOp.EQ:
                return abs(value) <= eps
            case _:
                return value * self._sense >= -eps

    # -------------
    # Output

    def as_lp_constraint(self, name: str) -> str:
        return lp_format.constraint(name, self._expr._named_coeffs(), self._sense.symbol, -self._const)

    def as_lp_affine_expression(self, name: str, include_constant: bool = True) -> str:
        return self._expr.as_lp_affine_expression(name, include_constant, self._const)

    def __str__(self) -> str:
        lhs = self._expr.to_string(False, self._const)
        return f"{lhs} {self._sense.symbol} {lp_format.format_number(-self._const)}"

    def __repr__(self) -> str:
        return f"{self._expr._raw_repr(self._const)} {self._sense.symbol} 0"


# -------------
# Problem


class Problem:
    @typechecked
    def __init__(self, name: str = "NoName", sense: Sense = Sense.MINIMIZE):
        self._name = name.replace(" ", "_")
        self._sense = sense
        self._obj: Optional[LinExpr] = None
        self._constrs: dict[str, Constr] = {}
        self._status = Status.NOT_SOLVED
        self._sol_status = SolutionStatus.NO_SOLUTION_FOUND
        self._last_unused = 0

    # ----------------
    # Member functions

    def add_constraint(self, constr: Constr, name: Optional[str] = None) -> None:
        if not isinstance(constr, Constr):
            raise TypeError(f"Can only add Constr objects, got {type(constr).__name__}")
        if name is not None:
            constr.set_name(name)
        cname = constr.name()
        if cname is None:
            cname = self._unused_constraint_name()
        elif cname in self._constrs:
            logger.warning("Constraint `%s` already exists in %s and is overwritten", cname, self._name)
        self._constrs[cname] = constr

    def del_constraint(self, name: str) -> None:
        del self._constrs[name]

    def set_objective(self, expr: Union[Var, LinExpr, Number]) -> None:
        if isinstance(expr, LinExpr):
            self._obj = expr
        elif isinstance(expr, Var) or _is_number(expr):
            self._obj = LinExpr(expr)
        else:
            raise TypeError(f"Objective must be linear, got {type(expr).__name__}")

    def __iadd__(self, other) -> "Problem":
        name = None
        if isinstance(other, tuple):
            other, name = other
        if isinstance(other, Constr):
            self.add_constraint(other, name)
        elif _is_linear(other):
            self.set_objective(other)
            if name is not None:
                self._obj.set_name(name)
        else:
            raise TypeError(f"Cannot add {type(other).__name__} to Problem")
        return self

    def solve(self, solver: Optional["Solver"] = None) -> Status:
        from .solver import DefaultSolver

        if solver is None:
            solver = DefaultSolver(self)
        assert solver.problem() is self, "Solver was created for another problem"
        return solver.solve()

    def assign_status(self, status: Status, sol_status: Optional[SolutionStatus] = None) -> None:
        self._status = status
        self._sol_status = _STATUS_TO_SOLUTION[status] if sol_status is None else sol_status

    # Results keyed by variable name

    def assign_var_values(self, values: dict[str, Optional[Number]]) -> None:
        for var in self.variables():
            if var.name() in values:
                var.set_value(values[var.name()])

    def assign_reduced_costs(self, costs: dict[str, Optional[float]]) -> None:
        for var in self.variables():
            if var.name() in costs:
                var.set_reduced_cost(costs[var.name()])

    # Results keyed by constraint name

    def assign_duals(self, duals: dict[str, Optional[float]]) -> None:
        for name, pi in duals.items():
            self._constrs[name].set_dual(pi)

    def assign_slacks(self, slacks: dict[str, Optional[float]]) -> None:
        for name, slack in slacks.items():
            self._constrs[name].set_slack(slack)

    def set_solution(self, solution: Solution) -> None:
        var_dict = self.variables_dict()
        if (our := set(var_dict.keys())) != (other := set(solution.keys())):
            logger.warning("Variable names do not match: missing %s, extra %s", our - other, other - our)
        for k, v in solution.items():
            if k in var_dict:
                var_dict[k].set_value(v)

    def check_solution(self, solution: Solution, eps: Optional[float] = None) -> bool:
        if eps is None:
            eps = settings.eps
        self.set_solution(solution)
        all_res = True
        for name, constr in self._constrs.items():
            res = constr.is_satisfied(eps)
            logger.debug("[%s]: %s: %s", "OK" if res else "FAILED", name, constr)
            all_res = all_res and res
        return all_res

    def is_feasible(self, eps: Optional[float] = None) -> bool:
        if eps is None:
            eps = settings.eps
        return all(v.is_feasible(eps) for v in self.variables()) and all(
            c.is_satisfied(eps) for c in self._constrs.values()
        )

    def round_solution(self, eps: Optional[float] = None) -> None:
        for var in self.variables():
            var.set_value(var.rounded_value(eps))

    # ----------------
    # Getters

    def name(self) -> str:
        return self._name

    def sense(self) -> Sense:
        return self._sense

    def status(self) -> Status:
        return self._status

    def sol_status(self) -> SolutionStatus:
        return self._sol_status

    def get_objective(self) -> Optional[LinExpr]:
        return self._obj

    def objective_value(self) -> Optional[Number]:
        return None if self._obj is None else self._obj.value()

    def constraints(self) -> dict[str, Constr]:
        return dict(self._constrs)

    def variables(self) -> list[Var]:
        """Distinct variables of the objective and constraints, sorted by name."""
        found: dict[int, Var] = {}
        if self._obj is not None:
            for term in self._obj.terms().values():
                found.setdefault(term.var.index(), term.var)
        for constr in self._constrs.values():
            for term in constr.terms().values():
                found.setdefault(term.var.index(), term.var)
        return sorted(found.values(), key=lambda v: v.name())

    def variables_dict(self) -> dict[str, Var]:
        return {v.name(): v for v in self.variables()}

    def is_mip(self) -> bool:
        return any(v.is_integer() for v in self.variables())

    # ------------
    # Utils

    def as_lp_string(self) -> str:
        res = f"{self._name}:\n"
        res += "MINIMIZE\n" if self._sense == Sense.MINIMIZE else "MAXIMIZE\n"
        res += f"{self._obj if self._obj is not None else 0}\n"
        if len(self._constrs) > 0:
            res += "SUBJECT TO\n"
            for name, constr in self._constrs.items():
                res += constr.as_lp_constraint(name)
        res += "VARIABLES\n"
        for var in self.variables():
            res += f"{var.as_lp_variable()} {var.type().value}\n"
        return res

    def __repr__(self) -> str:
        return self.as_lp_string()

    def _unused_constraint_name(self) -> str:
        self._last_unused += 1
        while f"_C{self._last_unused}" in self._constrs:
            self._last_unused += 1
        return f"_C{self._last_unused}"


# --------------
# Utils


def lp_sum(xs: Iterable[Optional[LinOperand]]) -> LinExpr:
    res = LinExpr()
    for x in xs:
        res.add_in_place(x)
    return res


def lp_dot(v1: Iterable[LinOperand], v2: Iterable[LinOperand]) -> LinExpr:
    """Positional dot product; every pair needs at least one numeric side."""
    res = LinExpr()
    for a, b in zip(v1, v2):
        if _is_number(b) and _is_linear(a):
            res.add_in_place(a * b)
        elif _is_number(a) and _is_linear(b):
            res.add_in_place(b * a)
        else:
            raise TypeError(f"Cannot multiply {type(a).__name__} by {type(b).__name__}")
    return res
