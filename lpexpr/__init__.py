from .config import Settings, settings
from .expr import (
    DUMMY_NAME,
    Bound,
    Constr,
    LinExpr,
    Problem,
    RelOp,
    Sense,
    Solution,
    SolutionStatus,
    Status,
    Term,
    Var,
    VType,
    lp_dot,
    lp_sum,
)
