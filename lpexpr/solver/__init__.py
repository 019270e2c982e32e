from ._base import Solver, SolverError, SolverInfo
from .default import DefaultSolver
from .scipy_lp import ScipyLpSolver
