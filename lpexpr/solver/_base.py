import logging
import time
from abc import ABC, abstractmethod
from typing import NamedTuple

from ..event import Event
from ..expr import Problem, Solution, Status

logger = logging.getLogger(__name__)


class SolverInfo(NamedTuple):
    runtime: float
    status: Status


class Solver(ABC):
    """Solves one `Problem` and writes the results back into its variables and constraints."""

    def __init__(self, problem: Problem):
        self.solution_found = Event["Solver", Solution]()  # solver, {name: value}
        self.solved = Event["Solver", SolverInfo]()  # solver, info
        self._problem = problem

    def problem(self) -> Problem:
        return self._problem

    def solve(self) -> Status:
        logger.debug("Solving %s with %s", self._problem.name(), type(self).__name__)
        start = time.perf_counter()
        status = self._solve()
        runtime = time.perf_counter() - start
        self._problem.assign_status(status)
        logger.debug("Solved %s in %.3fs: %s", self._problem.name(), runtime, status.label)

        if status == Status.OPTIMAL:
            self.solution_found.invoke(self, {v.name(): v.value() for v in self._problem.variables()})
        self.solved.invoke(self, SolverInfo(runtime, status))
        return status

    # Solver needs to implement this function

    @abstractmethod
    def _solve(self) -> Status: ...


class SolverError(Exception):
    def __init__(self, solver: Solver, msg: str = ""):
        super().__init__(msg)
        self.solver = solver
