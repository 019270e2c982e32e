"""Line-wrapped LP text encoding.

Every rendering is a sequence of tokens that already carry their own
separators (`" + x"`, `" - 2.000000000000 y"`, `" <= 5"`). `wrap` packs
them greedily behind a `name:` header so that no line grows past the
column budget, unless a single token is longer than the budget by itself.
"""

import math
from typing import Iterable, Optional, Sequence, Union

from .config import settings

Number = Union[float, int]


def format_number(x: Number) -> str:
    """Integral values print as integers, others with up to 12 decimals."""
    if not math.isfinite(x):
        return str(x)
    if x == int(x):
        return str(int(x))
    res = f"{x:.12f}".rstrip("0").rstrip(".")
    # Below the 12th decimal
    if res in ("0", "-0"):
        return repr(x)
    return res


def term_tokens(terms: Iterable[tuple[str, Number]]) -> list[str]:
    """Tokens for (name, coeff) pairs, in the order given."""
    res = []
    first = True
    for name, coeff in terms:
        if coeff < 0:
            sgn = " -"
            coeff = -coeff
        elif not first:
            sgn = " +"
        else:
            sgn = ""
        first = False
        if coeff == 1:
            res.append(f"{sgn} {name}")
        else:
            res.append(f"{sgn} {coeff:.12f} {name}")
    return res


def constant_token(const: Number) -> str:
    if const < 0:
        return f" - {format_number(-const)}"
    elif const > 0:
        return f" + {format_number(const)}"
    return ""


def wrap(name: str, tokens: Sequence[str], line_size: Optional[int] = None) -> list[str]:
    if line_size is None:
        line_size = settings.line_size
    result: list[str] = []
    line = f"{name}:"
    for token in tokens:
        if len(line) + len(token) > line_size:
            result.append(line)
            line = token
        else:
            line += token
    result.append(line)
    return result


def render_block(lines: Sequence[str]) -> str:
    return "\n".join(lines) + "\n"


def affine_expression(
    name: str, terms: Sequence[tuple[str, Number]], const: Number, include_constant: bool = True
) -> str:
    """Objective-style rendering: `name: <terms> +/- const`."""
    tokens = term_tokens(terms)
    if len(tokens) == 0:
        tokens.append(" 0")
    elif include_constant:
        tokens.append(constant_token(const))
    return render_block(wrap(name, tokens))


def constraint(name: str, terms: Sequence[tuple[str, Number]], symbol: str, rhs: Number) -> str:
    """Constraint rendering: `name: <terms> <symbol> <rhs>`."""
    tokens = term_tokens(terms)
    if len(tokens) == 0:
        tokens.append("0")
    tokens.append(f" {symbol} {format_number(rhs)}")
    return render_block(wrap(name, tokens))


def variable_bounds(name: str, lb: Optional[Number], ub: Optional[Number], continuous: bool) -> str:
    if lb is None and ub is None:
        return f"{name} free"
    if lb is not None and lb == ub:
        return f"{name} = {format_number(lb)}"
    if lb is None:
        res = "-inf <= "
    elif lb == 0 and continuous:
        res = ""
    else:
        res = f"{format_number(lb)} <= "
    res += name
    if ub is not None:
        res += f" <= {format_number(ub)}"
    return res
