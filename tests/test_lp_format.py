import pytest
from pydantic import ValidationError

from lpexpr import Settings, Var, lp_sum, settings
from lpexpr import lp_format


class TestFormatNumber:
    @pytest.mark.parametrize(
        "x, expected",
        [
            (5, "5"),
            (5.0, "5"),
            (-3.0, "-3"),
            (-0.0, "0"),
            (2.5, "2.5"),
            (0.1, "0.1"),
            (1 / 3, "0.333333333333"),
            (float("inf"), "inf"),
            (1e-13, "1e-13"),
            (-2e-14, "-2e-14"),
        ],
    )
    def test_format_number(self, x, expected):
        assert lp_format.format_number(x) == expected


class TestTokens:
    def test_term_tokens(self):
        tokens = lp_format.term_tokens([("x", 1), ("y", -2), ("z", 3)])
        assert tokens == [" x", " - 2.000000000000 y", " + 3.000000000000 z"]

    def test_first_negative(self):
        assert lp_format.term_tokens([("x", -1), ("y", 1)]) == [" - x", " + y"]

    @pytest.mark.parametrize("const, expected", [(0, ""), (2, " + 2"), (-2.5, " - 2.5"), (1e-13, " + 1e-13")])
    def test_constant_token(self, const, expected):
        assert lp_format.constant_token(const) == expected


class TestWrap:
    def test_single_line(self):
        assert lp_format.wrap("c1", [" x", " + y", " <= 5"]) == ["c1: x + y <= 5"]

    def test_overflow(self):
        a = " " + "a" * 39
        b = " " + "b" * 39
        assert lp_format.wrap("c", [a, b], 78) == ["c:" + a, b]

    def test_exact_budget(self):
        token = " " + "a" * 75
        assert lp_format.wrap("c", [token], 78) == ["c:" + token]
        assert lp_format.wrap("c", [token + "a"], 78) == ["c:", token + "a"]

    def test_long_token_alone(self):
        token = " " + "x" * 100
        lines = lp_format.wrap("c", [" y", token, " z"], 78)
        assert lines == ["c: y", token, " z"]

    def test_uses_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "line_size", 10)
        assert lp_format.wrap("c", [" aaaa", " bbbb"]) == ["c: aaaa", " bbbb"]

    def test_line_budget(self):
        xs = [Var(f"var_{i:02d}") for i in range(40)]
        c = lp_sum((i + 1.5) * x for i, x in enumerate(xs)) <= 100
        text = c.as_lp_constraint("budget")
        lines = text.splitlines()
        assert len(lines) > 1
        assert all(len(line) <= 78 for line in lines)
        assert text.endswith(" <= 100\n")
        assert "".join(lines) == "budget:" + "".join(
            lp_format.term_tokens([(x.name(), i + 1.5) for i, x in enumerate(xs)])
        ) + " <= 100"

    def test_objective_line_budget(self):
        xs = [Var(f"cost_{i:02d}") for i in range(40)]
        expr = lp_sum((i + 1.5) * x for i, x in enumerate(xs)) - 7
        text = expr.as_lp_affine_expression("obj")
        lines = text.splitlines()
        assert len(lines) > 1
        assert all(len(line) <= 78 for line in lines)
        assert text.endswith(" - 7\n")
        assert "".join(lines) == "obj:" + "".join(
            lp_format.term_tokens([(x.name(), i + 1.5) for i, x in enumerate(xs)])
        ) + " - 7"


class TestRender:
    def test_constraint_without_terms(self):
        assert lp_format.constraint("c", [], "<=", 3) == "c:0 <= 3\n"
        assert lp_format.constraint("c", [], ">=", -1) == "c:0 >= -1\n"

    def test_affine_expression(self):
        assert lp_format.affine_expression("obj", [("x", 1), ("y", 4)], -2) == "obj: x + 4.000000000000 y - 2\n"
        assert lp_format.affine_expression("obj", [("x", 1)], 3, include_constant=False) == "obj: x\n"
        assert lp_format.affine_expression("obj", [], 3) == "obj: 0\n"

    def test_expr_as_lp_affine_expression(self):
        x = Var("x")
        y = Var("y")
        expr = x + 4 * y + 1
        assert expr.as_lp_affine_expression("obj") == "obj: x + 4.000000000000 y + 1\n"
        assert expr.as_lp_affine_expression("obj") == expr.as_lp_affine_expression("obj")

    def test_constr_as_lp_affine_expression(self):
        x = Var("x", 0, 4)
        y = Var("y", -1, 1)
        c = x + 4 * y <= 5
        assert c.as_lp_affine_expression("obj") == "obj: x + 4.000000000000 y - 5\n"
        assert c.as_lp_affine_expression("obj", include_constant=False) == "obj: x + 4.000000000000 y\n"

    def test_constr_as_lp_constraint(self):
        x = Var("x")
        y = Var("y")
        assert (0.5 * x - y >= -2).as_lp_constraint("c1") == "c1: 0.500000000000 x - y >= -2\n"

    def test_variable_bounds(self):
        assert lp_format.variable_bounds("x", 0, None, True) == "x"
        assert lp_format.variable_bounds("x", 0, None, False) == "0 <= x"


class TestSettings:
    def test_defaults(self):
        assert Settings().line_size == 78
        assert Settings().eps == 1e-7

    def test_validation(self):
        with pytest.raises(ValidationError):
            Settings(line_size=0)
        with pytest.raises(ValidationError):
            Settings().eps = -1
