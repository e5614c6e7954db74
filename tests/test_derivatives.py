from concurrent.futures import ThreadPoolExecutor, as_completed

import numpy as np
import pytest
import sympy as sp

from symbolic_calculus import parse, Expression, NotDifferentiableError, OpType
from symbolic_calculus.expression_tree import DERIVATIVE_RULES
from symbolic_calculus.expression_tree.utils import shares_nodes, has_internal_aliasing

SAMPLE_POINTS = np.array([0.5, 1.0, 1.5, 2.0, 3.0])

DIFFERENTIABLE = [
  "x^2+3*x",
  "x^3-2*x+1",
  "4-3*x",
  "10-x-x",
  "(x+1)/(x-4)",
  "log(x^2+1)",
  "2^(3*x)",
  "3^x^2",
  "x*log(x)",
  "(x^3-2*x)/(x^2+1)",
  "log(x)/x",
  "x^0.5",
  "(2*x+1)^3",
  "log(log(x+2))",
  "1./(1. + 5^(-1*x))",
  "9/3*x",
]


# Exact derivative trees

@pytest.mark.parametrize("text, expected", [
  ("x", "1.0\n"),
  ("5", "0.0\n"),
  ("x+x", "+\n\t1.0\n\t1.0\n"),
  ("x-3", "-\n\t1.0\n\t0.0\n"),
  ("x*x", "+\n\t*\n\t\tx\n\t\t1.0\n\t*\n\t\t1.0\n\t\tx\n"),
  ("x^3", "*\n\t*\n\t\t3.0\n\t\t^\n\t\t\tx\n\t\t\t2.0\n\t1.0\n"),
  ("(x)", "()\n\t1.0\n"),
  ("log(x)", "/\n\t1.0\n\tx\n"),
  ("2^x", "*\n\t*\n\t\tlog()\n\t\t\t2.0\n\t\t^\n\t\t\t2.0\n\t\t\tx\n\t1.0\n"),
  ("x/2", "-\n\t/\n\t\t1.0\n\t\t2.0\n\t*\n\t\tx\n\t\t/\n\t\t\t0.0\n\t\t\t^\n\t\t\t\t2.0\n\t\t\t\t2.0\n"),
])
def test_derivative_tree(text, expected):
  assert parse(text).differentiate().convert_to_string(0) == expected


def test_differentiate_returns_expression():
  assert isinstance(parse("x^2").differentiate(), Expression)


# Numerical agreement

@pytest.mark.parametrize("text", DIFFERENTIABLE)
def test_matches_finite_difference(text):
  expr = parse(text)
  h = 1e-6
  numeric = (expr.evaluate(SAMPLE_POINTS + h) - expr.evaluate(SAMPLE_POINTS - h)) / (2 * h)
  symbolic = expr.differentiate().evaluate(SAMPLE_POINTS)
  np.testing.assert_allclose(symbolic, numeric, rtol=1e-5, atol=1e-5)


@pytest.mark.parametrize("text", DIFFERENTIABLE)
def test_matches_sympy(text):
  x = sp.Symbol('x')
  expr = parse(text)
  reference = sp.lambdify(x, sp.diff(expr.to_sympy(), x), 'numpy')
  expected = np.broadcast_to(np.asarray(reference(SAMPLE_POINTS), dtype=float), SAMPLE_POINTS.shape)
  np.testing.assert_allclose(expr.differentiate().evaluate(SAMPLE_POINTS), expected, rtol=1e-7, atol=1e-12)


def test_higher_derivatives_stay_defined():
  cube = parse("x^3")
  second = cube.differentiate().differentiate()
  third = second.differentiate()
  assert second.evaluate(2) == pytest.approx(12)
  assert third.evaluate(-5) == pytest.approx(6)


def test_constant_power_has_zero_derivative():
  assert parse("2^3").differentiate().evaluate(7) == 0


def test_scalar_derivative_values():
  assert parse("log(x)").differentiate().evaluate(2) == pytest.approx(0.5)
  assert parse("2^x").differentiate().evaluate(3) == pytest.approx(8 * np.log(2))
  assert parse("x*x").differentiate().evaluate(4) == 8


# Non-differentiable powers

@pytest.mark.parametrize("text", ["x^x", "2*x^x", "(x+1)^(x)", "log(x)^x", "x^(x^2)", "2^(x^x)"])
def test_variable_base_and_exponent_is_not_differentiable(text):
  with pytest.raises(NotDifferentiableError):
    parse(text).differentiate()


def test_not_differentiable_error_details():
  expr = parse("x^x")
  with pytest.raises(ArithmeticError) as exc_info:
    expr.differentiate()
  assert exc_info.value.node is expr.root
  assert expr.evaluate(2) == 4


def test_rule_table_covers_every_operator():
  assert set(DERIVATIVE_RULES) == set(OpType)
  assert DERIVATIVE_RULES[OpType.POW] is None


# Independence of derivative trees

@pytest.mark.parametrize("text", DIFFERENTIABLE)
def test_derivative_shares_no_nodes(text):
  expr = parse(text)
  derivative = expr.differentiate()
  assert not shares_nodes(expr, derivative)
  assert not has_internal_aliasing(derivative)
  assert not shares_nodes(derivative, expr.differentiate())


def test_differentiating_does_not_change_source():
  expr = parse("(x^3-2*x)/(x^2+1)")
  before = expr.convert_to_string(0)
  values = expr.evaluate(SAMPLE_POINTS)
  derivative = expr.differentiate()
  derivative.differentiate()
  assert expr.convert_to_string(0) == before
  np.testing.assert_array_equal(expr.evaluate(SAMPLE_POINTS), values)


def test_shared_tree_across_threads():
  expr = parse("(x^3-2*x)/(x^2+1) + log(x)*2^x")
  expected = expr.differentiate().evaluate(SAMPLE_POINTS)
  before = expr.convert_to_string(0)

  def work(_):
    return expr.differentiate().evaluate(SAMPLE_POINTS)

  with ThreadPoolExecutor(max_workers=8) as executor:
    futures = [executor.submit(work, i) for i in range(200)]
    for future in as_completed(futures):
      np.testing.assert_array_equal(future.result(), expected)
  assert expr.convert_to_string(0) == before
