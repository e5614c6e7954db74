import sys
import os
# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
from symbolic_calculus import parse, ParseError, NotDifferentiableError
from symbolic_calculus.logging_system import LogLevel, configure_logging

EXPRESSIONS = [
  "10*x^3 + 2*(15+x)",
  "1./(1. + 5^(-1*x))",
  "log(x^2 + 1) / x",
  "4^3^2",
  "x^x",
  "1+2+",
]


def show(text: str):
  print(f"Input: {text}")
  try:
    expr = parse(text)
  except ParseError as exc:
    print(f"  parse error at {exc.expression!r}\n")
    return

  print("  Parse tree:")
  print(expr.convert_to_string(2), end="")
  print(f"  Infix: {expr}")
  print(f"  f(2) = {expr.evaluate(2.0)}")

  try:
    derivative = expr.differentiate()
  except NotDifferentiableError as exc:
    print(f"  derivative: {exc}\n")
    return

  xs = np.linspace(0.5, 2.5, 5)
  print(f"  f'(x) at {xs}: {derivative.evaluate(xs)}")
  print(f"  derivative has {derivative.size()} nodes, depth {derivative.depth()}\n")


if __name__ == "__main__":
  configure_logging(log_level=LogLevel.MODERATE)
  for text in EXPRESSIONS:
    show(text)
