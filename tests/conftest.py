import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), '..'))

import pytest
from symbolic_calculus import ExpressionParser


@pytest.fixture
def parser():
  return ExpressionParser()
