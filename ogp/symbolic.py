"""
ogp/symbolic.py - Symbolic Annealing Entropy

Sympy form of the annealing entropy for the random 3-SAT pair model.

The calculator in entropy_gap.py works in double precision. This module keeps
the same quantity as a symbolic expression in the problem size n so that:

    - the "for all n" claim reduces to a structural check (linear in n, zero
      intercept, negative slope) instead of sampling n values
    - the slope can be evaluated to arbitrary precision (mpmath via sympy.N)
    - a lambdified evaluator gives fast numeric values over numpy arrays of n

Parameters are converted with Rational(repr(x)) so that 0.3 becomes 3/10 and
the expression carries no binary rounding of its inputs.
"""

from typing import Any, Callable, Dict

from sympy import Rational, Symbol, diff, expand, lambdify, log, N

from .entropy_gap import validate_parameters
from .types_config import ModelParameters

# Problem size
n = Symbol("n", positive=True, integer=True)


def _exact(value: float) -> Rational:
    return Rational(repr(float(value)))


def annealing_entropy_expr(params: ModelParameters):
    """n*H(beta) + alpha*n*log2(prob_pair) as a sympy expression in n."""
    validate_parameters(params)
    a = _exact(params.alpha)
    b = _exact(params.beta)
    p = _exact(params.prob_pair)
    entropy = -b * log(b, 2) - (1 - b) * log(1 - b, 2)
    return n * entropy + a * n * log(p, 2)


def coefficient_of_n(expr):
    """Slope of an expression linear in n."""
    return expand(expr).coeff(n, 1)


def evaluate_coefficient(params: ModelParameters, digits: int = 50):
    """Slope evaluated to the requested number of significant digits."""
    return N(coefficient_of_n(annealing_entropy_expr(params)), digits)


def certify_for_all_n(params: ModelParameters, digits: int = 50) -> Dict[str, Any]:
    """
    Structural check that the annealing entropy is negative for every n > 0.

    Returns:
        dict with linear (second derivative in n vanishes), zero_intercept,
        coefficient (sympy Float at `digits`), and holds (all three conditions).
    """
    expr = annealing_entropy_expr(params)
    linear = expand(diff(expr, n, 2)) == 0
    zero_intercept = expand(expr.subs(n, 0)) == 0
    slope = N(coefficient_of_n(expr), digits)
    negative = bool(slope < 0)
    return {
        "linear": bool(linear),
        "zero_intercept": bool(zero_intercept),
        "coefficient": slope,
        "holds": bool(linear and zero_intercept and negative),
    }


def annealing_evaluator(params: ModelParameters) -> Callable:
    """Lambdified annealing entropy: (n_values) -> values, numpy-aware."""
    expr = annealing_entropy_expr(params)
    return lambdify(n, expr, modules=["numpy", "math"])
