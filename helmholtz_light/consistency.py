''' Finite-difference consistency checks of the derivative accessors.

Each derivative is compared against the central difference, in one
variable, of the accessor one order below it. Validation only. '''

import logging
from collections import namedtuple

from .constants import ABSOLUTE_ERROR_FLOOR, DEFAULT_FD_STEP, DEFAULT_RTOL
from .exceptions import UnknownDerivativeError

logger = logging.getLogger(__name__)

# accessor -> (accessor one order below, variable differenced)
FINITE_DIFFERENCES = {
  "dTau": ("base", "tau"),
  "dTau2": ("dTau", "tau"),
  "dTau3": ("dTau2", "tau"),
  "dDelta": ("base", "delta"),
  "dDelta2": ("dDelta", "delta"),
  "dDelta3": ("dDelta2", "delta"),
  "dDelta_dTau": ("dTau", "delta"),
  "dDelta_dTau2": ("dTau2", "delta"),
  "dDelta2_dTau": ("dDelta_dTau", "delta"),
}

ConsistencyResult = namedtuple("ConsistencyResult",
  ["accessor", "analytic", "numerical", "error", "passed"])

def numerical_derivative(term, accessor:str, tau:float, delta:float,
  h:float=DEFAULT_FD_STEP) -> float:
  ''' Central difference approximating term.<accessor>(tau, delta). '''
  try:
    lower, variable = FINITE_DIFFERENCES[accessor]
  except KeyError as e:
    raise UnknownDerivativeError(
      f"No finite difference defined for '{accessor}'") from e
  f = getattr(term, lower)
  if variable == "tau":
    return (f(tau + h, delta) - f(tau - h, delta)) / (2.0 * h)
  return (f(tau, delta + h) - f(tau, delta - h)) / (2.0 * h)

def derivative_error(analytic:float, numerical:float) -> float:
  ''' Relative error against the numerical value, or absolute error when
  that value is below ABSOLUTE_ERROR_FLOOR. '''
  if abs(numerical) > ABSOLUTE_ERROR_FLOOR:
    return abs((analytic - numerical) / numerical)
  return abs(analytic - numerical)

def check_term(term, tau:float, delta:float, h:float=DEFAULT_FD_STEP,
  rtol:float=DEFAULT_RTOL, accessors=None) -> list:
  ''' Checks every derivative accessor (or the named subset) of a term or
  term set at (tau, delta). Returns a list of ConsistencyResult. '''
  results = []
  for accessor in (accessors or FINITE_DIFFERENCES):
    numerical = numerical_derivative(term, accessor, tau, delta, h)
    analytic = getattr(term, accessor)(tau, delta)
    error = derivative_error(analytic, numerical)
    passed = bool(error < rtol)
    if not passed:
      logger.warning("%r.%s at tau=%g, delta=%g: analytic %.17g, "
        "numerical %.17g, error %.3g", term, accessor, tau, delta,
        analytic, numerical, error)
    results.append(
      ConsistencyResult(accessor, analytic, numerical, error, passed))
  return results
