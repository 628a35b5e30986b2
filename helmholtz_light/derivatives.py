''' Aggregate of the reduced Helmholtz energy and its partial derivatives
with respect to tau (reciprocal reduced temperature) and delta (reduced
density), up to third order. '''

from .exceptions import UnknownDerivativeError

# Field names in canonical order
FIELDS = ("value",
  "d_dtau", "d_ddelta",
  "d2_dtau2", "d2_ddelta2", "d2_ddelta_dtau",
  "d3_dtau3", "d3_ddelta3", "d3_ddelta2_dtau", "d3_ddelta_dtau2")

# Term contract accessor name -> aggregate field
ACCESSOR_FIELDS = {
  "base": "value",
  "dTau": "d_dtau",
  "dDelta": "d_ddelta",
  "dTau2": "d2_dtau2",
  "dDelta2": "d2_ddelta2",
  "dDelta_dTau": "d2_ddelta_dtau",
  "dTau3": "d3_dtau3",
  "dDelta3": "d3_ddelta3",
  "dDelta2_dTau": "d3_ddelta2_dtau",
  "dDelta_dTau2": "d3_ddelta_dtau2",
}

# Order of each accessor in (tau, delta)
ACCESSOR_ORDERS = {
  "base": (0, 0),
  "dTau": (1, 0),
  "dDelta": (0, 1),
  "dTau2": (2, 0),
  "dDelta2": (0, 2),
  "dDelta_dTau": (1, 1),
  "dTau3": (3, 0),
  "dDelta3": (0, 3),
  "dDelta2_dTau": (1, 2),
  "dDelta_dTau2": (2, 1),
}


class HelmholtzDerivatives:
  ''' Reduced Helmholtz energy and its nine partial derivatives.

  Every field starts at zero and is only ever changed by adding another
  contribution, so accumulation over terms does not depend on term order
  (up to rounding). While a vectorized term evaluates its elements the
  fields may temporarily hold numpy arrays of per-element contributions.
  '''

  __slots__ = FIELDS

  def __init__(self, **fields):
    for name in FIELDS:
      setattr(self, name, 0.0)
    for name, val in fields.items():
      if name not in FIELDS:
        raise UnknownDerivativeError(f"Unknown derivative field '{name}'")
      setattr(self, name, val)

  def __iadd__(self, other:"HelmholtzDerivatives"):
    for name in FIELDS:
      setattr(self, name, getattr(self, name) + getattr(other, name))
    return self

  def __add__(self, other:"HelmholtzDerivatives"):
    out = self.copy()
    out += other
    return out

  def __repr__(self):
    body = ", ".join(f"{name}={getattr(self, name)!r}" for name in FIELDS)
    return f"HelmholtzDerivatives({body})"

  def copy(self) -> "HelmholtzDerivatives":
    return HelmholtzDerivatives(**self.as_dict())

  def as_dict(self) -> dict:
    return {name: getattr(self, name) for name in FIELDS}

  def get(self, accessor:str):
    ''' Returns the field matching a term contract accessor name, e.g.
    get("dDelta2_dTau") is d3_ddelta2_dtau. '''
    try:
      return getattr(self, ACCESSOR_FIELDS[accessor])
    except KeyError as e:
      raise UnknownDerivativeError(
        f"Unknown derivative accessor '{accessor}'") from e
