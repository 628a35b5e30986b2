''' Term contract shared by every Helmholtz term kind.

A term is a pure function alpha(tau, delta). It exposes the value, the nine
partial derivatives up to third order, and a fused all() that adds every
quantity into a HelmholtzDerivatives aggregate in one pass. A term kind
implements either all() or the individual accessors; the base class derives
the other half. '''

import numpy as np

from .derivatives import ACCESSOR_FIELDS, HelmholtzDerivatives
from .exceptions import HelmholtzConfigurationError

class BaseHelmholtzTerm:
  ''' Base class of all term kinds. Subclasses override either all() or the
  ten individual accessors (base, dTau, ..., dDelta2_dTau). '''

  # Record type tag, set by registry.register
  type_name = None

  def __init__(self, enabled:bool=True):
    self.enabled = enabled

  def all(self, tau:float, delta:float, derivs:HelmholtzDerivatives):
    ''' Adds the value and all nine derivatives at (tau, delta) to derivs. '''
    if not self.enabled:
      return
    for accessor, field in ACCESSOR_FIELDS.items():
      setattr(derivs, field,
        getattr(derivs, field) + getattr(self, accessor)(tau, delta))

  def evaluate(self, tau:float, delta:float) -> HelmholtzDerivatives:
    ''' Returns a fresh aggregate holding this term alone. '''
    derivs = HelmholtzDerivatives()
    self.all(tau, delta, derivs)
    return derivs

  def _from_all(self, tau, delta, field) -> float:
    derivs = HelmholtzDerivatives()
    self.all(tau, delta, derivs)
    return float(getattr(derivs, field))

  def base(self, tau:float, delta:float) -> float:
    return self._from_all(tau, delta, "value")

  def dTau(self, tau:float, delta:float) -> float:
    return self._from_all(tau, delta, "d_dtau")

  def dTau2(self, tau:float, delta:float) -> float:
    return self._from_all(tau, delta, "d2_dtau2")

  def dTau3(self, tau:float, delta:float) -> float:
    return self._from_all(tau, delta, "d3_dtau3")

  def dDelta(self, tau:float, delta:float) -> float:
    return self._from_all(tau, delta, "d_ddelta")

  def dDelta2(self, tau:float, delta:float) -> float:
    return self._from_all(tau, delta, "d2_ddelta2")

  def dDelta3(self, tau:float, delta:float) -> float:
    return self._from_all(tau, delta, "d3_ddelta3")

  def dDelta_dTau(self, tau:float, delta:float) -> float:
    return self._from_all(tau, delta, "d2_ddelta_dtau")

  def dDelta_dTau2(self, tau:float, delta:float) -> float:
    return self._from_all(tau, delta, "d3_ddelta_dtau2")

  def dDelta2_dTau(self, tau:float, delta:float) -> float:
    return self._from_all(tau, delta, "d3_ddelta2_dtau")

  def to_dict(self) -> dict:
    ''' Record with a "type" tag and every coefficient. '''
    raise NotImplementedError(
      f"{type(self).__name__} does not describe itself as a record")

  @classmethod
  def from_dict(cls, record:dict) -> "BaseHelmholtzTerm":
    ''' Rebuilds a term from the record produced by to_dict. '''
    params = {k: v for k, v in record.items() if k != "type"}
    return cls(**params)

  def __repr__(self):
    return f"{type(self).__name__}(enabled={self.enabled})"

''' Coefficient array utilities. '''

def coefficient_arrays(**coeffs) -> dict:
  ''' Converts flat coefficient sequences to float numpy arrays, checking
  that all of them share one length. None entries become NaN. '''
  arrays = {}
  for name, values in coeffs.items():
    if values is None:
      values = []
    flat = np.ravel(np.asarray(values, dtype=object))
    arrays[name] = np.array([np.nan if v is None else v for v in flat],
      dtype=float)
  lengths = {name: arr.size for name, arr in arrays.items()}
  if len(set(lengths.values())) > 1:
    raise HelmholtzConfigurationError(
      f"Coefficient arrays have mismatched lengths: {lengths}")
  return arrays

def to_record_list(arr) -> list:
  ''' Array to a JSON-friendly list, non-finite entries stored as None. '''
  return [float(v) if np.isfinite(v) else None for v in np.ravel(arr)]
