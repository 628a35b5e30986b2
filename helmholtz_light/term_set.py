''' Ordered collection of Helmholtz terms evaluated as one sum. '''

from .derivatives import HelmholtzDerivatives
from .registry import build
from .summation import kahan_sum

class HelmholtzTermSet:
  ''' Residual or ideal-gas part of an equation of state: the sum of its
  terms. The fused all() fills one aggregate; individual accessors sum
  the matching accessor over the terms. '''

  def __init__(self, terms=()):
    self.terms = list(terms)

  def append(self, term):
    self.terms.append(term)

  def extend(self, terms):
    self.terms.extend(terms)

  def __len__(self):
    return len(self.terms)

  def __iter__(self):
    return iter(self.terms)

  def __getitem__(self, i):
    return self.terms[i]

  def all(self, tau:float, delta:float) -> HelmholtzDerivatives:
    ''' Returns a fresh aggregate accumulated over all terms. '''
    derivs = HelmholtzDerivatives()
    for term in self.terms:
      term.all(tau, delta, derivs)
    return derivs

  def _sum(self, accessor, tau, delta) -> float:
    return kahan_sum([getattr(term, accessor)(tau, delta)
      for term in self.terms])

  def base(self, tau, delta):
    return self._sum("base", tau, delta)

  def dTau(self, tau, delta):
    return self._sum("dTau", tau, delta)

  def dTau2(self, tau, delta):
    return self._sum("dTau2", tau, delta)

  def dTau3(self, tau, delta):
    return self._sum("dTau3", tau, delta)

  def dDelta(self, tau, delta):
    return self._sum("dDelta", tau, delta)

  def dDelta2(self, tau, delta):
    return self._sum("dDelta2", tau, delta)

  def dDelta3(self, tau, delta):
    return self._sum("dDelta3", tau, delta)

  def dDelta_dTau(self, tau, delta):
    return self._sum("dDelta_dTau", tau, delta)

  def dDelta_dTau2(self, tau, delta):
    return self._sum("dDelta_dTau2", tau, delta)

  def dDelta2_dTau(self, tau, delta):
    return self._sum("dDelta2_dTau", tau, delta)

  def to_dicts(self) -> list:
    return [term.to_dict() for term in self.terms]

  @classmethod
  def from_dicts(cls, records) -> "HelmholtzTermSet":
    return cls(build(record) for record in records)

  def __repr__(self):
    return f"HelmholtzTermSet({self.terms!r})"
