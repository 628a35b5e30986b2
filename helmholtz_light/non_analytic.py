''' Non-analytic residual Helmholtz term for the critical region.

Each element is
  n * DELTA**b * delta * PSI,
with
  PSI   = exp(-C (delta-1)**2 - D (tau-1)**2),
  DELTA = theta**2 + B ((delta-1)**2)**a,
  theta = (1 - tau) + A ((delta-1)**2)**(1/(2 beta)).
See Wagner and Pruss (2002), J. Phys. Chem. Ref. Data, for the IAPWS-95
use of this form.

Derivatives are built from closed forms for theta and the B term in delta,
the product rule for DELTA, the chain rule for DELTA**b and the Leibniz rule
for DELTA**b * PSI. Two singular configurations are regularized by
substituting exact zeros:
  |delta - 1| < EPSILON_TOLERANCE: all delta-derivatives of theta and of the
    B term, hence of DELTA, are zero;
  |DELTA| < EPSILON_TOLERANCE (critical point): the derivatives of DELTA**b
    with respect to DELTA are zero.
'''

import logging

import numpy as np

from .base import BaseHelmholtzTerm, coefficient_arrays, to_record_list
from .calculus import compose, product, scale
from .constants import EPSILON_TOLERANCE
from .derivatives import FIELDS, HelmholtzDerivatives
from .registry import register
from .summation import kahan_sum

logger = logging.getLogger(__name__)

_COLUMNS = ("n", "a", "b", "beta", "A", "B", "C", "D")

@register("ResidualHelmholtzNonAnalytic")
class ResidualHelmholtzNonAnalytic(BaseHelmholtzTerm):
  ''' Sum of non-analytic elements with coefficients (n, a, b, beta, A, B, C,
  D) given as equal-length sequences. '''

  def __init__(self, n, a, b, beta, A, B, C, D, enabled:bool=True):
    super().__init__(enabled)
    self.elements = coefficient_arrays(
      n=n, a=a, b=b, beta=beta, A=A, B=B, C=C, D=D)
    logger.debug("Constructed non-analytic term with %d elements", len(self))

  def __len__(self):
    return self.elements["n"].size

  def _DELTA(self, tau, delta) -> HelmholtzDerivatives:
    ''' DELTA and its partials, per element. '''
    el = self.elements
    A, B, a = el["A"], el["B"], el["a"]
    k = 0.5 / el["beta"]
    s = delta - 1.0
    q = s * s
    theta = (1.0 - tau) + A * q**k
    T = B * q**a
    zeros = np.zeros_like(theta)
    if abs(s) < EPSILON_TOLERANCE:
      theta_d = theta_dd = theta_ddd = zeros
      T_d = T_dd = T_ddd = zeros
    else:
      # Derivatives of A q**k and B q**a with q = (delta-1)**2
      theta_d = 2.0 * k * A * s * q**(k - 1.0)
      theta_dd = 2.0 * k * A * (2.0 * k - 1.0) * q**(k - 1.0)
      theta_ddd = (2.0 * k * A * (2.0 * k - 1.0) * (2.0 * k - 2.0)
        * s * q**(k - 2.0))
      T_d = 2.0 * a * B * s * q**(a - 1.0)
      T_dd = 2.0 * a * B * (2.0 * a - 1.0) * q**(a - 1.0)
      T_ddd = (2.0 * a * B * (2.0 * a - 1.0) * (2.0 * a - 2.0)
        * s * q**(a - 2.0))
    # theta is linear in tau with slope -1
    return HelmholtzDerivatives(
      value=theta**2 + T,
      d_dtau=-2.0 * theta,
      d_ddelta=2.0 * theta * theta_d + T_d,
      d2_dtau2=zeros + 2.0,
      d2_ddelta2=2.0 * theta_d**2 + 2.0 * theta * theta_dd + T_dd,
      d2_ddelta_dtau=-2.0 * theta_d,
      d3_dtau3=zeros,
      d3_ddelta3=(6.0 * theta_d * theta_dd + 2.0 * theta * theta_ddd
        + T_ddd),
      d3_ddelta2_dtau=-2.0 * theta_dd,
      d3_ddelta_dtau2=zeros,
    )

  def _PSI(self, tau, delta) -> HelmholtzDerivatives:
    ''' Gaussian bell PSI and its partials, per element. PSI separates into
    a delta factor and a tau factor, so each partial is PSI times a
    polynomial in each variable. '''
    el = self.elements
    C, D = el["C"], el["D"]
    s, r = delta - 1.0, tau - 1.0
    PSI = np.exp(-C * s**2 - D * r**2)
    p1 = -2.0 * C * s
    p2 = 4.0 * C**2 * s**2 - 2.0 * C
    p3 = 12.0 * C**2 * s - 8.0 * C**3 * s**3
    r1 = -2.0 * D * r
    r2 = 4.0 * D**2 * r**2 - 2.0 * D
    r3 = 12.0 * D**2 * r - 8.0 * D**3 * r**3
    return HelmholtzDerivatives(
      value=PSI,
      d_dtau=r1 * PSI, d_ddelta=p1 * PSI,
      d2_dtau2=r2 * PSI, d2_ddelta2=p2 * PSI, d2_ddelta_dtau=p1 * r1 * PSI,
      d3_dtau3=r3 * PSI, d3_ddelta3=p3 * PSI,
      d3_ddelta2_dtau=p2 * r1 * PSI, d3_ddelta_dtau2=p1 * r2 * PSI,
    )

  def element_derivatives(self, tau:float, delta:float
    ) -> HelmholtzDerivatives:
    ''' Per-element contributions to the value and all nine derivatives,
    as arrays. Allocated fresh on every call. '''
    tau, delta = np.float64(tau), np.float64(delta)
    b = self.elements["b"]
    with np.errstate(divide="ignore", invalid="ignore"):
      DELTA = self._DELTA(tau, delta)
      D = DELTA.value
      critical = np.abs(D) < EPSILON_TOLERANCE
      # Derivatives of DELTA**b with respect to DELTA
      f1 = np.where(critical, 0.0, b * D**(b - 1.0))
      f2 = np.where(critical, 0.0, b * (b - 1.0) * D**(b - 2.0))
      f3 = np.where(critical, 0.0,
        b * (b - 1.0) * (b - 2.0) * D**(b - 3.0))
      DELTAb = compose(D**b, f1, f2, f3, DELTA)
    linear_delta = HelmholtzDerivatives(value=delta, d_ddelta=1.0)
    return scale(product(linear_delta,
      product(DELTAb, self._PSI(tau, delta))), self.elements["n"])

  def all(self, tau:float, delta:float, derivs:HelmholtzDerivatives):
    if not self.enabled or len(self) == 0:
      return
    contributions = self.element_derivatives(tau, delta)
    for name in FIELDS:
      setattr(derivs, name,
        getattr(derivs, name) + float(np.sum(getattr(contributions, name))))

  def _from_all(self, tau, delta, field) -> float:
    # Individual accessors reduce with compensated summation
    if not self.enabled or len(self) == 0:
      return 0.0
    return kahan_sum(getattr(self.element_derivatives(tau, delta), field))

  def to_dict(self) -> dict:
    record = {"type": self.type_name}
    record.update({name: to_record_list(self.elements[name])
      for name in _COLUMNS})
    record["enabled"] = self.enabled
    return record

  def __repr__(self):
    return f"{type(self).__name__}(N={len(self)}, enabled={self.enabled})"
