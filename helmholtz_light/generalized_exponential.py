''' Generalized-exponential residual Helmholtz term.

Each element is
  n * delta**d * tau**t * exp(u(delta, tau)),
where u is a sum of optional modifiers, each depending on only one of
delta or tau:
  -c * delta**l                  (density-power cutoff)
  -omega * tau**m                (temperature-power cutoff)
  -eta1 * (delta - epsilon1)     (linear density well)
  -eta2 * (delta - epsilon2)**2  (quadratic density well)
  -beta1 * (tau - gamma1)        (linear temperature well)
  -beta2 * (tau - gamma2)**2     (quadratic temperature well)
Power-law, exponential, Gaussian-bell, Lemmon (2005) and GERG-2008 terms are
all members of this family.

Elements are stored column-wise in numpy arrays and evaluated together.
Because the element is a power times an exponential, its logarithmic
derivatives factor as
  d(term)/d(delta) = term * B_delta / delta,
  d2(term)/d(delta)2 = term * B_delta2 / delta**2, ...
with B_delta = delta * du/ddelta + d, and so on (see exponent_factors).
'''

import logging

import numpy as np

from .base import BaseHelmholtzTerm, coefficient_arrays, to_record_list
from .derivatives import HelmholtzDerivatives
from .registry import register

logger = logging.getLogger(__name__)

# Element columns and the value used where a modifier is not configured
_COLUMNS = {
  "n": 0.0, "d": 0.0, "t": 0.0,
  "c": 0.0, "l_double": np.nan, "l_int": 0.0,
  "omega": 0.0, "m_double": 0.0,
  "eta1": np.nan, "epsilon1": 0.0,
  "eta2": np.nan, "epsilon2": 0.0,
  "beta1": np.nan, "gamma1": 0.0,
  "beta2": np.nan, "gamma2": 0.0,
}

_FLAGS = ("delta_li_in_u", "tau_mi_in_u",
  "eta1_in_u", "eta2_in_u", "beta1_in_u", "beta2_in_u")

''' Modifiers of u. Each returns (u, du, d2u, d3u) with respect to its own
variable, as arrays over elements; unconfigured elements contribute 0. '''

def _density_power_cutoff(el, delta):
  valid = np.isfinite(el["l_double"]) & (el["l_int"] > 0)
  l = np.where(valid, el["l_double"], 0.0)
  u = np.where(valid, -el["c"] * delta ** el["l_int"], 0.0)
  du = l * u / delta
  d2u = (l - 1.0) * du / delta
  d3u = (l - 2.0) * d2u / delta
  return u, du, d2u, d3u

def _temperature_power_cutoff(el, tau):
  valid = np.abs(el["m_double"]) > 0
  m = np.where(valid, el["m_double"], 0.0)
  u = np.where(valid, -el["omega"] * tau ** m, 0.0)
  du = m * u / tau
  d2u = (m - 1.0) * du / tau
  d3u = (m - 2.0) * d2u / tau
  return u, du, d2u, d3u

def _linear_well(coeff, center, x):
  valid = np.isfinite(coeff)
  zeros = np.zeros(coeff.shape)
  return (np.where(valid, -coeff * (x - center), 0.0),
    np.where(valid, -coeff, 0.0), zeros, zeros)

def _quadratic_well(coeff, center, x):
  valid = np.isfinite(coeff)
  return (np.where(valid, -coeff * (x - center)**2, 0.0),
    np.where(valid, -2.0 * coeff * (x - center), 0.0),
    np.where(valid, -2.0 * coeff, 0.0), np.zeros(coeff.shape))

# flag -> (variable, modifier)
_MODIFIERS = {
  "delta_li_in_u": ("delta", _density_power_cutoff),
  "tau_mi_in_u": ("tau", _temperature_power_cutoff),
  "eta1_in_u": ("delta",
    lambda el, x: _linear_well(el["eta1"], el["epsilon1"], x)),
  "eta2_in_u": ("delta",
    lambda el, x: _quadratic_well(el["eta2"], el["epsilon2"], x)),
  "beta1_in_u": ("tau",
    lambda el, x: _linear_well(el["beta1"], el["gamma1"], x)),
  "beta2_in_u": ("tau",
    lambda el, x: _quadratic_well(el["beta2"], el["gamma2"], x)),
}

def _log_factor(d, x, du, d2u, d3u):
  ''' B, B2, B3 combinators of x**d * exp(u(x)), expressed relative to x:
  the k-th derivative of x**d * exp(u) is x**(d-k) * exp(u) * Bk. '''
  x_du = x * du
  B1 = x_du + d
  B2 = x**2 * (d2u + du**2) + 2.0 * d * x_du + d * (d - 1.0)
  B3 = (x**3 * d3u + 3.0 * d * x**2 * d2u + 3.0 * x**3 * d2u * du
    + 3.0 * d * x_du**2 + 3.0 * d * (d - 1.0) * x_du
    + d * (d - 1.0) * (d - 2.0) + x_du**3)
  return B1, B2, B3


@register("ResidualHelmholtzGeneralizedExponential")
class ResidualHelmholtzGeneralizedExponential(BaseHelmholtzTerm):
  ''' Sum of generalized-exponential elements. Start empty and add element
  families with the add_* builders. '''

  def __init__(self, enabled:bool=True):
    super().__init__(enabled)
    self.elements = {name: np.zeros(0) for name in _COLUMNS}
    for flag in _FLAGS:
      setattr(self, flag, False)
    self._resolve_modifiers()

  def __len__(self):
    return self.elements["n"].size

  def _resolve_modifiers(self):
    ''' Hoists the presence flags into per-variable lists of modifiers. '''
    self._delta_modifiers = [fn for flag, (var, fn) in _MODIFIERS.items()
      if getattr(self, flag) and var == "delta"]
    self._tau_modifiers = [fn for flag, (var, fn) in _MODIFIERS.items()
      if getattr(self, flag) and var == "tau"]

  def add_elements(self, n, d, t, flags=(), **modifiers):
    ''' Appends elements given flat coefficient sequences of one length.
    modifiers are any of the modifier columns (c, l_double, l_int, omega,
    m_double, eta1, epsilon1, ...); flags names the modifiers to enable. '''
    unknown = set(modifiers) - set(_COLUMNS)
    unknown |= set(flags) - set(_FLAGS)
    if unknown:
      raise TypeError(f"Unknown generalized exponential parameters: "
        f"{sorted(unknown)}")
    cols = coefficient_arrays(n=n, d=d, t=t, **modifiers)
    N = cols["n"].size
    for name, default in _COLUMNS.items():
      new = cols.get(name, np.full(N, default))
      self.elements[name] = np.concatenate((self.elements[name], new))
    for flag in flags:
      setattr(self, flag, True)
    self._resolve_modifiers()
    logger.debug("Added %d generalized exponential elements (%s)",
      N, ", ".join(flags) or "no modifiers")
    return self

  def add_power(self, n, d, t, l):
    ''' n * delta**d * tau**t * exp(-delta**l); l = 0 disables the cutoff. '''
    l = np.asarray(l, dtype=float)
    return self.add_elements(n, d, t, flags=("delta_li_in_u",),
      c=np.where(l > 0, 1.0, 0.0), l_double=l, l_int=np.trunc(l))

  def add_exponential(self, n, d, t, g, l):
    ''' n * delta**d * tau**t * exp(-g * delta**l) '''
    l = np.asarray(l, dtype=float)
    return self.add_elements(n, d, t, flags=("delta_li_in_u",),
      c=g, l_double=l, l_int=np.trunc(l))

  def add_lemmon2005(self, n, d, t, l, m):
    ''' n * delta**d * tau**t * exp(-delta**l - tau**m) '''
    l = np.asarray(l, dtype=float)
    m = np.asarray(m, dtype=float)
    return self.add_elements(n, d, t, flags=("delta_li_in_u", "tau_mi_in_u"),
      c=np.where(l > 0, 1.0, 0.0), l_double=l, l_int=np.trunc(l),
      omega=np.where(m > 0, 1.0, 0.0), m_double=m)

  def add_gaussian(self, n, d, t, eta, epsilon, beta, gamma):
    ''' n * delta**d * tau**t
      * exp(-eta * (delta - epsilon)**2 - beta * (tau - gamma)**2) '''
    return self.add_elements(n, d, t, flags=("eta2_in_u", "beta2_in_u"),
      eta2=eta, epsilon2=epsilon, beta2=beta, gamma2=gamma)

  def add_gerg2008_gaussian(self, n, d, t, eta, epsilon, beta, gamma):
    ''' n * delta**d * tau**t
      * exp(-eta * (delta - epsilon)**2 - beta * (delta - gamma)) '''
    return self.add_elements(n, d, t, flags=("eta1_in_u", "eta2_in_u"),
      eta2=eta, epsilon2=epsilon, eta1=beta, epsilon1=gamma)

  def _u(self, tau:float, delta:float):
    ''' Accumulates u and its pure derivatives over the active modifiers. '''
    N = len(self)
    u = np.zeros(N)
    du_ddelta, d2u_ddelta2, d3u_ddelta3 = np.zeros(N), np.zeros(N), np.zeros(N)
    du_dtau, d2u_dtau2, d3u_dtau3 = np.zeros(N), np.zeros(N), np.zeros(N)
    for modifier in self._delta_modifiers:
      u_inc, du, d2u, d3u = modifier(self.elements, delta)
      u += u_inc
      du_ddelta += du
      d2u_ddelta2 += d2u
      d3u_ddelta3 += d3u
    for modifier in self._tau_modifiers:
      u_inc, du, d2u, d3u = modifier(self.elements, tau)
      u += u_inc
      du_dtau += du
      d2u_dtau2 += d2u
      d3u_dtau3 += d3u
    return (u, (du_ddelta, d2u_ddelta2, d3u_ddelta3),
      (du_dtau, d2u_dtau2, d3u_dtau3))

  def exponent_factors(self, tau:float, delta:float) -> dict:
    ''' Per-element B combinators B_delta, B_delta2, B_delta3, B_tau,
    B_tau2, B_tau3 at (tau, delta). With no active modifiers these are the
    power-rule factors d, d(d-1), d(d-1)(d-2) (and likewise in t). '''
    tau, delta = np.float64(tau), np.float64(delta)
    _, u_delta, u_tau = self._u(tau, delta)
    el = self.elements
    B_delta, B_delta2, B_delta3 = _log_factor(el["d"], delta, *u_delta)
    B_tau, B_tau2, B_tau3 = _log_factor(el["t"], tau, *u_tau)
    return {"B_delta": B_delta, "B_delta2": B_delta2, "B_delta3": B_delta3,
      "B_tau": B_tau, "B_tau2": B_tau2, "B_tau3": B_tau3}

  def all(self, tau:float, delta:float, derivs:HelmholtzDerivatives):
    if not self.enabled or len(self) == 0:
      return
    # numpy scalars propagate inf/nan instead of raising
    tau, delta = np.float64(tau), np.float64(delta)
    el = self.elements
    u, u_delta, u_tau = self._u(tau, delta)
    B_delta, B_delta2, B_delta3 = _log_factor(el["d"], delta, *u_delta)
    B_tau, B_tau2, B_tau3 = _log_factor(el["t"], tau, *u_tau)
    # Element values n * exp(t ln(tau) + d ln(delta) + u)
    ndteu = el["n"] * np.exp(
      el["t"] * np.log(tau) + el["d"] * np.log(delta) + u)

    one_over_delta, one_over_tau = 1.0 / delta, 1.0 / tau
    reduce = lambda factor: float(np.dot(ndteu, factor))
    derivs.value += float(np.sum(ndteu))
    derivs.d_ddelta += reduce(B_delta) * one_over_delta
    derivs.d_dtau += reduce(B_tau) * one_over_tau
    derivs.d2_ddelta2 += reduce(B_delta2) * one_over_delta**2
    derivs.d2_dtau2 += reduce(B_tau2) * one_over_tau**2
    derivs.d2_ddelta_dtau += (reduce(B_delta * B_tau)
      * one_over_delta * one_over_tau)
    derivs.d3_ddelta3 += reduce(B_delta3) * one_over_delta**3
    derivs.d3_dtau3 += reduce(B_tau3) * one_over_tau**3
    derivs.d3_ddelta2_dtau += (reduce(B_delta2 * B_tau)
      * one_over_delta**2 * one_over_tau)
    derivs.d3_ddelta_dtau2 += (reduce(B_delta * B_tau2)
      * one_over_delta * one_over_tau**2)

  def to_dict(self) -> dict:
    record = {"type": self.type_name}
    record.update({name: to_record_list(arr)
      for name, arr in self.elements.items()})
    record["flags"] = [flag for flag in _FLAGS if getattr(self, flag)]
    record["enabled"] = self.enabled
    return record

  @classmethod
  def from_dict(cls, record:dict):
    term = cls(enabled=record.get("enabled", True))
    columns = {name: record[name] for name in _COLUMNS if name in record}
    n, d, t = columns.pop("n"), columns.pop("d"), columns.pop("t")
    return term.add_elements(n, d, t, flags=tuple(record.get("flags", ())),
      **columns)

  def __repr__(self):
    active = [flag for flag in _FLAGS if getattr(self, flag)]
    return (f"{type(self).__name__}(N={len(self)}, modifiers={active}, "
      f"enabled={self.enabled})")
