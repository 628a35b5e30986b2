''' Ideal-gas Helmholtz term kinds.

Apart from the lead term these depend on tau alone, so all their delta and
mixed derivatives vanish. Inputs are promoted to numpy floats so that
degenerate arguments propagate inf/nan instead of raising.
'''

import numpy as np

from .base import BaseHelmholtzTerm, coefficient_arrays, to_record_list
from .constants import EPSILON_TOLERANCE
from .derivatives import HelmholtzDerivatives
from .exceptions import HelmholtzConfigurationError
from .registry import register

@register("IdealGasHelmholtzLead")
class IdealHelmholtzLead(BaseHelmholtzTerm):
  ''' ln(delta) + a1 + a2*tau. Implements the individual accessors; all()
  is assembled from them. '''

  def __init__(self, a1, a2, enabled:bool=True):
    super().__init__(enabled)
    self.a1, self.a2 = float(a1), float(a2)

  def base(self, tau, delta):
    if not self.enabled:
      return 0.0
    return float(np.log(np.float64(delta)) + self.a1 + self.a2 * tau)

  def dTau(self, tau, delta):
    return self.a2 if self.enabled else 0.0

  def dDelta(self, tau, delta):
    return float(1.0 / np.float64(delta)) if self.enabled else 0.0

  def dDelta2(self, tau, delta):
    return float(-1.0 / np.float64(delta)**2) if self.enabled else 0.0

  def dDelta3(self, tau, delta):
    return float(2.0 / np.float64(delta)**3) if self.enabled else 0.0

  def dTau2(self, tau, delta):
    return 0.0

  def dTau3(self, tau, delta):
    return 0.0

  def dDelta_dTau(self, tau, delta):
    return 0.0

  def dDelta_dTau2(self, tau, delta):
    return 0.0

  def dDelta2_dTau(self, tau, delta):
    return 0.0

  def to_dict(self) -> dict:
    return {"type": self.type_name, "a1": self.a1, "a2": self.a2,
      "enabled": self.enabled}


class IdealTauTerm(BaseHelmholtzTerm):
  ''' Term in tau alone. Subclasses implement tau_derivatives(tau),
  returning the value and the first three tau derivatives. '''

  def tau_derivatives(self, tau):
    raise NotImplementedError

  def all(self, tau:float, delta:float, derivs:HelmholtzDerivatives):
    if not self.enabled:
      return
    f0, f1, f2, f3 = self.tau_derivatives(np.float64(tau))
    derivs += HelmholtzDerivatives(value=float(f0), d_dtau=float(f1),
      d2_dtau2=float(f2), d3_dtau3=float(f3))


@register("IdealGasHelmholtzLogTau")
class IdealHelmholtzLogTau(IdealTauTerm):
  ''' a1*ln(tau) '''

  def __init__(self, a1, enabled:bool=True):
    super().__init__(enabled)
    self.a1 = float(a1)

  def tau_derivatives(self, tau):
    a1 = self.a1
    return a1 * np.log(tau), a1 / tau, -a1 / tau**2, 2.0 * a1 / tau**3

  def to_dict(self) -> dict:
    return {"type": self.type_name, "a1": self.a1, "enabled": self.enabled}


@register("IdealGasHelmholtzPower")
class IdealHelmholtzPower(IdealTauTerm):
  ''' sum of n*tau**t '''

  def __init__(self, n, t, enabled:bool=True):
    super().__init__(enabled)
    self.elements = coefficient_arrays(n=n, t=t)

  def tau_derivatives(self, tau):
    n, t = self.elements["n"], self.elements["t"]
    nt = n * tau**t
    return (np.sum(nt), np.sum(nt * t) / tau,
      np.sum(nt * t * (t - 1.0)) / tau**2,
      np.sum(nt * t * (t - 1.0) * (t - 2.0)) / tau**3)

  def to_dict(self) -> dict:
    return {"type": self.type_name,
      "n": to_record_list(self.elements["n"]),
      "t": to_record_list(self.elements["t"]), "enabled": self.enabled}


@register("IdealGasHelmholtzPlanckEinsteinGeneralized")
class IdealHelmholtzPlanckEinsteinGeneralized(IdealTauTerm):
  ''' sum of n*ln(c + d*exp(theta*tau)) '''

  def __init__(self, n, theta, c, d, enabled:bool=True):
    super().__init__(enabled)
    self.elements = coefficient_arrays(n=n, theta=theta, c=c, d=d)

  def tau_derivatives(self, tau):
    el = self.elements
    n, theta, c = el["n"], el["theta"], el["c"]
    y = el["d"] * np.exp(theta * tau)
    w = c + y
    return (np.dot(n, np.log(w)),
      np.dot(n, theta * y / w),
      np.dot(n, theta**2 * c * y / w**2),
      np.dot(n, theta**3 * c * y * (c - y) / w**3))

  def to_dict(self) -> dict:
    record = {"type": self.type_name}
    record.update({name: to_record_list(arr)
      for name, arr in self.elements.items()})
    record["enabled"] = self.enabled
    return record


@register("IdealGasHelmholtzCP0Constant")
class IdealHelmholtzCP0Constant(IdealTauTerm):
  ''' Contribution of a constant cp0/R from the reference state T0. '''

  def __init__(self, cp_over_R, Tc, T0, enabled:bool=True):
    super().__init__(enabled)
    self.cp_over_R, self.Tc, self.T0 = float(cp_over_R), float(Tc), float(T0)
    self.tau0 = self.Tc / self.T0

  def tau_derivatives(self, tau):
    cp, tau0 = self.cp_over_R, self.tau0
    return (cp - cp * tau / tau0 + cp * np.log(tau / tau0),
      cp / tau - cp / tau0, -cp / tau**2, 2.0 * cp / tau**3)

  def to_dict(self) -> dict:
    return {"type": self.type_name, "cp_over_R": self.cp_over_R,
      "Tc": self.Tc, "T0": self.T0, "enabled": self.enabled}


@register("IdealGasCP0Poly")
class IdealHelmholtzCP0PolyT(IdealTauTerm):
  ''' Contribution of cp0/R = sum of c*T**t, integrated from T0.

  Per coefficient, t == 0 integrates to a logarithm, t == -1 to a
  tau*log(tau) form and any other t to a power law. Both comparisons use
  EPSILON_TOLERANCE. '''

  def __init__(self, c, t, Tc, T0, enabled:bool=True):
    super().__init__(enabled)
    self.elements = coefficient_arrays(c=c, t=t)
    self.Tc, self.T0 = float(Tc), float(T0)
    self.tau0 = self.Tc / self.T0

  def tau_derivatives(self, tau):
    c, t = self.elements["c"], self.elements["t"]
    Tc, T0, tau0 = self.Tc, self.T0, self.tau0
    is_log = np.abs(t) < EPSILON_TOLERANCE
    is_taulog = ~is_log & (np.abs(t + 1.0) < EPSILON_TOLERANCE)
    # Unselected branches may divide by zero
    with np.errstate(divide="ignore", invalid="ignore"):
      log_branch = (
        c - c * tau / tau0 + c * np.log(tau / tau0),
        c / tau - c / tau0,
        -c / tau**2,
        2.0 * c / tau**3)
      taulog_branch = (
        c * tau / Tc * np.log(tau0 / tau) + c / Tc * (tau - tau0),
        c / Tc * np.log(tau0 / tau),
        -c / (tau * Tc),
        c / (tau**2 * Tc))
      power_branch = (
        (-c * Tc**t * tau**(-t) / (t * (t + 1.0))
          - c * T0**(t + 1.0) * tau / (Tc * (t + 1.0)) + c * T0**t / t),
        (c * Tc**t * tau**(-t - 1.0) / (t + 1.0)
          - c * Tc**t / (tau0**(t + 1.0) * (t + 1.0))),
        -c * (Tc / tau)**t / tau**2,
        c * (Tc / tau)**t * (t + 2.0) / tau**3)
    return tuple(np.sum(np.where(is_log, lg, np.where(is_taulog, tl, pw)))
      for lg, tl, pw in zip(log_branch, taulog_branch, power_branch))

  def to_dict(self) -> dict:
    return {"type": self.type_name,
      "c": to_record_list(self.elements["c"]),
      "t": to_record_list(self.elements["t"]),
      "Tc": self.Tc, "T0": self.T0, "enabled": self.enabled}


@register("IdealGasHelmholtzCP0AlyLee")
class IdealHelmholtzCP0AlyLee(IdealTauTerm):
  ''' Contribution of the Aly-Lee form
    cp0/R = c0 + c1 ((c2/T)/sinh(c2/T))**2 + c3 ((c4/T)/cosh(c4/T))**2,
  integrated from T0. '''

  def __init__(self, c, Tc, T0, enabled:bool=True):
    super().__init__(enabled)
    self.c = [float(v) for v in c]
    if len(self.c) != 5:
      raise HelmholtzConfigurationError(
        f"Aly-Lee term takes 5 coefficients, got {len(self.c)}")
    self.Tc, self.T0 = float(Tc), float(T0)
    self.tau0 = self.Tc / self.T0

  def anti_deriv_cp0_tau2(self, tau):
    ''' Antiderivative of (cp0/R)/tau**2 in tau. '''
    c, Tc = self.c, self.Tc
    x, y = c[2] * tau / Tc, c[4] * tau / Tc
    return (-c[0] / tau - c[1] * c[2] / Tc / np.tanh(x)
      + c[3] * c[4] / Tc * np.tanh(y))

  def anti_deriv_cp0_tau(self, tau):
    ''' Antiderivative of (cp0/R)/tau in tau. '''
    c, Tc = self.c, self.Tc
    x, y = c[2] * tau / Tc, c[4] * tau / Tc
    return (c[0] * np.log(tau)
      + c[1] * (-x / np.tanh(x) + np.log(np.sinh(x)))
      + c[3] * (y * np.tanh(y) - np.log(np.cosh(y))))

  def tau_derivatives(self, tau):
    c, Tc, tau0 = self.c, self.Tc, self.tau0
    x, y = c[2] * tau / Tc, c[4] * tau / Tc
    A2 = self.anti_deriv_cp0_tau2(tau) - self.anti_deriv_cp0_tau2(tau0)
    A1 = self.anti_deriv_cp0_tau(tau) - self.anti_deriv_cp0_tau(tau0)
    return (-tau * A2 + A1,
      -A2,
      (-c[0] / tau**2 - c[1] * (c[2] / Tc / np.sinh(x))**2
        - c[3] * (c[4] / Tc / np.cosh(y))**2),
      (2.0 * c[0] / tau**3
        + 2.0 * c[1] * (c[2] / Tc)**3 * np.cosh(x) / np.sinh(x)**3
        + 2.0 * c[3] * (c[4] / Tc)**3 * np.sinh(y) / np.cosh(y)**3))

  def to_dict(self) -> dict:
    return {"type": self.type_name, "c": list(self.c), "Tc": self.Tc,
      "T0": self.T0, "enabled": self.enabled}
