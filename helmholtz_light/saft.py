''' SAFT association residual Helmholtz term for a single bonding site.

  alpha = m a (ln X - X/2 + 1/2)
  X = 2 / (sqrt(1 + 4 Deltabar delta) + 1)
  Deltabar = g(eta) (exp(epsilonbar tau) - 1) kappabar,  eta = vbarn delta
  g(eta) = 0.5 (2 - eta) / (1 - eta)**3

X depends on delta directly and through Deltabar, and on tau through
Deltabar alone. With z = Deltabar*delta, X is a function of z only, so every
partial of X is the chain rule of X(z) through the partials of z, and every
partial of alpha the chain rule of alpha(X) through the partials of X.
'''

import logging

import numpy as np

from .base import BaseHelmholtzTerm
from .calculus import compose, product
from .derivatives import HelmholtzDerivatives
from .registry import register

logger = logging.getLogger(__name__)

def g(eta):
  return 0.5 * (2.0 - eta) / (1.0 - eta)**3

def dg_deta(eta):
  return 0.5 * (5.0 - 2.0 * eta) / (1.0 - eta)**4

def d2g_deta2(eta):
  return 3.0 * (3.0 - eta) / (1.0 - eta)**5

def d3g_deta3(eta):
  return 6.0 * (7.0 - 2.0 * eta) / (1.0 - eta)**6

@register("ResidualHelmholtzSAFTAssociating")
class ResidualHelmholtzSAFTAssociating(BaseHelmholtzTerm):

  def __init__(self, a, m, epsilonbar, vbarn, kappabar, disabled:bool=False):
    super().__init__(enabled=not disabled)
    self.a = float(a)
    self.m = float(m)
    self.epsilonbar = float(epsilonbar)
    self.vbarn = float(vbarn)
    self.kappabar = float(kappabar)
    logger.debug("Constructed %r", self)

  @property
  def disabled(self) -> bool:
    return not self.enabled

  def eta(self, delta):
    return self.vbarn * np.float64(delta)

  ''' Association strength '''

  def _g_record(self, delta) -> HelmholtzDerivatives:
    # g(vbarn delta) as a function of delta only
    eta, v = self.eta(delta), self.vbarn
    return HelmholtzDerivatives(value=g(eta),
      d_ddelta=v * dg_deta(eta),
      d2_ddelta2=v**2 * d2g_deta2(eta),
      d3_ddelta3=v**3 * d3g_deta3(eta))

  def _h_record(self, tau) -> HelmholtzDerivatives:
    # (exp(epsilonbar tau) - 1) kappabar as a function of tau only
    eps = self.epsilonbar
    Ek = np.exp(eps * np.float64(tau)) * self.kappabar
    return HelmholtzDerivatives(value=Ek - self.kappabar,
      d_dtau=eps * Ek, d2_dtau2=eps**2 * Ek, d3_dtau3=eps**3 * Ek)

  def Deltabar_derivatives(self, tau, delta) -> HelmholtzDerivatives:
    ''' Deltabar and all its partials. Deltabar separates into a delta
    factor g and a tau factor, so each partial is a product of one
    derivative of each. '''
    return product(self._g_record(delta), self._h_record(tau))

  def Deltabar(self, tau, delta):
    return g(self.eta(delta)) * (np.exp(self.epsilonbar * tau) - 1.0) \
      * self.kappabar

  def dDeltabar_ddelta__consttau(self, tau, delta):
    return self.Deltabar_derivatives(tau, delta).d_ddelta

  def d2Deltabar_ddelta2__consttau(self, tau, delta):
    return self.Deltabar_derivatives(tau, delta).d2_ddelta2

  def d3Deltabar_ddelta3__consttau(self, tau, delta):
    return self.Deltabar_derivatives(tau, delta).d3_ddelta3

  def dDeltabar_dtau__constdelta(self, tau, delta):
    return self.Deltabar_derivatives(tau, delta).d_dtau

  def d2Deltabar_dtau2__constdelta(self, tau, delta):
    return self.Deltabar_derivatives(tau, delta).d2_dtau2

  def d3Deltabar_dtau3__constdelta(self, tau, delta):
    return self.Deltabar_derivatives(tau, delta).d3_dtau3

  def d2Deltabar_ddelta_dtau(self, tau, delta):
    return self.Deltabar_derivatives(tau, delta).d2_ddelta_dtau

  def d3Deltabar_ddelta_dtau2(self, tau, delta):
    return self.Deltabar_derivatives(tau, delta).d3_ddelta_dtau2

  def d3Deltabar_ddelta2_dtau(self, tau, delta):
    return self.Deltabar_derivatives(tau, delta).d3_ddelta2_dtau

  ''' Non-bonded site fraction '''

  def X(self, delta, Deltabar):
    return 2.0 / (np.sqrt(1.0 + 4.0 * Deltabar * delta) + 1.0)

  def dX_dDeltabar__constdelta(self, delta, Deltabar):
    X = self.X(delta, Deltabar)
    return -delta * X * X / (2.0 * Deltabar * delta * X + 1.0)

  def dX_ddelta__constDeltabar(self, delta, Deltabar):
    X = self.X(delta, Deltabar)
    return -Deltabar * X * X / (2.0 * Deltabar * delta * X + 1.0)

  def dX_dtau(self, tau, delta):
    Deltabar = self.Deltabar(tau, delta)
    return (self.dX_dDeltabar__constdelta(delta, Deltabar)
      * self.dDeltabar_dtau__constdelta(tau, delta))

  def dX_ddelta(self, tau, delta):
    Deltabar = self.Deltabar(tau, delta)
    return (self.dX_ddelta__constDeltabar(delta, Deltabar)
      + self.dX_dDeltabar__constdelta(delta, Deltabar)
      * self.dDeltabar_ddelta__consttau(tau, delta))

  def X_derivatives(self, tau, delta) -> HelmholtzDerivatives:
    ''' X and all nine of its partials in (tau, delta). '''
    tau, delta = np.float64(tau), np.float64(delta)
    linear_delta = HelmholtzDerivatives(value=delta, d_ddelta=1.0)
    z = product(linear_delta, self.Deltabar_derivatives(tau, delta))
    S = np.sqrt(1.0 + 4.0 * z.value)
    X = 2.0 / (S + 1.0)
    # Derivatives of X(z); dS/dz = 2/S
    X1 = -X**2 / S
    X2 = 2.0 * X**3 / S**2 + 2.0 * X**2 / S**3
    X3 = -6.0 * X**4 / S**3 - 12.0 * X**3 / S**4 - 12.0 * X**2 / S**5
    return compose(X, X1, X2, X3, z)

  ''' Term contract '''

  def all(self, tau:float, delta:float, derivs:HelmholtzDerivatives):
    if self.disabled:
      return
    Xr = self.X_derivatives(tau, delta)
    X = Xr.value
    ma = self.m * self.a
    alpha = compose(ma * (np.log(X) - 0.5 * X + 0.5),
      ma * (1.0 / X - 0.5), -ma / X**2, 2.0 * ma / X**3, Xr)
    derivs += alpha

  def to_dict(self) -> dict:
    return {"type": self.type_name, "a": self.a, "m": self.m,
      "epsilonbar": self.epsilonbar, "vbarn": self.vbarn,
      "kappabar": self.kappabar, "disabled": self.disabled}

  def __repr__(self):
    return (f"{type(self).__name__}(a={self.a}, m={self.m}, "
      f"epsilonbar={self.epsilonbar}, vbarn={self.vbarn}, "
      f"kappabar={self.kappabar}, disabled={self.disabled})")
