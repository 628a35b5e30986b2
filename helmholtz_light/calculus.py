''' Derivative algebra on HelmholtzDerivatives records.

Both rules are exact closed forms for bivariate functions of (tau, delta)
truncated at third order. Record fields may be floats or numpy arrays of
per-element values; all arithmetic broadcasts. '''

from .derivatives import HelmholtzDerivatives

def product(f:HelmholtzDerivatives, g:HelmholtzDerivatives
  ) -> HelmholtzDerivatives:
  ''' Partials of the product f*g by the Leibniz rule. '''
  return HelmholtzDerivatives(
    value=f.value * g.value,
    d_dtau=f.d_dtau * g.value + f.value * g.d_dtau,
    d_ddelta=f.d_ddelta * g.value + f.value * g.d_ddelta,
    d2_dtau2=(f.d2_dtau2 * g.value + 2.0 * f.d_dtau * g.d_dtau
      + f.value * g.d2_dtau2),
    d2_ddelta2=(f.d2_ddelta2 * g.value + 2.0 * f.d_ddelta * g.d_ddelta
      + f.value * g.d2_ddelta2),
    d2_ddelta_dtau=(f.d2_ddelta_dtau * g.value + f.d_ddelta * g.d_dtau
      + f.d_dtau * g.d_ddelta + f.value * g.d2_ddelta_dtau),
    d3_dtau3=(f.d3_dtau3 * g.value + 3.0 * f.d2_dtau2 * g.d_dtau
      + 3.0 * f.d_dtau * g.d2_dtau2 + f.value * g.d3_dtau3),
    d3_ddelta3=(f.d3_ddelta3 * g.value + 3.0 * f.d2_ddelta2 * g.d_ddelta
      + 3.0 * f.d_ddelta * g.d2_ddelta2 + f.value * g.d3_ddelta3),
    d3_ddelta2_dtau=(f.d3_ddelta2_dtau * g.value
      + f.d2_ddelta2 * g.d_dtau
      + 2.0 * f.d2_ddelta_dtau * g.d_ddelta
      + 2.0 * f.d_ddelta * g.d2_ddelta_dtau
      + f.d_dtau * g.d2_ddelta2
      + f.value * g.d3_ddelta2_dtau),
    d3_ddelta_dtau2=(f.d3_ddelta_dtau2 * g.value
      + f.d2_dtau2 * g.d_ddelta
      + 2.0 * f.d2_ddelta_dtau * g.d_dtau
      + 2.0 * f.d_dtau * g.d2_ddelta_dtau
      + f.d_ddelta * g.d2_dtau2
      + f.value * g.d3_ddelta_dtau2),
  )

def compose(value, f1, f2, f3, inner:HelmholtzDerivatives
  ) -> HelmholtzDerivatives:
  ''' Partials of f(inner(tau, delta)) by the bivariate Faa di Bruno formula,
  given the outer value f and its first three derivatives f1, f2, f3
  evaluated at inner.value. '''
  x_t, x_d = inner.d_dtau, inner.d_ddelta
  return HelmholtzDerivatives(
    value=value,
    d_dtau=f1 * x_t,
    d_ddelta=f1 * x_d,
    d2_dtau2=f2 * x_t**2 + f1 * inner.d2_dtau2,
    d2_ddelta2=f2 * x_d**2 + f1 * inner.d2_ddelta2,
    d2_ddelta_dtau=f2 * x_d * x_t + f1 * inner.d2_ddelta_dtau,
    d3_dtau3=(f3 * x_t**3 + 3.0 * f2 * x_t * inner.d2_dtau2
      + f1 * inner.d3_dtau3),
    d3_ddelta3=(f3 * x_d**3 + 3.0 * f2 * x_d * inner.d2_ddelta2
      + f1 * inner.d3_ddelta3),
    d3_ddelta2_dtau=(f3 * x_d**2 * x_t
      + f2 * (2.0 * x_d * inner.d2_ddelta_dtau + inner.d2_ddelta2 * x_t)
      + f1 * inner.d3_ddelta2_dtau),
    d3_ddelta_dtau2=(f3 * x_d * x_t**2
      + f2 * (2.0 * x_t * inner.d2_ddelta_dtau + inner.d2_dtau2 * x_d)
      + f1 * inner.d3_ddelta_dtau2),
  )

def scale(f:HelmholtzDerivatives, factor) -> HelmholtzDerivatives:
  ''' Partials of factor*f for a factor independent of (tau, delta). '''
  return HelmholtzDerivatives(**{name: factor * val
    for name, val in f.as_dict().items()})
