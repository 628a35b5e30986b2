import numpy as np
import pytest

from helmholtz_light import (HelmholtzConfigurationError,
  ResidualHelmholtzGeneralizedExponential)
from helmholtz_light.derivatives import ACCESSOR_FIELDS

from conftest import DELTA, TAU, gaussian, lemmon2005, power

def single_element():
  term = ResidualHelmholtzGeneralizedExponential()
  term.add_elements(n=[1.2198], d=[1], t=[1])
  return term

def test_single_element_values():
  term = single_element()
  assert term.base(TAU, DELTA) == pytest.approx(1.2198 * 0.7 * 1.3)
  assert term.dDelta(TAU, DELTA) == pytest.approx(1.2198 * 1.3)
  assert term.dTau(TAU, DELTA) == pytest.approx(1.2198 * 0.7)
  derivs = term.evaluate(TAU, DELTA)
  assert derivs.d2_ddelta_dtau == pytest.approx(1.2198)
  assert derivs.d2_ddelta2 == pytest.approx(0.0, abs=1e-14)
  assert derivs.d2_dtau2 == pytest.approx(0.0, abs=1e-14)

def test_no_modifiers_reduces_to_power_rule():
  term = ResidualHelmholtzGeneralizedExponential()
  d, t = np.array([1.0, 2.0, 4.5]), np.array([0.25, 3.0, -1.5])
  term.add_elements(n=[0.5, -1.1, 2.0], d=d, t=t)
  B = term.exponent_factors(TAU, DELTA)
  assert B["B_delta"] == pytest.approx(d)
  assert B["B_delta2"] == pytest.approx(d * (d - 1))
  assert B["B_delta3"] == pytest.approx(d * (d - 1) * (d - 2))
  assert B["B_tau"] == pytest.approx(t)
  assert B["B_tau2"] == pytest.approx(t * (t - 1))
  assert B["B_tau3"] == pytest.approx(t * (t - 1) * (t - 2))
  expected = np.sum(np.array([0.5, -1.1, 2.0]) * DELTA**d * TAU**t)
  assert term.base(TAU, DELTA) == pytest.approx(expected)

def test_power_with_zero_cutoff_is_plain_power_law():
  # l = 0 leaves the density cutoff unconfigured
  with_cutoff_flag = ResidualHelmholtzGeneralizedExponential().add_power(
    n=[0.3, -0.2], d=[1, 3], t=[0.5, 1.5], l=[0, 0])
  plain = ResidualHelmholtzGeneralizedExponential().add_elements(
    n=[0.3, -0.2], d=[1, 3], t=[0.5, 1.5])
  assert with_cutoff_flag.evaluate(TAU, DELTA).as_dict() == \
    pytest.approx(plain.evaluate(TAU, DELTA).as_dict())

def test_power_cutoff_value():
  term = ResidualHelmholtzGeneralizedExponential().add_power(
    n=[0.8], d=[2], t=[1.5], l=[2])
  expected = 0.8 * DELTA**2 * TAU**1.5 * np.exp(-DELTA**2)
  assert term.base(TAU, DELTA) == pytest.approx(expected)

def test_gaussian_value():
  term = ResidualHelmholtzGeneralizedExponential().add_gaussian(
    n=[0.5], d=[1], t=[2], eta=[3.0], epsilon=[0.9], beta=[2.0],
    gamma=[1.1])
  expected = (0.5 * DELTA * TAU**2
    * np.exp(-3.0 * (DELTA - 0.9)**2 - 2.0 * (TAU - 1.1)**2))
  assert term.base(TAU, DELTA) == pytest.approx(expected)

def test_gerg2008_value():
  term = ResidualHelmholtzGeneralizedExponential().add_gerg2008_gaussian(
    n=[0.2], d=[2], t=[0.75], eta=[1.0], epsilon=[0.5], beta=[2.5],
    gamma=[0.5])
  expected = (0.2 * DELTA**2 * TAU**0.75
    * np.exp(-1.0 * (DELTA - 0.5)**2 - 2.5 * (DELTA - 0.5)))
  assert term.base(TAU, DELTA) == pytest.approx(expected)

def test_lemmon2005_value():
  term = ResidualHelmholtzGeneralizedExponential().add_lemmon2005(
    n=[0.1, 0.2], d=[1, 3], t=[1.0, 2.0], l=[0, 2], m=[0, 1.7])
  expected = (0.1 * DELTA * TAU
    + 0.2 * DELTA**3 * TAU**2 * np.exp(-DELTA**2 - TAU**1.7))
  assert term.base(TAU, DELTA) == pytest.approx(expected)

def test_builders_accumulate_elements():
  term = gaussian()
  n_gaussian = len(term)
  term.add_power(n=[0.1], d=[1], t=[1], l=[1])
  assert len(term) == n_gaussian + 1
  assert term.eta2_in_u and term.delta_li_in_u
  combined = term.base(TAU, DELTA)
  separate = gaussian().base(TAU, DELTA) + \
    ResidualHelmholtzGeneralizedExponential().add_power(
      n=[0.1], d=[1], t=[1], l=[1]).base(TAU, DELTA)
  assert combined == pytest.approx(separate)

def test_mismatched_lengths_rejected():
  with pytest.raises(HelmholtzConfigurationError):
    ResidualHelmholtzGeneralizedExponential().add_gaussian(
      n=[1, 2], d=[1, 2], t=[1, 2], eta=[1], epsilon=[1, 2], beta=[1, 2],
      gamma=[1, 2])

def test_unknown_modifier_rejected():
  with pytest.raises(TypeError):
    ResidualHelmholtzGeneralizedExponential().add_elements(
      n=[1], d=[1], t=[1], zeta=[2])

@pytest.mark.parametrize("accessor", sorted(ACCESSOR_FIELDS))
def test_disabled_and_empty_contribute_zero(accessor):
  disabled = lemmon2005()
  disabled.enabled = False
  empty = ResidualHelmholtzGeneralizedExponential()
  for term in (disabled, empty):
    assert getattr(term, accessor)(TAU, DELTA) == 0.0

def test_nonfinite_cutoff_exponent_is_unconfigured():
  # Flag on, integer exponent positive, but l_double is not finite
  cut = ResidualHelmholtzGeneralizedExponential().add_elements(
    n=[0.8], d=[2], t=[1.5], flags=("delta_li_in_u",), c=[1.0],
    l_double=[np.nan], l_int=[2])
  assert cut.base(TAU, DELTA) == pytest.approx(0.8 * DELTA**2 * TAU**1.5)
  B = cut.exponent_factors(TAU, DELTA)
  assert B["B_delta"] == pytest.approx([2.0])
  assert B["B_delta2"] == pytest.approx([2.0])
  assert B["B_delta3"] == pytest.approx([0.0])

def test_nonfinite_linear_wells_are_unconfigured():
  wells = ResidualHelmholtzGeneralizedExponential().add_elements(
    n=[0.8, -0.4], d=[2, 1], t=[1.5, 3.0],
    flags=("eta1_in_u", "beta1_in_u"),
    eta1=[np.nan, 0.5], epsilon1=[0.5, 0.5],
    beta1=[np.nan, np.nan], gamma1=[1.0, 1.0])
  expected = (0.8 * DELTA**2 * TAU**1.5
    - 0.4 * DELTA * TAU**3 * np.exp(-0.5 * (DELTA - 0.5)))
  assert wells.base(TAU, DELTA) == pytest.approx(expected)
  B = wells.exponent_factors(TAU, DELTA)
  assert B["B_delta"][0] == pytest.approx(2.0)
  assert B["B_delta"][1] == pytest.approx(1.0 - 0.5 * DELTA)
  assert B["B_tau"] == pytest.approx([1.5, 3.0])
  assert B["B_tau3"] == pytest.approx([1.5 * 0.5 * -0.5, 6.0])

def test_zero_density_exponent():
  term = ResidualHelmholtzGeneralizedExponential().add_exponential(
    n=[-1.02590136933231], d=[0], t=[3], g=[1.65533788], l=[2])
  assert term.base(TAU, DELTA) == pytest.approx(
    -1.02590136933231 * TAU**3 * np.exp(-1.65533788 * DELTA**2))

def test_extreme_density_does_not_raise():
  # 1/delta**3 overflows; the result is inf/nan rather than an exception
  with np.errstate(all="ignore"):
    derivs = power().evaluate(1.3, 1e-110)
    accessor_value = power().dDelta3(1.3, 1e-110)
  assert np.isfinite(derivs.value)
  assert not np.isfinite(derivs.d3_ddelta3)
  assert not np.isfinite(accessor_value)
