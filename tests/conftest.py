import pytest

from helmholtz_light import (ResidualHelmholtzGeneralizedExponential,
  ResidualHelmholtzNonAnalytic, ResidualHelmholtzSAFTAssociating,
  IdealHelmholtzLead, IdealHelmholtzLogTau, IdealHelmholtzPower,
  IdealHelmholtzPlanckEinsteinGeneralized, IdealHelmholtzCP0Constant,
  IdealHelmholtzCP0PolyT, IdealHelmholtzCP0AlyLee)

# Interior evaluation point
TAU, DELTA = 1.3, 0.7

def gaussian():
  return ResidualHelmholtzGeneralizedExponential().add_gaussian(
    n=[1.2198, -0.4883, -0.0033293, -0.0035387, -0.51172, -0.16882],
    d=[1, 1, 2, 2, 3, 3],
    t=[1, 2.124, 0.4, 3.5, 0.5, 2.7],
    eta=[0.9667, 1.5154, 1.0591, 1.6642, 12.4856, 0.9662],
    epsilon=[0.6734, 0.9239, 0.8636, 1.0507, 0.8482, 0.7522],
    beta=[1.24, 0.821, 15.45, 2.21, 437, 0.743],
    gamma=[1.2827, 0.4317, 1.1217, 1.1871, 1.1243, 0.4203])

def lemmon2005():
  return ResidualHelmholtzGeneralizedExponential().add_lemmon2005(
    n=[5.28076, -8.67658, 0.7501127, 0.7590023, 0.01451899, 4.777189,
      -3.330988, 3.775673, -2.290919, 0.8888268, -0.6234864, -0.04127263,
      -0.08455389, -0.1308752, 0.008344962, -1.532005, -0.05883649,
      0.02296658],
    d=[1, 1, 1, 2, 4, 1, 1, 2, 2, 3, 4, 5, 1, 5, 1, 2, 3, 5],
    t=[0.669, 1.05, 2.75, 0.956, 1, 2, 2.75, 2.38, 3.37, 3.47, 2.63, 3.45,
      0.72, 4.23, 0.2, 4.5, 29, 24],
    l=[0, 0, 0, 0, 0, 1, 1, 1, 1, 1, 1, 1, 2, 2, 3, 2, 3, 3],
    m=[0] * 15 + [1.7, 7, 6])

def power():
  return ResidualHelmholtzGeneralizedExponential().add_power(
    n=[1.0038, -2.7662, 0.42921, 0.081363, 0.00024174, 0.48246, 0.75542,
      -0.00743, -0.4146, -0.016558, -0.10644, -0.021704],
    d=[1, 1, 1, 3, 7, 1, 2, 5, 1, 1, 4, 2],
    t=[0.25, 1.25, 1.5, 0.25, 0.875, 2.375, 2, 2.125, 3.5, 6.5, 4.75, 12.5],
    l=[0, 0, 0, 0, 0, 1, 1, 1, 2, 2, 2, 3])

def exponential():
  # Same-sign elements: no cancellation between element contributions, so
  # round-off in the finite differences stays well below the tolerance
  return ResidualHelmholtzGeneralizedExponential().add_exponential(
    n=[0.3, 0.2, 0.1],
    d=[1, 2, 3],
    t=[2, 3, 4],
    g=[0.5, 0.8, 1.2],
    l=[2, 2, 1])

def gerg2008():
  return ResidualHelmholtzGeneralizedExponential().add_gerg2008_gaussian(
    n=[-0.0098038985517335, 0.00042487270143005, -0.034800214576142,
      -0.13333813013896, -0.011993694974627, 0.069243379775168,
      -0.31022508148249, 0.24495491753226, 0.22369816716981],
    d=[1, 4, 1, 2, 2, 2, 2, 2, 3],
    t=[0.0, 1.85, 7.85, 5.4, 0.0, 0.75, 2.8, 4.45, 4.25],
    eta=[0, 0, 1, 1, 0.25, 0, 0, 0, 0],
    epsilon=[0, 0, 0.5, 0.5, 0.5, 0.5, 0.5, 0.5, 0.5],
    beta=[0, 0, 1, 1, 2.5, 3, 3, 3, 3],
    gamma=[0, 0, 0.5, 0.5, 0.5, 0.5, 0.5, 0.5, 0.5])

def saft():
  return ResidualHelmholtzSAFTAssociating(a=1, m=1.01871348,
    epsilonbar=12.2735737, vbarn=0.0444215309, kappabar=1.09117041e-05)

def non_analytic():
  return ResidualHelmholtzNonAnalytic(
    n=[-0.666422765408, 0.726086323499, 0.0550686686128],
    a=[3.5, 3.5, 3], b=[0.875, 0.925, 0.875], beta=[0.3, 0.3, 0.3],
    A=[0.7, 0.7, 0.7], B=[0.3, 0.3, 1], C=[10, 10, 12.5],
    D=[275, 275, 275])

def cp0_poly_branches():
  # Power, logarithmic (t = 0) and tau*log(tau) (t = -1) antiderivatives
  return IdealHelmholtzCP0PolyT(c=[1.0578, 0.5, 0.2], t=[0.33, 0, -1],
    Tc=345.857, T0=273.15)

TERM_FACTORIES = {
  "Lead": lambda: IdealHelmholtzLead(1, 3),
  "LogTau": lambda: IdealHelmholtzLogTau(1.5),
  "IGPower": lambda: IdealHelmholtzPower(n=[-0.1, 0, 0.1, 0],
    t=[1, -1, -2, 2]),
  "PlanckEinstein": lambda: IdealHelmholtzPlanckEinsteinGeneralized(
    n=[0.1, 0, 0.5, 0], theta=[-1.5, -1, -2, -2], c=[1, 1, 1, 1],
    d=[-1, -1, -1, -1]),
  "CP0Constant": lambda: IdealHelmholtzCP0Constant(4 / 8.314472, 300, 250),
  "CP0PolyT": lambda: IdealHelmholtzCP0PolyT(c=[1.0578], t=[0.33],
    Tc=345.857, T0=273.15),
  "CP0PolyTBranches": cp0_poly_branches,
  "AlyLee": lambda: IdealHelmholtzCP0AlyLee(c=[4.0, 5.0, 1500.0, 3.0, 700.0],
    Tc=300.0, T0=250.0),
  "Gaussian": gaussian,
  "Lemmon2005": lemmon2005,
  "Power": power,
  "SAFT": saft,
  "NonAnalytic": non_analytic,
  "Exponential": exponential,
  "GERG2008": gerg2008,
}

@pytest.fixture(params=sorted(TERM_FACTORIES))
def term(request):
  ''' One instance of every term kind and element family. '''
  return TERM_FACTORIES[request.param]()

@pytest.fixture
def residual_terms():
  return [gaussian(), lemmon2005(), power(), exponential(), gerg2008(),
    saft(), non_analytic()]
