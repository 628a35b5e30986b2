''' Reduced Helmholtz energy terms of a pure fluid and their partial
derivatives up to third order in (tau, delta). '''

from .derivatives import HelmholtzDerivatives
from .exceptions import (HelmholtzConfigurationError, UnknownDerivativeError,
  UnknownTermTypeError)
from .base import BaseHelmholtzTerm
from .registry import REGISTRY, build, lookup, register

# Term kinds register themselves on import
from .generalized_exponential import ResidualHelmholtzGeneralizedExponential
from .non_analytic import ResidualHelmholtzNonAnalytic
from .saft import ResidualHelmholtzSAFTAssociating
from .ideal import (IdealHelmholtzLead, IdealHelmholtzLogTau,
  IdealHelmholtzPower, IdealHelmholtzPlanckEinsteinGeneralized,
  IdealHelmholtzCP0Constant, IdealHelmholtzCP0PolyT,
  IdealHelmholtzCP0AlyLee)

from .term_set import HelmholtzTermSet
from .loader import dump_terms_to_json, load_terms_from_json
from .consistency import check_term, derivative_error, numerical_derivative
from .summation import kahan_sum

__version__ = "0.1.0"
