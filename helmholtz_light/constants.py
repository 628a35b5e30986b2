''' Static numerical parameters shared by the Helmholtz term kinds. '''

import numpy as np

''' Singularity handling '''
# Threshold for |delta - 1|, |DELTA| and polynomial exponent comparisons
EPSILON_TOLERANCE = 10 * np.finfo(float).eps

''' Consistency checking '''
# Central finite difference step in tau or delta
DEFAULT_FD_STEP = 1e-7
# Relative tolerance between numerical and analytic derivatives
DEFAULT_RTOL = 1e-6
# Below this reference magnitude, the absolute error is used instead
ABSOLUTE_ERROR_FLOOR = 1e-15
