''' Compensated summation. '''

import numpy as np

def kahan_sum(values, sort_by_magnitude:bool=False) -> float:
  ''' Kahan-compensated sum of values. A running compensation term carries
  the low-order bits lost when a small contribution is added to a large
  partial sum. If sort_by_magnitude, contributions are added in order of
  descending absolute value. Returns 0.0 for an empty input. '''
  x = np.asarray(values, dtype=float).ravel()
  if x.size == 0:
    return 0.0
  if sort_by_magnitude:
    x = x[np.argsort(-np.abs(x), kind="stable")]
  total = float(x[0])
  compensation = 0.0
  for value in x[1:]:
    y = float(value) - compensation
    t = total + y
    # (t - total) recovers the high-order part of y
    compensation = (t - total) - y
    total = t
  return total
