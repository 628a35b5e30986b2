'''Exception types raised while configuring Helmholtz terms.'''


class HelmholtzConfigurationError(ValueError):
  '''Raised when coefficient arrays or term records are malformed.'''


class UnknownTermTypeError(KeyError):
  '''Raised when a term-kind type tag is not registered.'''


class UnknownDerivativeError(KeyError):
  '''Raised when a derivative field or accessor name is not recognized.'''
