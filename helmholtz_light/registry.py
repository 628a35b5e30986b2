''' Registry of term kinds keyed by record type tag. '''

import logging

from .exceptions import HelmholtzConfigurationError, UnknownTermTypeError

logger = logging.getLogger(__name__)

REGISTRY = {}  # type tag -> term class

def register(name:str):
  ''' Class decorator recording a term kind under its type tag. '''
  def deco(cls):
    if name in REGISTRY and REGISTRY[name] is not cls:
      raise HelmholtzConfigurationError(
        f"Term type '{name}' already registered to {REGISTRY[name].__name__}")
    cls.type_name = name
    REGISTRY[name] = cls
    return cls
  return deco

def lookup(name:str):
  if name not in REGISTRY:
    raise UnknownTermTypeError(f"Helmholtz term type '{name}' not registered")
  return REGISTRY[name]

def build(record:dict):
  ''' Constructs a term from a record {"type": ..., coefficients...}. '''
  if not isinstance(record, dict) or "type" not in record:
    raise HelmholtzConfigurationError(
      "Term record must be a mapping with a 'type' entry")
  cls = lookup(record["type"])
  logger.debug("Building %s from record", record["type"])
  try:
    return cls.from_dict(record)
  except (TypeError, KeyError) as e:
    raise HelmholtzConfigurationError(
      f"Malformed record for term type '{record['type']}': {e}") from e
