''' JSON files of term records.

A file holds either {"terms": [record, ...]} or a bare list of records.
Each record is {"type": <tag>, <coefficients>...}; unset coefficients are
stored as null.
'''

import json
import logging
from pathlib import Path

from .exceptions import HelmholtzConfigurationError
from .term_set import HelmholtzTermSet

logger = logging.getLogger(__name__)

def load_terms_from_json(json_path) -> HelmholtzTermSet:
  p = Path(json_path)
  data = json.loads(p.read_text(encoding="utf-8"))
  records = data.get("terms", data) if isinstance(data, dict) else data
  if not isinstance(records, list):
    raise HelmholtzConfigurationError(
      f"{p}: expected a list of term records or {{\"terms\": [...]}}")
  logger.debug("Loading %d term records from %s", len(records), p)
  return HelmholtzTermSet.from_dicts(records)

def dump_terms_to_json(terms, json_path):
  ''' Writes terms (a HelmholtzTermSet or any iterable of terms). '''
  if not isinstance(terms, HelmholtzTermSet):
    terms = HelmholtzTermSet(terms)
  p = Path(json_path)
  p.write_text(json.dumps({"terms": terms.to_dicts()}, indent=2,
    allow_nan=False), encoding="utf-8")
  logger.debug("Wrote %d term records to %s", len(terms), p)
