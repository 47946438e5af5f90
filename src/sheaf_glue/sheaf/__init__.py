"""Section values, sections, the gluing engine and fingerprints."""

from .datum import Datum
from .section import Section
from .gluing import GluingEngine, glue, normalize_cover
from .fingerprint import (
    sha256_digest,
    canonical_bytes,
    section_fingerprint,
    cover_fingerprint,
)
