"""
Section Fingerprints
====================

Canonical serialization of sections for audit and deduplication.

The digest function is an external collaborator with the contract
    digest(bytes) -> fixed-length bytes, deterministic
Its output is treated as an opaque identifier: never inspected, never
inverted. sha256 is the default; any such callable may be injected.

CANONICAL FORM (version FINGERPRINT_VERSION):
    JSON of {"v": version,
             "domain": [point keys],
             "values": [[point key, kind, payload], ...]}
    with point keys = [type name, repr(point)], sorted.
"""

import hashlib
import json
from typing import Callable, Hashable, Iterable, Tuple

from ..constants import DIGEST_NAME, FINGERPRINT_ENCODING, FINGERPRINT_VERSION
from ..topology import OpenSet
from .section import Section

Digest = Callable[[bytes], bytes]


def sha256_digest(data: bytes) -> bytes:
    return hashlib.new(DIGEST_NAME, data).digest()


def _point_key(point: Hashable) -> list:
    return [type(point).__name__, repr(point)]


def canonical_bytes(section: Section) -> bytes:
    """Deterministic byte encoding of a section, independent of insertion order."""
    domain = sorted(_point_key(p) for p in section.domain)
    values = sorted(
        [_point_key(p)] + datum.canonical()
        for p, datum in section.values.items()
    )
    payload = {"v": FINGERPRINT_VERSION, "domain": domain, "values": values}
    return json.dumps(payload, sort_keys=True, separators=(",", ":")).encode(FINGERPRINT_ENCODING)


def section_fingerprint(section: Section, digest: Digest = sha256_digest) -> bytes:
    """Opaque identifier of a section's domain and values."""
    return digest(canonical_bytes(section))


def cover_fingerprint(cover: Iterable[Tuple[Iterable[Hashable], Section]],
                      digest: Digest = sha256_digest) -> bytes:
    """
    Root digest over an ordered cover.

    Each entry contributes digest(digest(domain-only section) + digest(section));
    the root is the digest of the entry digests concatenated in cover order.
    Reordering the cover changes the root.
    """
    leaves = []
    for domain, section in cover:
        domain_fp = section_fingerprint(Section(OpenSet.coerce(domain)), digest)
        leaves.append(digest(domain_fp + section_fingerprint(section, digest)))
    return digest(b"".join(leaves))
