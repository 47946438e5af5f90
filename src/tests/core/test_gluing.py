"""
Tests for GluingEngine
======================

- single entry -> unchanged
- agreeing overlap -> success, domain = union
- disagreeing overlap -> IncompatibleCover(0, 1)
- empty cover -> empty section, not an error

Run: python -m pytest tests/core/test_gluing.py -v
"""

import pytest

from sheaf_glue import glue
from sheaf_glue.errors import CoverError, IncompatibleCover, NonOpenDomain
from sheaf_glue.sheaf import GluingEngine, Section
from sheaf_glue.spaces import CellComplexBuilder, GraphSpace
from sheaf_glue.topology import OpenSet


def cover_entry(values):
    s = Section(set(values), values)
    return (s.domain, s)


# =============================================================================
# Basic outcomes
# =============================================================================

def test_single_entry_returned_unchanged():
    domain, s = cover_entry({1: "a", 2: "b"})
    result = GluingEngine().glue([(domain, s)])
    assert result is s


def test_empty_cover_gives_empty_section():
    result = GluingEngine().glue([])
    assert result.is_empty
    assert result == Section.empty()


def test_agreeing_overlap_glues():
    a = cover_entry({1: "a", 2: "b"})
    b = cover_entry({2: "b", 3: "c"})
    result = GluingEngine().glue([a, b])
    assert result.domain == a[0].union(b[0])
    assert result.to_dict() == {1: "a", 2: "b", 3: "c"}


def test_disagreeing_overlap_raises():
    """Disagreeing overlap names the pair and the overlap."""
    a = cover_entry({1: "a", 2: "b"})
    b = cover_entry({2: "DIFFERENT", 3: "c"})
    with pytest.raises(IncompatibleCover) as info:
        GluingEngine().glue([a, b])
    assert info.value.pair == (0, 1)
    assert info.value.overlap == OpenSet({2})
    print(f"✓ {info.value}")


def test_incompatible_cover_is_recoverable_cover_error():
    """IncompatibleCover is a CoverError and a ValueError."""
    a = cover_entry({1: 1})
    b = cover_entry({1: 2})
    with pytest.raises(CoverError):
        glue([a, b])


def test_reports_first_bad_pair():
    """First bad pair in (i, j) order is reported."""
    entries = [
        cover_entry({1: 1}),
        cover_entry({5: 5}),
        cover_entry({5: 5, 6: 6}),
        cover_entry({6: 0}),
    ]
    with pytest.raises(IncompatibleCover) as info:
        GluingEngine().glue(entries)
    assert (info.value.i, info.value.j) == (2, 3)


def test_disjoint_cover_glues():
    result = glue([cover_entry({1: 1}), cover_entry({2: 2}), cover_entry({3: 3})])
    assert result.to_dict() == {1: 1, 2: 2, 3: 3}


def test_fold_is_order_independent_when_compatible():
    entries = [cover_entry({1: 1, 2: 2}), cover_entry({2: 2, 3: 3}), cover_entry({3: 3, 4: 4})]
    assert glue(entries) == glue(list(reversed(entries)))


def test_inputs_not_mutated():
    a = cover_entry({1: "a", 2: "b"})
    b = cover_entry({2: "b", 3: "c"})
    glue([a, b])
    assert a[1] == Section({1, 2}, {1: "a", 2: "b"})
    assert b[1] == Section({2, 3}, {2: "b", 3: "c"})


def test_cover_accepts_plain_domains():
    s = Section({1, 2}, {1: 1, 2: 2})
    t = Section({2, 3}, {2: 2, 3: 3})
    result = glue([({1, 2}, s), ([2, 3], t)])
    assert result.domain == OpenSet({1, 2, 3})


def test_malformed_entry_rejected():
    """Entries that are not (domain, Section) pairs raise TypeError."""
    with pytest.raises(TypeError):
        GluingEngine().glue([({1}, {1: 1})])


def test_domain_narrower_than_section():
    # cover domain limits what the entry contributes to the fold
    s0 = Section({1}, {1: "a"})
    s1 = Section({2, 3}, {2: "b", 3: "c"})
    result = glue([({1}, s0), ({2}, s1)])
    assert result.to_dict() == {1: "a", 2: "b"}


# =============================================================================
# Checks
# =============================================================================

def test_is_compatible_cover():
    engine = GluingEngine()
    assert engine.is_compatible_cover([cover_entry({1: 1}), cover_entry({1: 1})])
    assert not engine.is_compatible_cover([cover_entry({1: 1}), cover_entry({1: 2})])


def test_restriction():
    s = Section({1, 2, 3}, {1: 1, 2: 2, 3: 3})
    assert GluingEngine().restriction({1, 2}, s) == s.restrict({1, 2})


# =============================================================================
# Space-aware gluing
# =============================================================================

def test_graph_neighborhood_cover():
    g = GraphSpace({1, 2, 3, 4, 5}, {(1, 2), (2, 3), (3, 4)})
    values = {1: 0.5, 2: 1.5, 3: 2.5, 4: 3.5}
    cover = []
    for v in (1, 3):
        domain = g.neighborhood(v).union({v})
        cover.append((domain, Section(domain, {p: values[p] for p in domain})))
    result = GluingEngine(space=g).glue(cover)
    assert result.to_dict() == values


def test_non_open_domain_rejected():
    """Domain not open in the space raises NonOpenDomain."""
    b = CellComplexBuilder(max_dim=1)
    b.add_cell("v", dim=0).add_cell("e", dim=1)
    b.attach("e", "v")
    cx = b.freeze()
    engine = GluingEngine(space=cx)
    ok = Section({"v"}, {"v": 1})
    bad = Section({"v", "e"}, {"v": 1, "e": 2})
    with pytest.raises(NonOpenDomain) as info:
        engine.glue([(ok.domain, ok), (bad.domain, bad)])
    assert info.value.index == 1


def test_cover_domain_wider_than_section_glues():
    """Domains may reach past their section; only values are compared."""
    a = Section({1, 2}, {1: "a", 2: "b"})
    b = Section({3, 4}, {4: "d"})
    cover = [({1, 2, 3}, a), ({3, 4}, b)]
    assert GluingEngine().is_compatible_cover(cover)
    result = glue(cover)
    assert result.to_dict() == {1: "a", 2: "b", 4: "d"}
    assert result.domain == OpenSet({1, 2, 3, 4})


# =============================================================================
# Uniqueness
# =============================================================================

def test_is_locally_equal():
    engine = GluingEngine()
    a = Section({1, 2, 3}, {1: 1, 2: 2, 3: 3})
    b = Section({1, 2, 3}, {1: 1, 2: 2, 3: 99})
    assert engine.is_locally_equal({1, 2}, a, b)
    assert not engine.is_locally_equal({2, 3}, a, b)


def test_uniqueness_flags_under_determined_domain():
    engine = GluingEngine()
    a = Section({1, 2, 3}, {1: 1, 2: 2, 3: 3})
    b = Section({1, 2, 3}, {1: 1, 2: 2, 3: 99})
    assert engine.uniqueness([({3}, a, b), ({1, 3}, a, b)])
    assert not engine.uniqueness([({3}, a, b), ({1, 2}, a, b)])
    assert engine.uniqueness([])
