import math
import random

import pytest

from radialmap import Node, inner_committed_frontier, override_to_px, resolve_axis_radii, resolve_node_radius

OUTER = 400.0


def _node(node_id, ring_id, sequence=1, *, label=None, r_override=None):
    return Node(
        id=node_id,
        label=label or node_id,
        axis_id="a",
        ring_id=ring_id,
        sequence=sequence,
        r_override=r_override,
    )


def test_single_node_sits_on_ring_base():
    assert resolve_axis_radii([_node("n", "now")], OUTER) == {"n": pytest.approx(160)}


def test_ring_members_spread_symmetrically_in_sequence_order():
    nodes = [_node("c", "next", 3), _node("a", "next", 1), _node("b", "next", 2)]
    radii = resolve_axis_radii(nodes, OUTER)
    assert radii["a"] == pytest.approx(262)
    assert radii["b"] == pytest.approx(280)
    assert radii["c"] == pytest.approx(298)


def test_sequence_ties_are_broken_by_label():
    nodes = [_node("n1", "now", 1, label="beta"), _node("n2", "now", 1, label="alpha")]
    radii = resolve_axis_radii(nodes, OUTER)
    assert radii["n2"] == pytest.approx(142)
    assert radii["n1"] == pytest.approx(178)


def test_lone_outermost_member_is_inset_from_edge():
    radii = resolve_axis_radii([_node("n", "now"), _node("l", "later", 2)], OUTER)
    assert radii["l"] == pytest.approx(386)


def test_outermost_members_are_clamped_to_edge_margin():
    radii = resolve_axis_radii([_node("l1", "later", 1), _node("l2", "later", 2)], OUTER)
    assert radii["l1"] == pytest.approx(382)
    assert radii["l2"] == pytest.approx(390)


def test_shared_band_spaces_later_and_uncommitted_evenly():
    nodes = [_node("n", "now", 1), _node("l", "later", 2), _node("u", "uncommitted", 3)]
    radii = resolve_axis_radii(nodes, OUTER)
    assert radii["n"] == pytest.approx(160)
    assert radii["l"] == pytest.approx(240)
    assert radii["u"] == pytest.approx(320)


def test_band_without_inner_nodes_starts_at_center():
    radii = resolve_axis_radii([_node("u", "uncommitted")], OUTER)
    assert radii["u"] == pytest.approx(200)


def test_uncommitted_sits_beyond_next_without_later_nodes():
    nodes = [_node("n", "now", 1), _node("x", "next", 2), _node("u", "uncommitted", 3)]
    radii = resolve_axis_radii(nodes, OUTER)
    assert radii["u"] > radii["x"]
    assert max(radii.values()) <= OUTER - 10
    assert radii["u"] == pytest.approx(340)


def test_band_slots_are_strictly_increasing_and_beyond_frontier():
    nodes = [_node("x", "next", 1)]
    nodes += [_node(f"u{i}", "uncommitted", i + 2) for i in range(5)]
    radii = resolve_axis_radii(nodes, OUTER)
    slots = [radii[f"u{i}"] for i in range(5)]
    assert all(s > radii["x"] for s in slots)
    assert slots == sorted(slots)
    assert len(set(slots)) == len(slots)


@pytest.mark.parametrize(
    "override, expected",
    [(0.5, 200.0), (250.0, 250.0), (1.2, 390.0), (-0.2, 0.0), (5000.0, 390.0)],
)
def test_override_replaces_computed_radius_and_is_clamped(override, expected):
    radii = resolve_axis_radii([_node("n", "now", r_override=override)], OUTER)
    assert radii["n"] == pytest.approx(expected)


def test_override_applies_to_band_members():
    nodes = [_node("n", "now", 1), _node("u", "uncommitted", 2, r_override=0.9)]
    assert resolve_axis_radii(nodes, OUTER)["u"] == pytest.approx(360)


def test_unknown_ring_falls_back_to_outer_radius():
    radii = resolve_axis_radii([_node("n", "someday")], OUTER)
    assert radii["n"] == pytest.approx(390)


def test_override_interpretation():
    assert override_to_px(None, OUTER) is None
    assert override_to_px(math.nan, OUTER) is None
    assert override_to_px(1.5, OUTER) == pytest.approx(600)
    assert override_to_px(1.6, OUTER) == pytest.approx(1.6)


def test_radii_do_not_depend_on_input_order():
    nodes = [
        _node("a", "now", 1),
        _node("b", "now", 2),
        _node("c", "later", 3),
        _node("d", "uncommitted", 4),
        _node("e", "next", 5),
    ]
    expected = resolve_axis_radii(nodes, OUTER)
    rng = random.Random(7)
    for _ in range(5):
        shuffled = nodes[:]
        rng.shuffle(shuffled)
        assert resolve_axis_radii(shuffled, OUTER) == expected


def test_every_radius_stays_inside_the_disc():
    rng = random.Random(11)
    rings = ["now", "next", "later", "uncommitted", "someday"]
    for _ in range(50):
        nodes = [
            _node(
                f"n{i}",
                rng.choice(rings),
                rng.randint(1, 6),
                r_override=rng.choice([None, None, rng.uniform(-1, 2), rng.uniform(0, 900)]),
            )
            for i in range(rng.randint(1, 8))
        ]
        for radius in resolve_axis_radii(nodes, OUTER).values():
            assert 0.0 <= radius <= OUTER - 10


def test_resolve_node_radius_adds_missing_node_to_axis():
    members = [_node("n", "now", 1)]
    ghost = _node("g", "uncommitted", 2)
    assert resolve_node_radius(ghost, members, OUTER) == pytest.approx(280)


def test_inner_committed_frontier():
    nodes = [_node("n", "now", 1), _node("x", "next", 2), _node("l", "later", 3)]
    assert inner_committed_frontier(nodes, OUTER) == pytest.approx(280)
    assert inner_committed_frontier([_node("l", "later")], OUTER) == 0.0
