from radialmap import DEFAULT_RINGS, Axis, Node, Ring, check_sequence_consistency

RINGS = list(DEFAULT_RINGS)
AXES = [Axis("a", "Alpha"), Axis("b", "Beta")]


def test_earlier_ring_after_later_ring_is_flagged():
    nodes = [
        Node("n1", "Pilot", "a", "next", 1),
        Node("n2", "Hire", "a", "now", 2),
        Node("n3", "Scale", "b", "now", 1),
        Node("n4", "Expand", "b", "later", 2),
    ]
    warnings = check_sequence_consistency(AXES, RINGS, nodes)
    assert len(warnings) == 1
    warning = warnings[0]
    assert (warning.axis_id, warning.node_id, warning.previous_node_id) == ("a", "n2", "n1")
    assert warning.message == (
        '[axis a] Seq 2 ("Hire") is Now but comes after a Next item ("Pilot").'
    )


def test_uncommitted_nodes_are_skipped():
    nodes = [
        Node("n1", "Pilot", "a", "next", 1),
        Node("n2", "Idea", "a", "uncommitted", 2),
        Node("n3", "Later idea", "a", "uncommitted", 3),
    ]
    assert check_sequence_consistency(AXES, RINGS, nodes) == []


def test_checks_follow_sequence_not_list_order():
    nodes = [
        Node("n2", "Second", "a", "next", 2),
        Node("n1", "First", "a", "now", 1),
    ]
    assert check_sequence_consistency(AXES, RINGS, nodes) == []


def test_unlabelled_ring_falls_back_to_its_id():
    rings = list(RINGS)
    rings[1] = Ring("next", "")
    nodes = [Node("n1", "Pilot", "a", "next", 1), Node("n2", "Hire", "a", "now", 2)]
    (warning,) = check_sequence_consistency(AXES, rings, nodes)
    assert "comes after a next item" in warning.message
