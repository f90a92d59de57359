import json

import pytest

from radialmap import DocumentError, Ring, document_from_dict, ensure_uncommitted_ring, load_document


def _state(**overrides):
    state = {
        "title": "Plan",
        "subtitle": "2026",
        "axes": [{"id": "a", "label": "Growth", "northStar": "Double revenue"}],
        "rings": [
            {"id": "now", "label": "Now"},
            {"id": "next", "label": "Next"},
            {"id": "later", "label": "Later"},
            {"id": "uncommitted", "label": "Uncommitted"},
        ],
        "nodes": [
            {
                "id": "n1",
                "label": "Hire",
                "axisId": "a",
                "ringId": "now",
                "sequence": 2,
                "wrapWidth": 120,
                "rOverride": 0.45,
            }
        ],
    }
    state.update(overrides)
    return state


def test_document_from_dict_reads_saved_state():
    document = document_from_dict(_state())
    assert document.title == "Plan"
    assert document.subtitle == "2026"
    assert document.axes[0].north_star == "Double revenue"
    node = document.nodes[0]
    assert (node.axis_id, node.ring_id, node.sequence) == ("a", "now", 2)
    assert node.wrap_width == 120.0
    assert node.r_override == pytest.approx(0.45)


def test_exported_document_wraps_state():
    document = document_from_dict({"version": 3, "state": _state(title="Wrapped")})
    assert document.title == "Wrapped"


def test_missing_rings_fall_back_to_defaults():
    state = _state()
    del state["rings"]
    document = document_from_dict(state)
    assert [r.id for r in document.rings] == ["now", "next", "later", "uncommitted"]


def test_documents_without_trigger_ring_are_migrated():
    rings = [{"id": "now"}, {"id": "next"}, {"id": "later"}]
    document = document_from_dict(_state(rings=rings))
    assert [r.id for r in document.rings] == ["now", "next", "later", "uncommitted"]
    assert document.rings[-1].label == "Uncommitted"


def test_ensure_uncommitted_ring_keeps_existing_list():
    rings = [Ring("now"), Ring("uncommitted", "Parked")]
    assert ensure_uncommitted_ring(rings) is rings


def test_optional_fields_default():
    document = document_from_dict({"axes": [{"id": "a"}], "nodes": [{"id": "n", "axisId": "a", "ringId": "now"}]})
    node = document.nodes[0]
    assert document.title == "Untitled Strategy"
    assert (node.label, node.sequence, node.wrap_width, node.r_override) == ("", 1, None, None)


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"state": "broken"},
        {"axes": {"id": "a"}},
        {"axes": ["a"]},
        {"axes": [{"label": "no id"}]},
        {"nodes": [{"id": "n", "ringId": "now"}]},
        {"nodes": [{"id": "n", "axisId": "a", "ringId": "now", "rOverride": "far"}]},
        {"nodes": [{"id": "n", "axisId": "a", "ringId": "now", "sequence": True}]},
    ],
)
def test_malformed_documents_raise(data):
    with pytest.raises(DocumentError):
        document_from_dict(data)


def test_load_document(tmp_path):
    path = tmp_path / "map.json"
    path.write_text(json.dumps(_state()), encoding="utf-8")
    assert load_document(path).nodes[0].id == "n1"


def test_load_document_rejects_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(DocumentError, match="invalid JSON"):
        load_document(path)
