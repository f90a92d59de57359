import json

import pytest

import radialmap.__main__ as cli

DOCUMENT = {
    "title": "Plan",
    "axes": [{"id": "a", "label": "Growth"}, {"id": "b", "label": "Ops"}, {"id": "c", "label": "People"}],
    "nodes": [
        {"id": "n1", "label": "Pilot", "axisId": "a", "ringId": "next", "sequence": 1},
        {"id": "n2", "label": "Hire", "axisId": "a", "ringId": "now", "sequence": 2},
    ],
}


def _write_document(tmp_path):
    path = tmp_path / "map.json"
    path.write_text(json.dumps(DOCUMENT), encoding="utf-8")
    return path


def test_main_prints_layout_and_warnings(tmp_path, capsys):
    path = _write_document(tmp_path)

    cli.main([str(path), "--width", "1000", "--height", "1000", "--padding", "100"])

    out = capsys.readouterr().out
    assert "Title: Plan" in out
    assert "outer radius: 400.00" in out
    assert "n1 on a/next: r=280.00" in out
    assert "now: [160.00, 0.00, 0.00]" in out
    assert 'Seq 2 ("Hire") is Now but comes after a Next item ("Pilot")' in out


def test_main_writes_svg_document(tmp_path, monkeypatch):
    path = _write_document(tmp_path)
    rendered = []

    def _generate_document(scene, viewport, **kwargs):
        rendered.append((len(scene.nodes), viewport.size, kwargs))
        return "svg document"

    monkeypatch.setattr(cli, "generate_svg_document", _generate_document)
    svg_path = tmp_path / "out" / "map.svg"

    cli.main([str(path), "--svg-output-path", str(svg_path)])

    assert svg_path.read_text(encoding="utf-8") == "svg document"
    assert rendered == [(2, (1000.0, 800.0), {"title": "Plan"})]


def test_main_exits_on_unreadable_document(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text('{"axes": 5}', encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(path)])
    assert excinfo.value.code == 1


def test_main_exits_on_missing_file(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(tmp_path / "missing.json")])
    assert excinfo.value.code == 1
