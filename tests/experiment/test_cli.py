from __future__ import annotations

import json

import pytest

from borgmoea.experiment.cli.main import build_parser, main


def test_problems_lists_registry(capsys):
    assert main(["problems"]) == 0
    out = capsys.readouterr().out.split()
    assert "zdt1" in out
    assert "schaffer_n1" in out


def test_run_with_overrides(tmp_path, capsys):
    spec = {
        "problem": {"name": "schaffer_n1"},
        "algorithm": {"PopulationSize": 10},
        "budget": {"max_steps": 30},
        "seed": 1,
    }
    path = tmp_path / "run.json"
    path.write_text(json.dumps(spec), encoding="utf-8")
    out_dir = tmp_path / "out"
    assert main(["run", str(path), "--seed", "5", "--output", str(out_dir), "-q"]) == 0
    assert "Optimization Result" in capsys.readouterr().out
    metadata = json.loads((out_dir / "metadata.json").read_text(encoding="utf-8"))
    assert metadata["seed"] == 5
    assert metadata["n_steps"] == 30


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
