import json
from pathlib import Path

import pytest

from roadsystem.cli import main


def _base_args(tmp_path: Path) -> list[str]:
    return ["--config", str(tmp_path / "config.json"), "--width", "10", "--height", "10"]


def test_cli_reports_statistics_for_instruction_string(tmp_path: Path, capsys) -> None:
    code = main([*_base_args(tmp_path), "--instructions", "F-F", "--value", "5", "5"])

    out = capsys.readouterr().out
    assert code == 0
    assert "tiles: 5" in out
    assert "dead_ends: 3" in out
    assert "valuation (5, 5): 600" in out


def test_cli_lists_diagnostics(tmp_path: Path, capsys) -> None:
    code = main([*_base_args(tmp_path), "--instructions", "F]?F"])

    out = capsys.readouterr().out
    assert code == 0
    assert "diagnostic unbalanced_branch: 1" in out
    assert "diagnostic unrecognized_symbol: 1" in out


def test_cli_strict_mode_fails_on_unbalanced_branch(tmp_path: Path, capsys) -> None:
    code = main([*_base_args(tmp_path), "--instructions", "F]", "--strict"])

    assert code == 1
    assert "error:" in capsys.readouterr().err


def test_cli_generates_seeded_network_and_exports(tmp_path: Path, capsys) -> None:
    image = tmp_path / "roads.png"

    code = main(
        [*_base_args(tmp_path), "--seed", "4", "--iterations", "3", "--export", str(image)]
    )

    out = capsys.readouterr().out
    assert code == 0
    assert "seed: 4" in out
    assert image.exists()


def test_cli_saves_effective_config(tmp_path: Path) -> None:
    code = main([*_base_args(tmp_path), "--instructions", "F", "--save-config"])

    saved = json.loads((tmp_path / "config.json").read_text(encoding="utf-8"))
    assert code == 0
    assert saved["grid"]["width_in_tiles"] == 10


@pytest.mark.parametrize(
    "payload",
    [
        {"grammar": {"iterations": None}},
        {"start": {"tile": 5}},
        {"start": {"tile": [99, 0]}},
    ],
)
def test_cli_reports_bad_config_values_as_errors(tmp_path: Path, capsys, payload) -> None:
    (tmp_path / "config.json").write_text(json.dumps(payload), encoding="utf-8")

    code = main(_base_args(tmp_path))

    assert code == 1
    assert "error:" in capsys.readouterr().err
