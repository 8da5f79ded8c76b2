from pathlib import Path

import numpy as np
import pytest

from src.generate_path import main, parse_scale, parse_xy
from src.waypath.path_io import load_path, loads_waypoint_rows
from src.waypath.pipeline import generate_path

def test_parsers() -> None:
    assert parse_xy("1.5,-2") == (1.5, -2.0)
    assert parse_scale("3:7:50") == (3, 7, 50.0)

def test_generate_and_scale(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "line.svg"
    source.write_text(
        '<svg xmlns="http://www.w3.org/2000/svg"><path d="M 0,0 C 0,-8 0,-16 0,-24"/></svg>',
        encoding="utf-8",
    )
    out = tmp_path / "path.txt"
    svg = tmp_path / "path.svg"
    main(
        [
            "--input-svg", str(source),
            "--output", str(out),
            "--svg", str(svg),
            "--scale", "0:3:50",
            "--max-speed", "40",
        ]
    )
    assert "Saved:" in capsys.readouterr().out
    assert svg.exists()

    chain, params = load_path(out)
    assert chain.segment_count == 1
    assert params.max_speed == 40.0

    unscaled = generate_path(chain, params).waypoints
    rows = loads_waypoint_rows(out.read_text(encoding="utf-8"))
    assert rows.shape == (13, 3)
    np.testing.assert_allclose(rows[:4, 2], 0.5 * unscaled.speed[:4])
    np.testing.assert_array_equal(rows[4:, 2], unscaled.speed[4:])

def test_reload_keeps_chain(tmp_path: Path) -> None:
    first = tmp_path / "first.txt"
    second = tmp_path / "second.txt"
    main(["--output", str(first), "--append", "10,20", "--append", "30,5"])
    main(["--input", str(first), "--output", str(second), "--turn-multiplier", "35"])

    chain1, _ = load_path(first)
    assert chain1.segment_count == 3
    chain2, params2 = load_path(second)
    assert chain2 == chain1
    assert params2.turn_multiplier == 35.0

@pytest.mark.parametrize(
    "argv",
    [
        ["--output", "x.txt", "--scale", "1:2"],
        ["--output", "x.txt", "--append", "1;2"],
        ["--output", "x.txt", "--input", "a.txt", "--input-svg", "a.svg"],
        [],
    ],
)
def test_bad_arguments_exit(argv: list[str]) -> None:
    with pytest.raises(SystemExit):
        main(argv)
