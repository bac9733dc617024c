from roadsystem.config import settings_from_config
from roadsystem.generation import build_road_network, generate_road_network
from roadsystem.interpreter import DiagnosticKind
from roadsystem.models import Direction, EdgeSet, Tile


def _small_settings(seed: int | None = 21):
    return settings_from_config(
        {
            "grammar": {"iterations": 4},
            "grid": {"width_in_tiles": 20, "height_in_tiles": 16},
            "generation": {"seed": seed},
        }
    )


def test_build_runs_interpreter_then_repair() -> None:
    result = build_road_network(
        "F-F", width_in_tiles=10, height_in_tiles=10, start_tile=(5, 5)
    )

    assert result.instructions == "F-F"
    assert result.diagnostics == []
    assert len(result.grid) == 5
    assert result.repair_report.caps_created == 3


def test_build_defaults_to_grid_centre_facing_down() -> None:
    result = build_road_network("F", width_in_tiles=8, height_in_tiles=6)

    assert result.grid.get(4, 3).edges.top
    assert result.grid.get(4, 2).is_dead_end
    assert result.grid.get(4, 4).is_dead_end


def test_repair_runs_even_when_interpretation_reports_problems() -> None:
    result = build_road_network(
        "]F?", width_in_tiles=6, height_in_tiles=6, start_tile=(2, 2),
        start_direction=Direction.RIGHT,
    )

    kinds = [diagnostic.kind for diagnostic in result.diagnostics]
    assert kinds == [DiagnosticKind.UNBALANCED_BRANCH, DiagnosticKind.UNRECOGNIZED_SYMBOL]
    assert result.grid.get(1, 2).is_dead_end
    assert result.grid.get(3, 2).is_dead_end


def test_seeded_generation_is_reproducible() -> None:
    first = generate_road_network(_small_settings())
    second = generate_road_network(_small_settings())

    assert first.seed == 21
    assert first.instructions == second.instructions
    assert first.grid.snapshot() == second.grid.snapshot()


def test_each_request_builds_a_fresh_grid() -> None:
    first = generate_road_network(_small_settings())
    second = generate_road_network(_small_settings())

    before = second.grid.snapshot()
    first.grid.set(0, 0, Tile(0, 0, EdgeSet(top=True)))

    assert first.grid is not second.grid
    assert second.grid.snapshot() == before


def test_generated_tiles_stay_within_inclusive_extent() -> None:
    result = generate_road_network(_small_settings(seed=5))
    grid = result.grid

    assert len(grid) > 0
    for x, y in grid.coords():
        assert grid.in_bounds(x, y)


def test_unseeded_generation_reports_the_seed_used() -> None:
    result = generate_road_network(_small_settings(seed=None))

    assert isinstance(result.seed, int)


def test_out_of_range_start_keeps_tiles_inside_the_grid() -> None:
    result = build_road_network(
        "FFF", width_in_tiles=4, height_in_tiles=4, start_tile=(10, 10)
    )

    assert result.grid.coords() == [(4, 3), (4, 4)]
    for x, y in result.grid.coords():
        assert result.grid.in_bounds(x, y)
    assert result.repair_report.uncapped_edges == 1
