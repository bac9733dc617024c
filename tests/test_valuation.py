from roadsystem.generation import build_road_network
from roadsystem.models import EdgeSet, Tile
from roadsystem.tile_grid import TileGrid
from roadsystem.valuation import (
    NEARBY_HOUSES,
    PROPERTY_TAX_PER_HOUSE,
    SERVICE_REVENUE_PER_TILE,
    reachable_within,
    valuation,
    valuation_at,
)


def _street(first: int = 1, last: int = 8) -> TileGrid:
    grid = TileGrid(tile_width=10, tile_height=10, width_in_tiles=12, height_in_tiles=4)
    for x in range(first, last + 1):
        grid.set(x, 0, Tile(x, 0, EdgeSet(left=True, right=True)))
    return grid


def test_zero_steps_reaches_nothing() -> None:
    grid = _street()

    assert reachable_within(grid, (4, 0), 0) == 0


def test_reachability_grows_one_hop_per_round() -> None:
    grid = _street()

    assert reachable_within(grid, (1, 0), 1) == 1
    assert reachable_within(grid, (1, 0), 3) == 3
    assert reachable_within(grid, (4, 0), 2) == 4


def test_reachability_stops_at_end_of_road() -> None:
    grid = _street()

    assert reachable_within(grid, (1, 0), 100) == 7


def test_only_outgoing_edges_are_followed() -> None:
    grid = TileGrid(tile_width=10, tile_height=10, width_in_tiles=4, height_in_tiles=4)
    grid.set(0, 1, Tile(0, 1, EdgeSet(right=True)))
    grid.set(1, 1, Tile(1, 1, EdgeSet(top=True, bottom=True)))

    assert reachable_within(grid, (0, 1), 3) == 1
    assert reachable_within(grid, (1, 1), 3) == 0


def test_empty_tiles_are_not_traversed() -> None:
    grid = _street()
    grid.set(5, 0, Tile(5, 0))

    assert reachable_within(grid, (4, 0), 10) == 3


def test_absent_origin_reaches_nothing() -> None:
    grid = _street()

    assert reachable_within(grid, (30, 30), 5) == 0
    assert reachable_within(grid, (0, 0), 5) == 0


def test_reachability_is_monotonic_on_generated_network() -> None:
    result = build_road_network(
        "F-F[+FF]F[-FFF]+FF-F",
        width_in_tiles=12,
        height_in_tiles=12,
        start_tile=(6, 6),
    )
    grid = result.grid

    for tile in grid.non_empty_tiles():
        counts = [reachable_within(grid, tile.coords, n) for n in range(12)]
        assert counts[0] == 0
        assert counts == sorted(counts)
        assert counts[-1] < len(grid)


def test_valuation_adds_tax_and_service_revenue() -> None:
    grid = _street()

    value = valuation(grid.get(4, 0), grid)

    assert value == NEARBY_HOUSES * PROPERTY_TAX_PER_HOUSE + SERVICE_REVENUE_PER_TILE * 7
    assert value == 750


def test_valuation_of_tile_missing_from_grid_is_zero() -> None:
    grid = _street()

    assert valuation(Tile(30, 30, EdgeSet(top=True, bottom=True)), grid) == 0
    assert valuation_at(grid, 30, 30) == 0


def test_valuation_of_isolated_tile_is_only_property_tax() -> None:
    grid = _street(first=3, last=3)
    grid.get(3, 0).edges = EdgeSet(top=True, bottom=True)

    assert valuation_at(grid, 3, 0) == 400
