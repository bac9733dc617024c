import pytest

from roadsystem.lsystem import GrammarError, LSystem, ROAD_PRODUCTIONS
from roadsystem.rng import DeterministicRNG

X1 = "F-[[X]+X]+F[+FX]-X"


def test_single_round_applies_productions() -> None:
    grammar = LSystem.roads(rng=DeterministicRNG(1))

    assert grammar.iterate(0) == "X"
    assert grammar.iterate(1) == X1


def test_rewriting_is_simultaneous() -> None:
    grammar = LSystem("X", {"X": X1, "F": "FF"}, rng=DeterministicRNG(1))

    expected = "FF-[[" + X1 + "]+" + X1 + "]+FF[+FF" + X1 + "]-" + X1

    assert grammar.iterate(2) == expected


def test_weighted_road_table_matches_plain_table() -> None:
    weighted = LSystem("X", ROAD_PRODUCTIONS, rng=DeterministicRNG(5))
    plain = LSystem("X", {"X": X1, "F": "FF"}, rng=DeterministicRNG(9))

    assert weighted.iterate(3) == plain.iterate(3)


def test_symbols_without_productions_are_copied() -> None:
    grammar = LSystem("A+B", {"A": "AB"})

    assert grammar.iterate(2) == "ABB+B"


def test_stochastic_choice_is_reproducible_with_a_seed() -> None:
    productions = {"A": [(1, "a"), (1, "b")]}

    first = LSystem("A" * 64, productions, rng=DeterministicRNG(42)).iterate(1)
    second = LSystem("A" * 64, productions, rng=DeterministicRNG(42)).iterate(1)

    assert first == second
    assert len(first) == 64
    assert set(first) == {"a", "b"}


def test_heavier_successor_dominates() -> None:
    productions = {
        "A": {
            "successors": [
                {"weight": 1_000_000_000, "successor": "a"},
                {"weight": 1e-9, "successor": "b"},
            ]
        }
    }

    assert LSystem("AAAA", productions, rng=DeterministicRNG(3)).iterate(1) == "aaaa"


def test_single_mapping_successor_is_accepted() -> None:
    grammar = LSystem("F", {"F": {"successor": "F+F", "weight": 2}})

    assert grammar.iterate(1) == "F+F"


@pytest.mark.parametrize(
    "productions",
    [
        {"AB": "A"},
        {"A": []},
        {"A": [(0, "a")]},
        {"A": [(-1, "a")]},
        {"A": [("heavy", "a")]},
        {"A": [(1, 5)]},
        {"A": {"weight": 1}},
    ],
)
def test_malformed_productions_are_rejected(productions) -> None:
    with pytest.raises(GrammarError):
        LSystem("A", productions)


def test_negative_rounds_are_rejected() -> None:
    with pytest.raises(GrammarError):
        LSystem.roads().iterate(-1)
