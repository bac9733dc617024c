"""Stochastic L-system that produces road instruction strings.

Productions map a single symbol to its successors. A successor table may be
given as a plain string, a list of ``(weight, successor)`` pairs, or a mapping
``{"successors": [{"weight": w, "successor": s}, ...]}``. Each round rewrites
every symbol of the current string at once; when a symbol has several
successors one is drawn per occurrence in proportion to its weight.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from .rng import DeterministicRNG, get_rng

logger = logging.getLogger(__name__)

# Road grammar after britonia.wordpress.com/2009/08/23/procedural-road-generation/
ROAD_AXIOM = "X"
ROAD_PRODUCTIONS: dict[str, Any] = {
    "X": "F-[[X]+X]+F[+FX]-X",
    "F": {"successors": [{"weight": 100, "successor": "FF"}]},
}
ROAD_ITERATIONS = 7


class GrammarError(ValueError):
    pass


@dataclass(frozen=True)
class Successor:
    successor: str
    weight: float = 1.0


def _as_successors(symbol: str, table: Any) -> list[Successor]:
    path = f"productions[{symbol!r}]"
    if isinstance(table, str):
        return [Successor(table)]
    if isinstance(table, Mapping):
        if "successors" in table:
            table = table["successors"]
        elif "successor" in table:
            table = [table]
        else:
            raise GrammarError(f"{path} must define 'successor' or 'successors'")
    if not isinstance(table, (list, tuple)) or not table:
        raise GrammarError(f"{path} must be a string or a non-empty list")

    successors: list[Successor] = []
    for i, entry in enumerate(table):
        if isinstance(entry, Mapping):
            successor = entry.get("successor")
            weight = entry.get("weight", 1)
        elif isinstance(entry, (list, tuple)) and len(entry) == 2:
            weight, successor = entry
        else:
            raise GrammarError(f"{path}[{i}] must be a mapping or (weight, successor)")
        if not isinstance(successor, str):
            raise GrammarError(f"{path}[{i}] successor must be a string")
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            raise GrammarError(f"{path}[{i}] weight must be a number")
        if weight <= 0:
            raise GrammarError(f"{path}[{i}] weight must be positive")
        successors.append(Successor(successor, float(weight)))
    return successors


class LSystem:
    def __init__(
        self,
        axiom: str,
        productions: Mapping[str, Any],
        *,
        rng: DeterministicRNG | None = None,
    ) -> None:
        if not isinstance(axiom, str):
            raise GrammarError("axiom must be a string")
        self.axiom = axiom
        self.rng = rng or get_rng()
        self.productions: dict[str, list[Successor]] = {}
        for symbol, table in productions.items():
            if not isinstance(symbol, str) or len(symbol) != 1:
                raise GrammarError(
                    f"production keys must be single characters, got {symbol!r}"
                )
            self.productions[symbol] = _as_successors(symbol, table)

    @classmethod
    def roads(cls, *, rng: DeterministicRNG | None = None) -> LSystem:
        return cls(ROAD_AXIOM, ROAD_PRODUCTIONS, rng=rng)

    def _rewrite(self, symbol: str) -> str:
        successors = self.productions.get(symbol)
        if successors is None:
            return symbol
        if len(successors) == 1:
            return successors[0].successor
        chosen = self.rng.weighted_choice(
            successors, [entry.weight for entry in successors]
        )
        return chosen.successor

    def step(self, word: str) -> str:
        return "".join(self._rewrite(symbol) for symbol in word)

    def iterate(self, rounds: int) -> str:
        if rounds < 0:
            raise GrammarError("rounds must be >= 0")
        word = self.axiom
        for _ in range(rounds):
            word = self.step(word)
        logger.debug("Grammar produced %d symbol(s) after %d round(s)", len(word), rounds)
        return word


__all__ = [
    "GrammarError",
    "LSystem",
    "ROAD_AXIOM",
    "ROAD_ITERATIONS",
    "ROAD_PRODUCTIONS",
    "Successor",
]
