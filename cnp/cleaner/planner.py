"""Turn a verdict and the user's answers into the final removal list."""

from __future__ import annotations

from typing import Mapping

from cnp.models import UsageVerdict


def plan_removal(verdict: UsageVerdict) -> list[str]:
    """Unused dependencies, in manifest declaration order."""
    return verdict.unused


def apply_decisions(plan: list[str], decisions: Mapping[str, bool]) -> list[str]:
    """Return (in plan order) only the candidates the user confirmed."""
    return [name for name in plan if decisions.get(name, False)]


def accept_all(plan: list[str], confirmed: bool = True) -> dict[str, bool]:
    return {name: confirmed for name in plan}
