"""Cleaner: removal planning and manifest rewrite."""

from cnp.cleaner.planner import accept_all, apply_decisions, plan_removal
from cnp.cleaner.remover import clean

__all__ = ["accept_all", "apply_decisions", "clean", "plan_removal"]
