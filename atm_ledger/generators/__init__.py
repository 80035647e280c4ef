"""Demo data generators."""

from atm_ledger.generators.demo import DemoAccountGenerator

__all__ = ["DemoAccountGenerator"]
