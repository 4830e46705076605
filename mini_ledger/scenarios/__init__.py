"""Scenarios for exercising the ledger with realistic traffic."""

from mini_ledger.scenarios.traffic import TransferTrafficScenario

__all__ = ["TransferTrafficScenario"]
