"""Implementações dos comandos expostos via :mod:`ublcsv.cli`."""

from . import export, ledger

__all__ = ["export", "ledger"]
