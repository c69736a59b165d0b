"""
HistoryLib - Edit history

Linear undo/redo over immutable image resources.
"""

from AY_Libs.HistoryLib.history_ledger import HistoryLedger

__all__ = [
    "HistoryLedger",
]
