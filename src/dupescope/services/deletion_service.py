"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/deletion_service.py
Applies planned decisions: removes files (or simulates it), records every outcome.
"""
import logging
from typing import Iterable, List

from dupescope.core.interfaces import Remover
from dupescope.core.models import DecisionKind, DeletionDecision, SessionReport
from dupescope.services.action_log import ActionLog

logger = logging.getLogger(__name__)


class DeletionService:
    """
    Turns DeletionDecisions into side effects.

    KEEP and SKIP are only recorded. A simulated DELETE is recorded without touching
    the filesystem. A real DELETE is recorded as deleted only after the remover returns;
    if it raises, a FAILED outcome is recorded instead and processing goes on.
    """

    def __init__(self, action_log: ActionLog, report: SessionReport, remover: Remover):
        self.action_log = action_log
        self.report = report
        self.remover = remover

    def apply(self, decision: DeletionDecision) -> DeletionDecision:
        """Applies one decision and returns the outcome that was recorded."""
        outcome = decision
        if decision.kind == DecisionKind.DELETE and not decision.dry_run:
            try:
                self.remover(decision.path)
            except Exception as e:
                logger.warning(f"Error deleting file: {decision.path} - {e}")
                outcome = DeletionDecision.failed(decision, self._cause(e))

        self.action_log.record(outcome)
        self.report.record(outcome)
        return outcome

    @staticmethod
    def _cause(error: Exception) -> str:
        """The underlying error text, without the wrapper message added by FileService."""
        return str(error.__cause__ or error)

    def apply_all(self, decisions: Iterable[DeletionDecision]) -> List[DeletionDecision]:
        """Applies decisions in order. A failed removal never stops the rest."""
        return [self.apply(decision) for decision in decisions]
