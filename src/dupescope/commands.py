"""
Unified command orchestrator for a scan-and-clean run.
This is the SINGLE source of truth for the workflow — the CLI only gathers parameters and answers prompts.
"""
import logging
from typing import Callable, Optional

from dupescope.core.hasher import HasherImpl
from dupescope.core.index import FingerprintIndex
from dupescope.core.interfaces import KeepSelector, Remover
from dupescope.core.models import RunParams, SessionReport
from dupescope.core.planner import DeletionPlanner
from dupescope.core.scanner import FileScannerImpl
from dupescope.core.scope import ScopeClassifier
from dupescope.services.action_log import ActionLog
from dupescope.services.deletion_service import DeletionService
from dupescope.services.file_service import FileService

logger = logging.getLogger(__name__)


class DeduplicationCommand:
    """
    Orchestrates the entire workflow:
    1. Scan every root and fingerprint each file into the index
    2. For each duplicate group: partition by authorized roots, plan, apply
    3. Return the session report (the log is closed on return)

    Usage:
        params = RunParams(scan_dirs=[...], delete_dirs=[...], dry_run=True)
        report = DeduplicationCommand().execute(
            params,
            keep_selector=console_prompt,      # manual policy only
            progress_callback=cli_progress_printer
        )
    """

    def __init__(self):
        self._scope = ScopeClassifier()
        self._planner = DeletionPlanner()
        self.index = FingerprintIndex()
        self.missing_roots = []

    def execute(
            self,
            params: RunParams,
            keep_selector: Optional[KeepSelector] = None,
            remover: Optional[Remover] = None,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> SessionReport:
        """
        Args:
            params: Validated run parameters
            keep_selector: Interactive decision collaborator (required for the manual policy)
            remover: Removal collaborator; defaults to trash or permanent deletion per params
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None

        Returns:
            SessionReport with counters and the log location

        Raises:
            ValueError: If parameters are invalid
        """
        hasher = HasherImpl.for_type(params.algorithm)
        if remover is None:
            remover = FileService.move_to_trash if params.use_trash else FileService.delete_permanently

        report = SessionReport()
        self.index = FingerprintIndex()

        # Authorized roots are resolved once per run, before any group is planned
        self._scope = ScopeClassifier()
        self._scope.canonical_roots(params.delete_dirs)

        # Step 1: Scan and fingerprint
        scanner = FileScannerImpl(params.scan_dirs)
        paths = scanner.scan(progress_callback=progress_callback)
        self.missing_roots = list(scanner.missing_roots)
        report.files_scanned = len(paths)

        total = len(paths)
        for current, path in enumerate(paths, 1):
            if self.index.index_file(path, hasher):
                report.files_indexed += 1
            if progress_callback:
                progress_callback('hashing', current, total)
        report.fingerprint_failures = len(self.index.unfingerprinted)

        # Step 2: Decide and apply, one group at a time
        with ActionLog.create(params.log_dir, params.algorithm, params.scan_dirs) as action_log:
            report.log_path = action_log.path
            service = DeletionService(action_log, report, remover)

            for group in self.index.groups():
                partition = self._scope.partition(group, params.delete_dirs)
                decisions = self._planner.plan(
                    group,
                    partition,
                    params.policy,
                    params.dry_run,
                    prompt_for_keep_index=keep_selector
                )
                service.apply_all(decisions)
                report.groups_processed += 1

        logger.debug(f"Run finished: {report.files_deleted} file(s) deleted")
        return report
