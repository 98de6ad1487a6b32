#!/usr/bin/env python3
"""
DupeScope CLI — Command line interface for duplicate file detection and scoped removal.
Duplicates are only ever removed from the directories the operator authorizes,
and every duplicate group keeps at least one copy. Dry run is the default.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from pathlib import Path
from typing import List, Optional, NoReturn, Sequence
import logging

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"

logging.basicConfig(
    level=logging.WARNING,
    format=LOG_FORMAT
)

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    import send2trash
except ImportError:
    _MISSING_DEPS.append("send2trash")

try:
    import xxhash
except ImportError:
    _MISSING_DEPS.append("xxhash")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    print("\nOr install the package with its dependencies:", file=sys.stderr)
    print("   pip install .", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from dupescope.core.models import HashAlgorithmType, Policy, RunParams, SessionReport
from dupescope.commands import DeduplicationCommand
from dupescope.utils.convert_utils import ConvertUtils
from dupescope.services.file_service import FileService
from dupescope.aliases import (
    ALGORITHM_ALIASES, ALGORITHM_CHOICES, ALGORITHM_HELP_TEXT,
    POLICY_ALIASES, DELETE_FROM_HELP_TEXT, EPILOG_TEXT
)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.hash_start_time: Optional[float] = None
        self.verbose: bool = False
        self.quiet: bool = False
        self.algorithm: HashAlgorithmType = HashAlgorithmType.SHA256
        self._progress_shown: bool = False

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding='utf-8')
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            description="DupeScope — duplicate file finder with scoped, audited deletion",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "directories",
            nargs="*",
            metavar="DIR",
            help="Directories to scan for duplicates"
        )

        # Fingerprint options
        parser.add_argument(
            "--algorithm", "-a",
            choices=ALGORITHM_CHOICES,
            default="sha256",
            type=str,
            help=ALGORITHM_HELP_TEXT
        )
        parser.add_argument(
            "--md5",
            action="store_const",
            const="md5",
            dest="algorithm",
            help="Shortcut for --algorithm md5"
        )
        parser.add_argument(
            "--sha256",
            action="store_const",
            const="sha256",
            dest="algorithm",
            help="Shortcut for --algorithm sha256"
        )

        # Deletion scope
        parser.add_argument(
            "--delete-from", "-d",
            nargs="+",
            default=None,
            type=str,
            metavar='',
            dest="delete_from",
            help=DELETE_FROM_HELP_TEXT
        )

        # Dry run / real run
        run_mode = parser.add_mutually_exclusive_group()
        run_mode.add_argument(
            "--dry-run",
            action="store_const",
            const=True,
            dest="dry_run",
            help="Only log what would be deleted (default)"
        )
        run_mode.add_argument(
            "--execute",
            action="store_const",
            const=False,
            dest="dry_run",
            help="Really delete duplicates (asks for confirmation unless --force)"
        )

        # Keep/delete policy
        policy = parser.add_mutually_exclusive_group()
        policy.add_argument(
            "--policy",
            choices=list(POLICY_ALIASES.keys()),
            default=None,
            type=str,
            help="'manual': choose the copy to keep for every group\n"
                 "'auto': keep the first copy only when no copy exists outside the deletion directories"
        )
        policy.add_argument(
            "--manual",
            action="store_const",
            const="manual",
            dest="policy",
            help="Shortcut for --policy manual"
        )
        policy.add_argument(
            "--auto",
            action="store_const",
            const="auto",
            dest="policy",
            help="Shortcut for --policy auto"
        )

        parser.add_argument(
            "--permanent",
            action="store_true",
            help="Delete files permanently instead of moving them to trash"
        )
        parser.add_argument(
            "--log-dir",
            default=".",
            type=str,
            metavar='',
            help="Directory for log_<timestamp>.txt. Default: current directory"
        )

        # Output options
        parser.add_argument(
            "--force",
            action="store_true",
            help="Skip the deletion confirmation prompt (for automation/scripts)"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show detailed progress and debug logging"
        )

        return parser.parse_args(args)

    @staticmethod
    def is_interactive() -> bool:
        """True when both stdin and stdout are attached to a terminal."""
        return sys.stdin.isatty() and sys.stdout.isatty()

    def configure_logging(self) -> None:
        if self.verbose:
            level = logging.DEBUG
        elif self.quiet:
            level = logging.ERROR
        else:
            level = logging.WARNING
        logging.getLogger().setLevel(level)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if not args.directories:
            self.error_exit("At least one directory must be specified.")

        for directory in args.directories:
            path = Path(directory)
            if not path.exists():
                self.warning(f"Directory not found: {directory}")
            elif not path.is_dir():
                self.warning(f"Path is not a directory: {directory}")

        if args.algorithm not in ALGORITHM_ALIASES:
            self.error_exit(
                f"Invalid hash algorithm: '{args.algorithm}'.\n"
                f"Valid options: {', '.join(ALGORITHM_CHOICES)}"
            )

    def resolve_delete_dirs(self, args: argparse.Namespace) -> List[str]:
        """
        Directories duplicates may be deleted from: from --delete-from,
        or chosen interactively from the scanned directories.
        """
        directories: List[str] = args.directories
        selected: List[str] = []

        if args.delete_from is not None:
            for item in args.delete_from:
                item = item.strip()
                if Path(item).is_dir():
                    selected.append(item)
                    continue
                if item.isdigit():
                    index = int(item)
                    if 1 <= index <= len(directories):
                        selected.append(directories[index - 1])
                    else:
                        self.warning(f"Invalid directory index: {item}")
                    continue
                self.warning(f"Deletion directory not found: {item}")
                selected.append(item)
        elif self.is_interactive():
            print("Choose directories to delete duplicates from (comma separated, e.g. 1,3,4):")
            for i, directory in enumerate(directories, 1):
                print(f"{i}) {directory}")
            indices, rejected = ConvertUtils.parse_selection(self.ask(""), len(directories))
            for token in rejected:
                self.warning(f"Invalid input: {token}")
            selected = [directories[i - 1] for i in indices]

        if not selected:
            self.warning("No directories selected for deletion. Every duplicate will be skipped.")
        return selected

    def resolve_dry_run(self, args: argparse.Namespace) -> bool:
        """Dry run unless --execute was given or the operator answered 'n'."""
        if args.dry_run is not None:
            return args.dry_run
        if not self.is_interactive():
            return True
        answer = self.ask(
            "Do you want to perform a DRY run (simulate deletion without actual file removal)? [Y/n]: "
        )
        return answer.strip().lower() not in ("n", "no")

    def confirm_deletion(self, force: bool) -> bool:
        """Ask before a real run. Returns False if the operator declined."""
        if force:
            if not self.quiet:
                print("⚠️  WARNING: --force flag skips confirmation. Proceeding with deletion...")
            return True

        if not self.is_interactive():
            self.error_exit(
                "Cannot request interactive confirmation in non-interactive session.\n"
                "Use --force flag to proceed without confirmation when piping output or running in scripts."
            )

        answer = self.ask("You are about to delete the files. Are you sure? [y/N]: ")
        return answer.strip().lower() in ("y", "yes")

    def resolve_policy(self, args: argparse.Namespace) -> Policy:
        """Policy from flags, or asked on a terminal. Non-interactive runs default to automatic."""
        if args.policy is not None:
            policy = POLICY_ALIASES[args.policy]
        elif self.is_interactive():
            answer = self.ask("Do you want to delete the files manually? [Y/n]: ")
            policy = Policy.AUTOMATIC if answer.strip().lower() in ("n", "no") else Policy.MANUAL
        else:
            policy = Policy.AUTOMATIC

        if policy == Policy.MANUAL and not self.is_interactive():
            self.error_exit(
                "Manual selection needs an interactive terminal.\n"
                "Use --auto when piping output or running in scripts."
            )
        return policy

    def create_params(
            self,
            args: argparse.Namespace,
            delete_dirs: List[str],
            dry_run: bool,
            policy: Policy
    ) -> RunParams:
        """Create RunParams from CLI arguments and interactive answers."""
        try:
            return RunParams(
                scan_dirs=[str(Path(d).absolute()) for d in args.directories],
                delete_dirs=[str(Path(d).absolute()) for d in delete_dirs],
                algorithm=ALGORITHM_ALIASES[args.algorithm],
                policy=policy,
                dry_run=dry_run,
                use_trash=not args.permanent,
                log_dir=args.log_dir
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def prompt_keep_index(self, fingerprint: str, candidates: Sequence[str]) -> int:
        """
        Interactive decision collaborator for the manual policy.
        Invalid input counts as 0 (skip the group).
        """
        self._end_progress_line()
        print(f"\nFound duplicates with hash {fingerprint} in selected directories:")
        for i, path in enumerate(candidates, 1):
            print(f"{i}) {path}")
        answer = self.ask("Please select the file number to KEEP (others will be deleted), or 0 to skip deletion: ")
        try:
            return int(answer.strip())
        except ValueError:
            self.warning(f"Invalid selection '{answer.strip()}', skipping this group")
            return 0

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows hashing progress with elapsed and estimated time."""
        if self.quiet:
            return

        if stage == 'hashing' and total:
            if self.hash_start_time is None:
                self.hash_start_time = time.time()
            elapsed = time.time() - self.hash_start_time
            percent = current * 100 // total
            estimated = ConvertUtils.estimate_total_seconds(elapsed, current, total)
            sys.stderr.write(
                f"\rCalculating {self.algorithm.display_name} hashes: {current}/{total} ({percent}%) "
                f"Elapsed: {ConvertUtils.seconds_to_human(elapsed)} "
                f"Estimated Total: {ConvertUtils.seconds_to_human(estimated)}"
            )
            sys.stderr.flush()
            self._progress_shown = True
        elif self.verbose:
            sys.stderr.write(f"\r  [{stage}] {current} files found...")
            sys.stderr.flush()
            self._progress_shown = True

    def _end_progress_line(self) -> None:
        if self._progress_shown:
            sys.stderr.write("\n")
            sys.stderr.flush()
            self._progress_shown = False

    def run_deduplication(self, params: RunParams) -> SessionReport:
        """Execute the scan-and-clean workflow."""
        command = DeduplicationCommand()
        keep_selector = self.prompt_keep_index if params.policy == Policy.MANUAL else None

        try:
            report = command.execute(
                params,
                keep_selector=keep_selector,
                progress_callback=self.progress_callback
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")
        except OSError as e:
            self.error_exit(f"Run failed: {e}")
        finally:
            self._end_progress_line()

        return report

    def output_results(self, report: SessionReport) -> None:
        if self.quiet:
            print(f"{report.files_deleted} Dup Files processed.")
            print(f"Done. Check {report.log_path} for details.")
            return
        print()
        print(report.print_summary())

    def offer_open_log(self, log_path: str) -> None:
        """Offer to open the log when a person is watching."""
        if self.quiet or not self.is_interactive():
            return
        answer = self.ask("Do you want to open the logfile? [Y/n]: ")
        if answer.strip().lower() not in ("", "y", "yes"):
            return
        try:
            FileService.open_file(log_path)
        except (RuntimeError, FileNotFoundError) as e:
            self.warning(f"Cannot open {log_path}: {e}")

    @staticmethod
    def ask(prompt: str) -> str:
        """Read one answer. End of input counts as an empty answer."""
        try:
            return input(prompt)
        except EOFError:
            return ""

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        self.configure_logging()

        self.validate_args(args)
        self.algorithm = ALGORITHM_ALIASES[args.algorithm]

        delete_dirs = self.resolve_delete_dirs(args)
        dry_run = self.resolve_dry_run(args)
        if not dry_run and not self.confirm_deletion(args.force):
            print("Aborted.")
            return
        policy = self.resolve_policy(args)

        params = self.create_params(args, delete_dirs, dry_run, policy)

        if not self.quiet:
            print(f"Used Algo: {params.algorithm.display_name}")
            mode = "DRY run" if params.dry_run else ("trash" if params.use_trash else "permanent deletion")
            print(f"Policy: {params.policy.display_name} | Mode: {mode}")

        report = self.run_deduplication(params)
        self.output_results(report)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")

        self.offer_open_log(report.log_path)


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
