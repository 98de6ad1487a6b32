from dupescope.core.models import HashAlgorithmType, Policy

ALGORITHM_ALIASES = {
    "md5": HashAlgorithmType.MD5,
    "sha256": HashAlgorithmType.SHA256,
    "xxh64": HashAlgorithmType.XXH64,
    "xxh128": HashAlgorithmType.XXH128,
}

ALGORITHM_CHOICES = list(ALGORITHM_ALIASES.keys())

ALGORITHM_HELP_TEXT = (
    "Content fingerprint algorithm:\n"
    "  md5     : MD5\n"
    "  sha256  : SHA-256 (default)\n"
    "  xxh64   : xxHash64 (fastest)\n"
    "  xxh128  : xxHash128\n"
)

POLICY_ALIASES = {
    "manual": Policy.MANUAL,
    "auto": Policy.AUTOMATIC,
    "automatic": Policy.AUTOMATIC,
}

DELETE_FROM_HELP_TEXT = (
    "Directories duplicates may be deleted from (space separated).\n"
    "Accepts paths or 1-based positions in the scanned directory list\n"
    "(an existing directory named like a number is taken as a path).\n"
    "Asked interactively when omitted.\n"
    "Example: %(prog)s ~/Photos ~/Backup -d 2"
)

EPILOG_TEXT = """
Examples:
  Simulate cleaning duplicates of ~/Photos out of ~/Backup (nothing is deleted)
  %(prog)s ~/Photos ~/Backup --delete-from ~/Backup --dry-run --auto

  Same as above but actually move the duplicates to trash (with confirmation prompt)
  %(prog)s ~/Photos ~/Backup --delete-from ~/Backup --execute --auto

  Pick the copy to keep yourself for every duplicate group inside ~/Backup
  %(prog)s ~/Photos ~/Backup -d 2 --execute --manual

  Without confirmation, deleting permanently instead of moving to trash (for scripts)
  %(prog)s ~/Photos ~/Backup -d 2 --execute --auto --permanent --force

A copy outside the --delete-from directories is never touched, and no duplicate
group ever loses its last copy. Every decision is written to log_<timestamp>.txt.
"""
