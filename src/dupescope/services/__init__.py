"""File removal, decision application and audit log services."""

from .file_service import FileService
from .action_log import ActionLog
from .deletion_service import DeletionService

__all__ = ["FileService", "ActionLog", "DeletionService"]
