"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Cross-platform file operations: removal (trash or permanent) and opening the run log.
"""
import os
import sys
import subprocess
from pathlib import Path
from send2trash import send2trash


class FileService:
    """
    Removal collaborators used by the deletion service, plus opening files for the operator.
    Every method raises RuntimeError carrying the cause on failure.
    """

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file to the system trash."""
        path = Path(file_path)

        if not path.exists():
            raise RuntimeError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e

    @staticmethod
    def delete_permanently(file_path: str):
        """Unlinks a file. There is no way back."""
        path = Path(file_path)

        if not path.exists():
            raise RuntimeError(f"File not found: {path}")

        try:
            path.unlink()
        except OSError as e:
            raise RuntimeError(f"Failed to delete: {e}") from e

    @staticmethod
    def open_file(file_path: str):
        """Opens a file with the system default application."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            if sys.platform == 'win32':
                os.startfile(str(path))
            elif sys.platform == 'darwin':
                subprocess.Popen(['open', str(path)])
            else:
                FileService._open_linux(path)
        except Exception as e:
            raise RuntimeError(f"Failed to open file: {e}") from e

    @staticmethod
    def _open_linux(path: Path):
        """Linux: Tries xdg-open, falls back to $EDITOR or nano in the terminal."""
        try:
            subprocess.run(['xdg-open', str(path)], timeout=5, check=True)
            return
        except (FileNotFoundError, subprocess.TimeoutExpired, subprocess.CalledProcessError):
            pass  # Fallback to a terminal editor

        editor = os.environ.get('EDITOR', 'nano')
        try:
            subprocess.run([editor, str(path)])
        except FileNotFoundError as e:
            raise RuntimeError(f"Cannot open file: no suitable application found") from e
