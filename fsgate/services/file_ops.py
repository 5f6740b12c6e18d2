from __future__ import annotations

import logging
import os
import shutil
import stat
from datetime import datetime, timezone
from pathlib import Path

from ..errors import IsADirectory, NotFound, StorageIOError, from_os_error
from ..schemas import DirectoryEntry, DirectoryListing, FileInfo

logger = logging.getLogger(__name__)

STAT_FAILED = 'Could not retrieve stats for this item.'


def _iso(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()


def _kind(mode: int) -> str:
    return 'directory' if stat.S_ISDIR(mode) else 'file'


def _created(st: os.stat_result) -> float:
    return getattr(st, 'st_birthtime', None) or st.st_ctime


class FileOps:
    """File and directory operations on paths already proven to lie inside the root.

    Every method takes the resolved path plus the caller's original string; the
    original is what goes back in messages and ``path`` fields so the absolute
    root never leaks to the caller.
    """

    def list_directory(self, target: Path, original: str) -> DirectoryListing:
        try:
            with os.scandir(target) as it:
                children = sorted(it, key=lambda e: e.name)
        except NotADirectoryError:
            raise StorageIOError(f"Path '{original}' is not a directory.")
        except OSError as exc:
            raise from_os_error(exc, original)

        contents: list[DirectoryEntry] = []
        for child in children:
            try:
                is_dir = child.is_dir()
            except OSError:
                is_dir = False
            kind = 'directory' if is_dir else 'file'
            try:
                st = os.stat(child.path)
            except OSError as exc:
                # entry vanished or is unreadable between scandir and stat
                logger.warning('Could not stat %s: %s', child.path, exc)
                contents.append(DirectoryEntry(name=child.name, kind=kind, error=STAT_FAILED))
                continue
            contents.append(
                DirectoryEntry(
                    name=child.name,
                    kind=kind,
                    size=st.st_size,
                    modified_timestamp=_iso(st.st_mtime),
                )
            )
        return DirectoryListing(path=original, contents=contents)

    def read_file(self, target: Path, original: str) -> str:
        try:
            if target.is_dir():
                raise IsADirectory(f"Path '{original}' is a directory, not a file.")
            with target.open('r', encoding='utf-8', newline='') as f:
                return f.read()
        except UnicodeDecodeError as exc:
            raise StorageIOError(f"Could not decode '{original}' as UTF-8 text: {exc.reason}")
        except OSError as exc:
            raise from_os_error(exc, original)

    def write_file(self, target: Path, original: str, content: str) -> str:
        if not target.parent.is_dir():
            raise NotFound(f"Parent directory for '{original}' does not exist or is not accessible.")
        if target.is_dir():
            raise IsADirectory(
                f"Path '{original}' is an existing directory. Cannot overwrite a directory with a file."
            )
        try:
            with target.open('w', encoding='utf-8', newline='') as f:
                f.write(content)
        except OSError as exc:
            raise from_os_error(exc, original)
        return f'File written successfully: {original}'

    def create_directory(self, target: Path, original: str) -> str:
        try:
            target.mkdir(parents=True, exist_ok=True)
        except FileExistsError:
            raise StorageIOError(f"Path '{original}' already exists and is not a directory.")
        except OSError as exc:
            raise from_os_error(exc, original)
        return f'Directory created: {original}'

    def delete_item(self, target: Path, original: str) -> str:
        try:
            st = os.lstat(target)
        except FileNotFoundError:
            raise NotFound(f"Path '{original}' does not exist.")
        except OSError as exc:
            raise from_os_error(exc, original)

        try:
            if stat.S_ISDIR(st.st_mode):
                shutil.rmtree(target)
            else:
                target.unlink()
        except OSError as exc:
            raise from_os_error(exc, original)
        logger.info('Deleted %s', target)
        return f'Deleted: {original}'

    def get_file_info(self, target: Path, original: str) -> FileInfo:
        try:
            st = os.stat(target)
        except OSError as exc:
            raise from_os_error(exc, original)

        return FileInfo(
            path=original,
            kind=_kind(st.st_mode),
            size=st.st_size,
            created_timestamp=_iso(_created(st)),
            modified_timestamp=_iso(st.st_mtime),
            accessed_timestamp=_iso(st.st_atime),
            permission_bits=format(stat.S_IMODE(st.st_mode) & 0o777, 'o'),
        )
