"""
Local scratch space: two roots (raw intake, processed output) keyed by object key.

A file for key K in role R always lives at {root(R)}/{K}. Deletes are best-effort:
a missing file is not an error and OS errors are logged, never raised.
"""

from __future__ import annotations

import logging
from pathlib import Path

from transcode_shared import JobDescriptor, ScratchFileRef, ScratchRole, validate_object_key

logger = logging.getLogger(__name__)


class ScratchSpace:
    """Owns the raw and processed scratch directories."""

    def __init__(self, raw_root: str | Path, processed_root: str | Path) -> None:
        self._roots = {
            ScratchRole.RAW: Path(raw_root),
            ScratchRole.PROCESSED: Path(processed_root),
        }

    def root(self, role: ScratchRole) -> Path:
        return self._roots[role]

    def ensure_roots(self) -> None:
        """Create both root directories if absent. Safe to call repeatedly."""
        for role, root in self._roots.items():
            if not root.is_dir():
                root.mkdir(parents=True, exist_ok=True)
                logger.info("scratch: %s directory created at %s", role.value, root)

    def path_for(self, key: str, role: ScratchRole) -> Path:
        """Return {root}/{key} without touching the filesystem. Raises ValueError for unusable keys."""
        reason = validate_object_key(key)
        if reason is not None:
            raise ValueError(reason)
        return self._roots[role] / key

    def ref(self, key: str, role: ScratchRole) -> ScratchFileRef:
        return ScratchFileRef(key=key, local_path=self.path_for(key, role), role=role)

    def delete(self, key: str, role: ScratchRole) -> None:
        """Remove the file for key if present; never raises for missing files or OS errors."""
        try:
            path = self.path_for(key, role)
        except ValueError as e:
            logger.warning("scratch: skip delete of %s key %r: %s", role.value, key, e)
            return
        try:
            path.unlink()
        except FileNotFoundError:
            logger.debug("scratch: %s file not found at %s", role.value, path)
            return
        except OSError as e:
            logger.warning("scratch: failed to delete %s file at %s: %s", role.value, path, e)
            return
        logger.info("scratch: %s file deleted at %s", role.value, path)

    def delete_job_files(self, descriptor: JobDescriptor) -> None:
        """Best-effort delete of the job's raw and processed files."""
        self.delete(descriptor.source_key, ScratchRole.RAW)
        self.delete(descriptor.derived_key, ScratchRole.PROCESSED)
