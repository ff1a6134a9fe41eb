"""Traversal engine.

Recursively enumerates regular files under the scan root, bounded by the
configured depth, and collects the ones that pass the filter pipeline.

Each recursive call returns its own ScanResult which the caller folds
into its own; no accumulator is shared across calls.
"""

import logging
import os
from pathlib import Path

from dirscan.scanning.errors import RootPathError, StatUnavailableError
from dirscan.scanning.filters import FilterPipeline
from dirscan.scanning.metadata import extract_metadata
from dirscan.scanning.models import ScanConfig, ScanResult, ScanWarning, WarningKind

logger = logging.getLogger(__name__)


class DirectoryScanner:
    """Scans a directory tree for files matching a ScanConfig.

    Unreadable directories become warnings and contribute no records;
    files that vanish before they can be stat'ed are skipped. Neither
    aborts the scan. Results follow filesystem enumeration order.

    Args:
        config: Validated scan configuration.
        pipeline: Filter pipeline override. Defaults to the pipeline
            built from ``config``.
    """

    def __init__(self, config: ScanConfig, pipeline: FilterPipeline | None = None) -> None:
        self._config = config
        self._root = config.root_path
        self._pipeline = pipeline if pipeline is not None else FilterPipeline.from_config(config)

    def scan(self) -> ScanResult:
        """Scan the configured root.

        Returns:
            ScanResult with matched records and subtree warnings.

        Raises:
            RootPathError: If the root is missing or not a directory.
        """
        if not self._root.exists():
            raise RootPathError(f"Directory not found: {self._root}")
        if not self._root.is_dir():
            raise RootPathError(f"Not a directory: {self._root}")

        logger.debug(
            "Scanning %s (max depth: %s, stages: %s)",
            self._root,
            "unbounded" if self._config.is_unbounded else self._config.max_depth,
            ", ".join(self._pipeline.names),
        )
        result = self._scan_directory(self._root, 0, frozenset({os.path.realpath(self._root)}))
        logger.debug(
            "Scan of %s finished: %d matched, %d warnings",
            self._root,
            result.total_files,
            len(result.warnings),
        )
        return result

    def _scan_directory(self, directory: Path, depth: int, ancestors: frozenset[str]) -> ScanResult:
        """Scan one directory level and recurse into permitted subdirectories.

        Args:
            directory: Directory to list.
            depth: Depth of this directory's children below the root.
            ancestors: Canonical paths of this directory and its ancestors.

        Returns:
            Records and warnings of this subtree.
        """
        result = ScanResult()
        follow = self._config.follow_symlinks

        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as e:
            warning = ScanWarning(path=str(directory), message=e.strerror or str(e))
            logger.debug("Skipping unreadable directory: %s", warning)
            result.warnings.append(warning)
            return result

        for entry in entries:
            path = Path(entry.path)
            try:
                is_dir = entry.is_dir(follow_symlinks=follow)
                is_file = not is_dir and entry.is_file(follow_symlinks=follow)
            except OSError as e:
                logger.debug("Cannot determine type of %s: %s", path, e)
                continue

            if is_dir:
                if not self._config.allows_depth(depth + 1):
                    continue
                canonical = os.path.realpath(path)
                if canonical in ancestors:
                    result.warnings.append(
                        ScanWarning(
                            path=str(path),
                            message="symlink loop",
                            kind=WarningKind.SYMLINK_LOOP,
                        )
                    )
                    continue
                result.extend(self._scan_directory(path, depth + 1, ancestors | {canonical}))
            elif is_file:
                try:
                    record = extract_metadata(path, self._root, follow_symlinks=follow)
                except StatUnavailableError as e:
                    logger.debug("Skipping entry: %s", e)
                    continue
                if self._pipeline.matches(record):
                    result.records.append(record)

        return result


def scan_directory(config: ScanConfig) -> ScanResult:
    """Scan ``config.root_path`` with the standard filter pipeline."""
    return DirectoryScanner(config).scan()
