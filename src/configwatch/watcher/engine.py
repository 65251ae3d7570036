"""Reconciliation of config source directories against running configs.

Each call to ``ConfigWatcher.scan_once`` walks the source directories,
re-reads only files whose (size, mtime) changed since the previous scan,
and reports what must be started, reloaded or stopped as a ConfigDiff.

Rules applied to every entry, in order:
1. Reserved names and non-regular files are skipped.
2. The first file claiming a name wins; later ones are rejected.
3. An unchanged signature means nothing to do.
4. A changed signature is cached before loading, so a broken file is not
   re-parsed until it is touched again.
5. A file that fails to load never disturbs the running config.

After the walk, active configs whose name was not seen are removed and
signatures of vanished names are pruned.
"""

from __future__ import annotations

import contextlib
from collections.abc import Collection, Iterable
from pathlib import Path
from typing import Any

from configwatch.config.schema import RESERVED_NAMES
from configwatch.logging import get_logger
from configwatch.watcher.content import ContentLoadError
from configwatch.watcher.diff import ConfigDiff, ConfigEntity, ScanReport
from configwatch.watcher.locks import DirectoryLock, DirectoryLockRegistry
from configwatch.watcher.policy import ConfigPolicy
from configwatch.watcher.probe import ScanIssue, list_directory, probe_entry
from configwatch.watcher.signature import SignatureCache
from configwatch.watcher.value import content_equal

log = get_logger("watcher")


class ConfigWatcher:
    """Produces config diffs from a set of source directories.

    Scans must be serialized by the caller: the signature cache is not
    safe for overlapping ``scan_once`` calls on one instance.

    Example:
        registry = ActiveRegistry()
        watcher = ConfigWatcher(ConfigPolicy.for_registry(registry))
        watcher.add_source("/etc/agent/config/local")
        watcher.add_source("/etc/agent/config/remote", lock=provider_lock)

        diff = watcher.scan_once()
        registry.apply(diff)
    """

    def __init__(
        self,
        policy: ConfigPolicy,
        source_dirs: Iterable[str | Path] = (),
        *,
        signatures: SignatureCache | None = None,
        locks: DirectoryLockRegistry | None = None,
        reserved_names: Collection[str] = RESERVED_NAMES,
    ) -> None:
        """Initialize the watcher.

        Args:
            policy: Loader, enablement check and active-registry lookups.
            source_dirs: Directories to scan, in priority order.
            signatures: Signature cache to use (a fresh one by default).
            locks: Directory lock registry to use (a fresh one by default).
            reserved_names: Config names that are always ignored.
        """
        self._policy = policy
        self._source_dirs: list[Path] = []
        self._signatures = signatures if signatures is not None else SignatureCache()
        self._locks = locks if locks is not None else DirectoryLockRegistry()
        self._reserved = frozenset(reserved_names)
        self.last_report = ScanReport()

        for directory in source_dirs:
            self.add_source(directory)

    @property
    def source_dirs(self) -> tuple[Path, ...]:
        return tuple(self._source_dirs)

    @property
    def signatures(self) -> SignatureCache:
        return self._signatures

    @property
    def locks(self) -> DirectoryLockRegistry:
        return self._locks

    def add_source(self, directory: str | Path, lock: DirectoryLock | None = None) -> None:
        """Register a source directory, optionally guarded by a writer's lock.

        Adding a directory twice keeps its original position; a lock passed
        the second time still replaces the registered one.
        """
        path = Path(directory)
        if path not in self._source_dirs:
            self._source_dirs.append(path)
            log.debug("Added config source %s", path)
        if lock is not None:
            self._locks.register(path, lock)

    def clear_environment(self) -> None:
        """Forget all sources, locks and cached signatures."""
        self._source_dirs.clear()
        self._locks.clear()
        self._signatures.clear()
        self.last_report = ScanReport()

    def scan_once(self) -> ConfigDiff:
        """Run one reconciliation pass.

        Never raises for filesystem or content problems; those are logged
        and the affected directory or file is left out of the pass.

        Returns:
            The diff to apply to the active registry (often empty).
        """
        diff = ConfigDiff()
        report = ScanReport()
        seen: set[str] = set()

        for directory in self._source_dirs:
            listing = list_directory(directory)
            if not listing.ok:
                log.warning("Skipping config dir %s: %s", directory, listing.reason)
                report.directories_skipped += 1
                report.record(ScanIssue.DIRECTORY_UNAVAILABLE)
                continue
            report.directories_scanned += 1

            lock = self._locks.lock_for(directory)
            for path in listing.entries:
                # Held per entry, not for the whole listing
                with lock if lock is not None else contextlib.nullcontext():
                    self._check_entry(path, directory, seen, diff, report)

        for name in self._policy.list_active_names():
            if name not in seen:
                diff.removed.append(name)
                log.info("Config %s is removed, preparing to stop it", name)

        pruned = self._signatures.prune_except(seen)
        report.pruned_signatures = len(pruned)
        for path in pruned:
            log.debug("Pruned signature of %s", path)

        if diff.is_empty():
            log.debug("Config files scan done, no update")
        else:
            log.info(
                "Config files scan done: added=%d modified=%d removed=%d",
                len(diff.added),
                len(diff.modified),
                len(diff.removed),
            )

        self.last_report = report
        return diff

    def _check_entry(
        self,
        path: Path,
        directory: Path,
        seen: set[str],
        diff: ConfigDiff,
        report: ScanReport,
    ) -> None:
        """Classify one directory entry and append to the diff if needed."""
        name = path.stem
        if name in self._reserved:
            return
        report.entries_seen += 1

        probe = probe_entry(path)
        if not probe.ok:
            if probe.regular:
                log.warning("Skipping config file %s: %s", path, probe.reason)
            else:
                log.debug("Skipping %s: %s", path, probe.reason)
            report.record(ScanIssue.ENTRY_UNREADABLE)
            return

        if name in seen:
            log.warning(
                "More than one config named %s found, skipping %s", name, path
            )
            report.record(ScanIssue.DUPLICATE_NAME)
            return
        seen.add(name)

        key = str(path)
        cached = self._signatures.get(key)
        if cached == probe.signature:
            log.debug("Config file %s unchanged", path)
            return
        # Cached before loading so a broken revision is not re-read each scan
        self._signatures.put(key, probe.signature)

        content = self._load(path, report)
        if content is None:
            return

        enabled = self._is_enabled(name, path, content, report)
        if enabled is None:
            return
        source_dir = str(directory)

        if cached is None:
            if not enabled:
                log.info("New config %s found and disabled, skipping", name)
                report.record(ScanIssue.DISABLED_BY_POLICY)
                return
            diff.added.append(ConfigEntity(name, content, source_dir))
            log.info("New config %s found and enabled, preparing to load it", name)
            return

        active = self._policy.find_active(name)
        if not enabled:
            report.record(ScanIssue.DISABLED_BY_POLICY)
            if active is not None:
                diff.removed.append(name)
                log.info("Running config %s modified and disabled, preparing to stop it", name)
            else:
                log.info("Inactive config %s modified and still disabled, skipping", name)
            return

        if active is None:
            diff.added.append(ConfigEntity(name, content, source_dir))
            log.info("Inactive config %s modified and enabled, preparing to load it", name)
        elif not content_equal(content, active.content):
            diff.modified.append(ConfigEntity(name, content, source_dir))
            log.info("Running config %s modified, preparing to reload it", name)
        else:
            log.debug("Config file %s rewritten without content change", path)

    def _load(self, path: Path, report: ScanReport) -> dict[str, Any] | None:
        """Load a file through the policy, or None if this revision is rejected."""
        try:
            return self._policy.load_content(path)
        except ContentLoadError as e:
            log.warning("Failed to load config %s: %s", path, e.reason)
        except Exception as e:
            log.warning("Failed to load config %s: %s", path, e)
        report.record(ScanIssue.CONTENT_LOAD_FAILURE)
        return None

    def _is_enabled(
        self, name: str, path: Path, content: dict[str, Any], report: ScanReport
    ) -> bool | None:
        """Run the enablement check, or None if it fails on this revision."""
        try:
            return bool(self._policy.is_enabled(name, content))
        except Exception as e:
            log.warning("Failed to check enablement of config %s: %s", path, e)
        report.record(ScanIssue.CONTENT_LOAD_FAILURE)
        return None
