# SPDX-License-Identifier: AGPL-3.0-only
import time
from pathlib import Path

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .snapshot import HTML_SUFFIXES, JSON_SUFFIXES
from .types import ConfigError, SnapshotError

WATCHED_SUFFIXES = JSON_SUFFIXES | HTML_SUFFIXES


class LintEventHandler(FileSystemEventHandler):
    def __init__(self, run_lint, delay=0.5, only=None):
        self.run_lint = run_lint
        self.only = None if only is None else Path(only).resolve()
        self.delay = delay
        self.last_run = 0.0

    def should_handle(self, src_path):
        path = str(src_path)
        # Ignore hidden files and editor droppings.
        if "/." in path or "\\." in path:
            return False
        if self.only is not None and Path(path).resolve() != self.only:
            return False
        return Path(path).suffix.lower() in WATCHED_SUFFIXES

    def on_modified(self, event):
        if event.is_directory or not self.should_handle(event.src_path):
            return

        # Debounce
        now = time.time()
        if now - self.last_run < self.delay:
            return

        print(f"[watch] Change detected in {event.src_path}...")
        try:
            self.run_lint([event.src_path])
        except (ConfigError, SnapshotError, OSError) as e:
            print(f"[error] Lint failed: {e}")

        self.last_run = now

    on_created = on_modified


def watch(path, run_lint, *, delay=0.5, poll=1.0):
    """Lint ``path`` once, then again whenever a snapshot under it changes."""
    target = Path(path)
    root = target if target.is_dir() else target.parent

    print(f"[watch] Watching {root} for changes...")

    # Initial lint
    if target.is_dir():
        initial = sorted(p for p in root.rglob("*") if p.suffix.lower() in WATCHED_SUFFIXES)
    else:
        initial = [target]
    try:
        run_lint(initial)
    except (ConfigError, SnapshotError, OSError) as e:
        print(f"[error] Initial lint failed: {e}")

    event_handler = LintEventHandler(run_lint, delay=delay, only=None if target.is_dir() else target)
    observer = Observer()
    observer.schedule(event_handler, str(root), recursive=target.is_dir())
    observer.start()

    try:
        while True:
            time.sleep(poll)
    except KeyboardInterrupt:
        observer.stop()
    observer.join()
