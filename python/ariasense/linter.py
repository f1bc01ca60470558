# SPDX-License-Identifier: AGPL-3.0-only
from __future__ import annotations

import warnings
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any, Iterable, Mapping

from .config import LEVEL_ERROR, LEVEL_OFF, LEVEL_WARN, Configuration
from .rules import RULES, Rule
from .snapshot import load_tree
from .tree import Node, iter_elements
from .types import LintError, LintWarning, SnapshotError


LINT_RESULT_SCHEMA = "ariasense.lint_result.v1"
_SEVERITY = {LEVEL_ERROR: "error", LEVEL_WARN: "warning"}


def _diagnostic(code: str, severity: str, message: str, path: str, **extra: Any) -> dict[str, Any]:
    out = {
        "code": code,
        "severity": severity,
        "message": message,
        "path": path,
    }
    out.update(extra)
    return out


def _normalize_mode(mode: str | None) -> str | None:
    normalized = None if mode is None else str(mode).strip().lower()
    if normalized not in {None, "", "warn", "raise"}:
        raise ValueError(f"Unsupported lint mode {mode!r}")
    return normalized or None


def active_rules(
    config: Configuration, rules: Iterable[str] | None = None
) -> list[tuple[Rule, str, Mapping[str, Any]]]:
    """``(rule, level, options)`` for every rule that will run.

    With an explicit ``rules`` selection, a selected rule that is off by
    default runs at ``error`` unless the configuration sets a level.
    """
    selected = None if rules is None else set(rules)
    if selected is not None:
        unknown = sorted(selected - set(RULES))
        if unknown:
            raise ValueError(f"Unknown rule(s): {', '.join(unknown)}")
    out: list[tuple[Rule, str, Mapping[str, Any]]] = []
    for rule_id, rule in RULES.items():
        if selected is not None and rule_id not in selected:
            continue
        setting = config.rule_setting(rule_id)
        if setting is not None:
            level = setting.level
        elif selected is not None and rule.default_level == LEVEL_OFF:
            level = LEVEL_ERROR
        else:
            level = rule.default_level
        if level == LEVEL_OFF:
            continue
        out.append((rule, level, rule.resolve_options(setting)))
    return out


def _report(diagnostics: list[dict[str, Any]], mode: str | None) -> dict[str, Any]:
    errors = [d for d in diagnostics if d["severity"] == "error"]
    warnings_only = [d for d in diagnostics if d["severity"] != "error"]
    return {
        "ok": not errors,
        "mode": mode,
        "error_count": len(errors),
        "warning_count": len(warnings_only),
        "errors": errors,
        "warnings": warnings_only,
        "diagnostics": diagnostics,
    }


def _emit(report: dict[str, Any], mode: str | None) -> None:
    if mode == "warn":
        for diag in report["diagnostics"]:
            warnings.warn(
                f"[{diag['severity']}] {diag['code']}: {diag['message']} ({diag['path']})",
                LintWarning,
                stacklevel=3,
            )
    if mode == "raise" and report["errors"]:
        raise LintError("Accessibility lint failed", report)


def lint_tree(
    root: Node,
    config: Configuration | None = None,
    *,
    mode: str | None = None,
    rules: Iterable[str] | None = None,
) -> dict[str, Any]:
    """Run every enabled rule over each element of ``root``.

    ``mode="warn"`` also emits each diagnostic as a ``LintWarning``;
    ``mode="raise"`` raises ``LintError`` when any error was found.
    """
    normalized_mode = _normalize_mode(mode)
    config = config or Configuration.default()
    selected = active_rules(config, rules)

    diagnostics: list[dict[str, Any]] = []
    for node, path in iter_elements(root):
        for rule, level, options in selected:
            for finding in rule.run(node, path, config, options):
                extra = dict(finding)
                message = extra.pop("message")
                diagnostics.append(_diagnostic(rule.id, _SEVERITY[level], message, path, element=node.name, **extra))

    report = _report(diagnostics, normalized_mode)
    _emit(report, normalized_mode)
    return report


def lint_file(
    path: str | Path,
    config: Configuration | None = None,
    *,
    mode: str | None = None,
    rules: Iterable[str] | None = None,
) -> dict[str, Any]:
    root = load_tree(path)
    report = lint_tree(root, config, mode=mode, rules=rules)
    report["file"] = str(path)
    return report


def _snapshot_failure(path: str | Path, exc: SnapshotError) -> dict[str, Any]:
    diag = _diagnostic("snapshot-error", "error", str(exc), "/", errors=list(exc.errors))
    report = _report([diag], None)
    report["file"] = str(path)
    return report


def _lint_one(path: str | Path, config: Configuration, rules: Iterable[str] | None) -> dict[str, Any]:
    try:
        return lint_file(path, config, rules=rules)
    except SnapshotError as exc:
        return _snapshot_failure(path, exc)


def lint_files(
    paths: Iterable[str | Path],
    config: Configuration | None = None,
    *,
    jobs: int = 1,
    rules: Iterable[str] | None = None,
) -> dict[str, Any]:
    """Lint several snapshot files; per-file reports keep the input order."""
    config = config or Configuration.default()
    targets = list(paths)
    rule_ids = None if rules is None else list(rules)
    results: list[dict[str, Any] | None] = [None] * len(targets)
    if jobs <= 1 or len(targets) <= 1:
        for idx, target in enumerate(targets):
            results[idx] = _lint_one(target, config, rule_ids)
    else:
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            fut_to_index = {pool.submit(_lint_one, target, config, rule_ids): idx for idx, target in enumerate(targets)}
            for fut in as_completed(fut_to_index):
                results[fut_to_index[fut]] = fut.result()

    files = [r for r in results if r is not None]
    error_count = sum(r["error_count"] for r in files)
    warning_count = sum(r["warning_count"] for r in files)
    return {
        "schema": LINT_RESULT_SCHEMA,
        "ok": error_count == 0,
        "file_count": len(files),
        "error_count": error_count,
        "warning_count": warning_count,
        "files": files,
    }
