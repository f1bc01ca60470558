# SPDX-License-Identifier: AGPL-3.0-only
import argparse
import json
import sys
from importlib import metadata
from pathlib import Path

from .config import RuleSetting, load_config
from .linter import lint_files
from .rules import RULES
from .semantics import describe, resolved_role
from .snapshot import HTML_SUFFIXES, JSON_SUFFIXES, load_tree
from .tree import iter_elements
from .types import INDETERMINATE, ConfigError


def _get_version():
    """Return installed ariasense version, with a dev fallback."""
    try:
        return metadata.version("ariasense")
    except metadata.PackageNotFoundError:
        return "0.0.0-dev"


def _json_dumps(payload, indent=None):
    return json.dumps(payload, ensure_ascii=True, indent=indent, default=str)


def _emit_json(payload):
    sys.stdout.write(_json_dumps(payload) + "\n")


def _load_config(args):
    if getattr(args, "config", None):
        return load_config(args.config)
    return load_config(start=Path.cwd())


def _parse_rule_overrides(values):
    """``--rule id=level`` pairs, validated against the known rules."""
    out = {}
    for raw in values or []:
        rule_id, sep, level = str(raw).partition("=")
        rule_id = rule_id.strip()
        if not sep or not rule_id:
            raise ConfigError(f"--rule expects ID=LEVEL, got {raw!r}")
        if rule_id not in RULES:
            raise ConfigError(f"--rule: unknown rule {rule_id!r}")
        level = level.strip()
        out[rule_id] = RuleSetting.parse(int(level) if level.isdigit() else level).level
    return out


def _apply_overrides(config, overrides):
    if not overrides:
        return config
    rules = dict(config.rules)
    for rule_id, level in overrides.items():
        current = rules.get(rule_id)
        rules[rule_id] = RuleSetting(level=level, options=current.options if current else None)
    return config.replace(rules=rules)


def _expand_paths(paths):
    suffixes = JSON_SUFFIXES | HTML_SUFFIXES
    out = []
    for raw in paths:
        p = Path(raw)
        if p.is_dir():
            out.extend(sorted(c for c in p.rglob("*") if c.is_file() and c.suffix.lower() in suffixes))
        else:
            out.append(p)
    return out


def _print_lint_text(result):
    for file_report in result["files"]:
        for diag in file_report["diagnostics"]:
            tag = "error" if diag["severity"] == "error" else "warn"
            sys.stdout.write(f"[{tag}] {file_report['file']}:{diag['path']} {diag['code']}: {diag['message']}\n")
    summary = (
        f"{result['file_count']} file(s), {result['error_count']} error(s), {result['warning_count']} warning(s)"
    )
    sys.stdout.write(f"[{'ok' if result['ok'] else 'error'}] {summary}\n")


def _lint_exit_code(result, max_warnings):
    if result["error_count"]:
        return 1
    if max_warnings is not None and result["warning_count"] > max_warnings:
        return 1
    return 0


def cmd_lint(args):
    """CLI handler for `ariasense lint`."""
    config = _apply_overrides(_load_config(args), _parse_rule_overrides(args.rule))
    paths = _expand_paths(args.paths)
    if not paths:
        raise ValueError("no snapshot files found")
    result = lint_files(paths, config, jobs=args.jobs)
    if args.json:
        _emit_json(result)
    else:
        _print_lint_text(result)
    return _lint_exit_code(result, args.max_warnings)


def _role_text(value):
    if value is INDETERMINATE:
        return "indeterminate"
    return value or "-"


def cmd_classify(args):
    """CLI handler for `ariasense classify`: per-element semantics."""
    config = _load_config(args)
    root = load_tree(args.path)
    nodes = []
    for node, path in iter_elements(root):
        info = describe(node, config).as_dict()
        info["path"] = path
        info["name"] = node.name
        info["resolved_role"] = _role_text(resolved_role(info["element_type"], node.attributes))
        nodes.append(info)
    if args.json:
        _emit_json({"schema": "ariasense.classify.v1", "ok": True, "file": str(args.path), "nodes": nodes})
    else:
        for info in nodes:
            sys.stdout.write(
                f"{info['path']}  {info['element_type'] or '-'}  {info['interactivity']}  "
                f"role={info['resolved_role']}\n"
            )
    return 0


def cmd_rules(args):
    """CLI handler for `ariasense rules`."""
    rules = [rule.as_dict() for rule in RULES.values()]
    if args.json:
        _emit_json({"schema": "ariasense.rules.v1", "ok": True, "rules": rules})
    else:
        for info in rules:
            note = " (deprecated)" if info["deprecated"] else ""
            sys.stdout.write(f"{info['id']:<42} {info['default_level']}{note}\n")
    return 0


def cmd_watch(args):
    """CLI handler for `ariasense watch`: re-lint on change."""
    from .watcher import watch

    config = _load_config(args)

    def run_lint(paths):
        result = lint_files(paths, config)
        if args.json:
            _emit_json(result)
        else:
            _print_lint_text(result)

    watch(args.path, run_lint)
    return 0


def _build_parser():
    """Construct and return the top-level CLI parser."""
    parser = argparse.ArgumentParser(prog="ariasense")
    parser.add_argument("--version", action="version", version="ariasense " + _get_version())
    parser.add_argument("--json", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    p_lint = sub.add_parser("lint", help="Lint tree snapshots (JSON) or HTML files")
    p_lint.add_argument("paths", nargs="+")
    p_lint.add_argument("--config")
    p_lint.add_argument("--rule", action="append", metavar="ID=LEVEL", help="Override a rule level (off/warn/error)")
    p_lint.add_argument("--jobs", type=int, default=1)
    p_lint.add_argument("--max-warnings", type=int, default=None)
    p_lint.add_argument("--json", action="store_true")
    p_lint.set_defaults(func=cmd_lint)

    p_classify = sub.add_parser("classify", help="Show resolved semantics for every element")
    p_classify.add_argument("path")
    p_classify.add_argument("--config")
    p_classify.add_argument("--json", action="store_true")
    p_classify.set_defaults(func=cmd_classify)

    p_rules = sub.add_parser("rules", help="List available rules")
    p_rules.add_argument("--json", action="store_true")
    p_rules.set_defaults(func=cmd_rules)

    p_watch = sub.add_parser("watch", help="Re-lint snapshots when they change")
    p_watch.add_argument("path")
    p_watch.add_argument("--config")
    p_watch.add_argument("--json", action="store_true")
    p_watch.set_defaults(func=cmd_watch)
    return parser


def main(argv=None):
    """Execute CLI command dispatch and standardized error handling."""
    argv = list(sys.argv[1:] if argv is None else argv)
    force_json = "--json" in argv
    parser = _build_parser()
    args = parser.parse_args(argv)
    if force_json:
        args.json = True
    try:
        return args.func(args) or 0
    except Exception as exc:
        if args.json:
            err = {
                "schema": "ariasense.error.v1",
                "ok": False,
                "code": "CLI_ERROR",
                "message": str(exc),
            }
            sys.stdout.write(json.dumps(err, ensure_ascii=True) + "\n")
        else:
            sys.stderr.write(f"[error] {exc}\n")
        return 3


if __name__ == "__main__":
    raise SystemExit(main())
