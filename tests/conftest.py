from __future__ import annotations

import sys
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[1]
PYTHON_SRC = ROOT / "python"

if str(PYTHON_SRC) not in sys.path:
    sys.path.insert(0, str(PYTHON_SRC))
else:
    sys.path.remove(str(PYTHON_SRC))
    sys.path.insert(0, str(PYTHON_SRC))


@pytest.fixture
def run_rule():
    """Run one rule against one node and return the report messages."""
    from ariasense.config import Configuration
    from ariasense.rules import RULES

    def _run(rule_id, node, options=None, config=None):
        rule = RULES[rule_id]
        opts = rule.default_options if options is None else rule.normalize_options(options)
        reports = rule.run(node, "/" + node.name + "[1]", config or Configuration.default(), opts)
        return [report["message"] for report in reports]

    return _run
