"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides a small documented project shared by the index, validate
and CLI tests.
"""

import sys
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local edgedoc package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of edgedoc modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("edgedoc"):
        del sys.modules[module_name]


SAMPLE_PROJECT: dict[str, str] = {
    "tasks/features/core.md": """\
---
feature: core
code_references: [src/core.ts]
---
# Core
""",
    "tasks/features/graph.md": """\
---
feature: graph
code_references:
  - src/graph.ts
related_features: [terms]
depends_on: [core]
interfaces: [cli/build]
test_files: [tests/graph.test.ts]
---
# Graph

Builds the [[Dependency Graph]].
""",
    "tasks/features/terms.md": """\
---
feature: terms
code_references: [src/terms.ts, src/missing.ts]
uses_interfaces: [cli/build]
---
# Terms

## [[Term]]

A defined word.

Each [[Term]] may point at the [[Dependency Graph]].
""",
    "tasks/interfaces/cli/build.md": """\
---
from: graph
to: cli
type: command
---
# graph build
""",
    "docs/GLOSSARY.md": """\
# Glossary

## [[Dependency Graph]]

Imports between source files.
""",
    "src/core.ts": 'export const VERSION = "1";\n',
    "src/graph.ts": (
        'import { VERSION } from "./core";\n'
        'import { merge } from "lodash";\n'
        "export function build() {\n"
        "  return merge({}, { VERSION });\n"
        "}\n"
    ),
    "src/terms.ts": 'import { build } from "./graph";\nexport class Term {}\n',
    "src/orphan.ts": "export function unused() {}\n",
    "tests/graph.test.ts": 'import { build } from "../src/graph";\nbuild();\n',
}
"""Files of the sample project.

core ← graph ← terms import chain, ``src/orphan.ts`` reached by nothing,
``src/missing.ts`` documented but absent, and one interface provided by
graph and used by terms.
"""


def write_files(root: Path, files: dict[str, str]) -> Path:
    for rel, text in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
    return root


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """A documented TypeScript project on disk."""
    root = tmp_path / "project"
    root.mkdir()
    (root / ".git").mkdir()
    return write_files(root, SAMPLE_PROJECT)
