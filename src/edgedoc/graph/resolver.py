"""Import specifier → project file resolution.

Resolution tries, in order, and the first hit wins:

1. the exact path,
2. the path plus each suffix of the importer's module style (a JS-family
   suffix on the specifier is also swapped for the TypeScript ones, for
   ESM-style ``./x.js`` imports of ``x.ts``),
3. the directory index of that style.

Path-style specifiers (TypeScript/JavaScript) are anchored to the importing
file's directory when they start with ``.``, and to the project root
otherwise. Dotted specifiers (Python) climb one package per extra leading
dot. Absolute dotted modules are tried against each configured source root.
A Python import never resolves to a TypeScript file and vice versa.
"""

from __future__ import annotations

import posixpath
from collections.abc import Collection, Sequence

from edgedoc.core.languages import module_style
from edgedoc.extraction.models import ImportFact

SUFFIXES: dict[str, tuple[str, ...]] = {
    "path": (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs"),
    "dotted": (".py", ".pyi"),
}
"""Suffixes appended to an extensionless specifier, per module style."""

INDEX_FILES: dict[str, tuple[str, ...]] = {
    "path": ("index.ts", "index.tsx", "index.js", "index.jsx"),
    "dotted": ("__init__.py", "__init__.pyi"),
}
"""Directory-index files tried when a specifier names a directory."""

_JS_FAMILY = (".js", ".jsx", ".mjs", ".cjs")
_TS_FOR_JS = (".ts", ".tsx", ".d.ts")


def _normalize(path: str) -> str | None:
    """Normalize a joined path, rejecting anything that escapes the root."""
    normalized = posixpath.normpath(path) if path else ""
    if normalized == ".":
        return ""
    if normalized == ".." or normalized.startswith("../") or normalized.startswith("/"):
        return None
    return normalized


class ImportResolver:
    """Resolves import facts against a fixed set of known project files."""

    def __init__(
        self,
        known_paths: Collection[str],
        *,
        python_roots: Sequence[str] = ("", "src"),
    ) -> None:
        self._known = frozenset(known_paths)
        self._python_roots = tuple(python_roots)

    def resolve_fact(self, fact: ImportFact, language: str | None) -> list[str]:
        """All project files an import refers to (empty when external)."""
        if module_style(language) == "dotted":
            targets = self._resolve_dotted(fact.file, fact.specifier, fact.names)
        else:
            target = self._resolve_path_style(fact.file, fact.specifier)
            targets = [target] if target else []
        return [t for t in dict.fromkeys(targets) if t != fact.file]

    def resolve_candidate(self, base: str, style: str = "path") -> str | None:
        """Apply exact → suffix → directory-index lookup to a base path."""
        if base and base in self._known:
            return base

        for suffix in SUFFIXES[style]:
            candidate = base + suffix
            if candidate in self._known:
                return candidate

        for js_suffix in _JS_FAMILY if style == "path" else ():
            if base.endswith(js_suffix):
                stem = base[: -len(js_suffix)]
                for ts_suffix in _TS_FOR_JS:
                    if stem + ts_suffix in self._known:
                        return stem + ts_suffix
                break

        for index_file in INDEX_FILES[style]:
            candidate = posixpath.join(base, index_file) if base else index_file
            if candidate in self._known:
                return candidate

        return None

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def _resolve_path_style(self, importer: str, specifier: str) -> str | None:
        if not specifier:
            return None
        if specifier.startswith("."):
            base = _normalize(posixpath.join(posixpath.dirname(importer), specifier))
        else:
            # "/abs" and bare specifiers are tried against the project root
            base = _normalize(specifier.lstrip("/"))
        if base is None:
            return None
        return self.resolve_candidate(base)

    def _resolve_dotted(self, importer: str, specifier: str, names: Sequence[str]) -> list[str]:
        level = len(specifier) - len(specifier.lstrip("."))
        module_path = specifier[level:].replace(".", "/")

        bases: list[str] = []
        if level:
            package_dir = posixpath.dirname(importer)
            for _ in range(level - 1):
                if not package_dir:
                    return []
                package_dir = posixpath.dirname(package_dir)
            bases.append(posixpath.join(package_dir, module_path) if module_path else package_dir)
        else:
            if not module_path:
                return []
            for root in self._python_roots:
                bases.append(posixpath.join(root, module_path) if root else module_path)

        targets: list[str] = []
        for base in bases:
            module_target = self.resolve_candidate(base, "dotted")
            submodules = [
                sub
                for name in names
                if name != "*"
                and (sub := self.resolve_candidate(posixpath.join(base, name), "dotted"))
            ]
            if module_target is None and not submodules:
                continue
            if module_target is not None:
                targets.append(module_target)
            targets.extend(submodules)
            break
        return targets
