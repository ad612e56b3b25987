"""Declaration extraction from Python sources using the ``ast`` module."""

from __future__ import annotations

import ast
import textwrap
from pathlib import Path
from typing import Iterator, List, Sequence

from .errors import SourceParseError
from .logging import get_logger
from .models import Declaration, DeclarationKind

_FUNCTION_NODES = (ast.FunctionDef, ast.AsyncFunctionDef)


def is_exported(name: str) -> bool:
    return bool(name) and not name.startswith("_")


def clean_docstring(raw: str | None) -> str:
    """Strip docstring indentation while keeping tabs intact.

    Leading blank lines are dropped, the first text line is left-trimmed and
    the remaining lines lose their common leading whitespace. Unlike
    ``inspect.cleandoc`` tabs are not expanded.
    """
    if not raw:
        return ""
    lines = raw.split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    if not lines:
        return ""
    first = lines[0].strip()
    body = textwrap.dedent("\n".join(lines[1:])).rstrip()
    if not body:
        return first
    return f"{first}\n{body}"


class DeclarationExtractor:
    """Produces declaration records for exported classes, methods and functions."""

    def __init__(self) -> None:
        self.logger = get_logger("introspection")

    def extract_source(self, source: str, path: str = "") -> List[Declaration]:
        """Return declarations for a module's source text in declared order."""
        try:
            tree = ast.parse(source, filename=path or "<unknown>")
        except SyntaxError as exc:
            raise SourceParseError(
                f"Failed to parse {path or 'source'}: {exc.msg} (line {exc.lineno})", path
            ) from exc

        declarations: List[Declaration] = []
        for node in tree.body:
            if isinstance(node, ast.ClassDef) and is_exported(node.name):
                declarations.append(self._record(DeclarationKind.TYPE, node, path))
                declarations.extend(self._methods(node, path))
            elif isinstance(node, _FUNCTION_NODES) and is_exported(node.name):
                declarations.append(self._record(DeclarationKind.FUNCTION, node, path))
        return declarations

    def extract_files(self, root: str | Path, paths: Sequence[str]) -> List[Declaration]:
        """Read and extract every file in ``paths`` relative to ``root``."""
        root_path = Path(root)
        declarations: List[Declaration] = []
        for rel_path in paths:
            try:
                source = (root_path / rel_path).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise SourceParseError(f"Failed to read {rel_path}: {exc}", rel_path) from exc
            found = self.extract_source(source, rel_path)
            self.logger.debug("Extracted %d declarations from %s", len(found), rel_path)
            declarations.extend(found)
        return declarations

    def _methods(self, node: ast.ClassDef, path: str) -> Iterator[Declaration]:
        for child in node.body:
            if isinstance(child, _FUNCTION_NODES) and is_exported(child.name):
                yield self._record(DeclarationKind.METHOD, child, path, owner=node.name)

    @staticmethod
    def _record(
        kind: DeclarationKind,
        node: ast.AST,
        path: str,
        owner: str = "",
    ) -> Declaration:
        return Declaration(
            kind=kind,
            name=node.name,  # type: ignore[attr-defined]
            doc=clean_docstring(ast.get_docstring(node, clean=False)),  # type: ignore[arg-type]
            owner=owner,
            path=path,
            position=node.lineno,  # type: ignore[attr-defined]
        )


__all__ = ["DeclarationExtractor", "clean_docstring", "is_exported"]
