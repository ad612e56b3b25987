"""Pipeline orchestration for document generation runs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .assembler import BaseDefinition, DocumentAssembler
from .config import OpenAPIDocConfig, load_config
from .errors import ConfigError
from .introspection import DeclarationExtractor
from .logging import get_logger
from .models import Declaration
from .output import render_document, write_document
from .source_scanner import SourceScanner


@dataclass
class GenerationResult:
    """Outcome of a generation run."""

    document: Dict[str, Any]
    declarations: List[Declaration]
    output_path: Optional[Path] = None
    format: str = "json"


class Generator:
    """Coordinates scanning, extraction, assembly and output for a project root."""

    def __init__(
        self,
        extractor: DeclarationExtractor | None = None,
        assembler: DocumentAssembler | None = None,
    ) -> None:
        self.extractor = extractor or DeclarationExtractor()
        self.assembler = assembler or DocumentAssembler()
        self.logger = get_logger("generator")

    def collect(self, root: str | Path, exclude_paths: List[str] | None = None) -> List[Declaration]:
        """Return the declarations found under ``root``."""
        scanner = SourceScanner(exclude_paths or [])
        paths = scanner.scan(root)
        return self.extractor.extract_files(Path(root).expanduser().resolve(), paths)

    def run(
        self,
        root: str | Path = ".",
        definition: BaseDefinition | None = None,
        *,
        validate: bool | None = None,
        config: OpenAPIDocConfig | None = None,
    ) -> GenerationResult:
        """Generate the document for ``root``.

        Arguments override the matching ``.openapidoc.yml`` settings.
        """
        root_path = Path(root).expanduser().resolve()
        self.logger.info("Starting generation run for %s", root_path)
        config = config or load_config(root_path)

        definition = definition if definition is not None else config.definition
        if definition is None:
            raise ConfigError(
                "No base definition supplied; pass one or add a 'definition' section to .openapidoc.yml"
            )
        should_validate = config.validate if validate is None else validate

        declarations = self.collect(root_path, config.exclude_paths)
        self.logger.debug("Collected %d declarations", len(declarations))
        document = self.assembler.assemble(definition, declarations, validate=should_validate)
        return GenerationResult(document=document, declarations=declarations)

    def run_and_write(
        self,
        root: str | Path = ".",
        *,
        output: Path | None = None,
        fmt: str | None = None,
        validate: bool | None = None,
        config_path: Path | None = None,
    ) -> GenerationResult:
        """Run generation and write the document to ``output`` or the configured path.

        When neither is set the document is returned without being written.
        """
        root_path = Path(root).expanduser().resolve()
        config = load_config(config_path or root_path)
        result = self.run(root_path, validate=validate, config=config)
        result.format = fmt or config.output.format

        target = output or config.output.path
        if target is None:
            return result
        result.output_path = write_document(
            target,
            result.document,
            result.format,
            indent=config.output.indent,
        )
        self.logger.info("Wrote OpenAPI document to %s", result.output_path)
        return result


def generate_openapi_doc(
    definition: BaseDefinition,
    *,
    validate: bool = True,
    root: str | Path = ".",
) -> str:
    """Generate a compact JSON OpenAPI document for the sources under ``root``.

    The base definition is merged with every ``@openapi`` annotated docstring
    found in exported classes, methods and functions.
    """
    result = Generator().run(
        root,
        definition,
        validate=validate,
        config=OpenAPIDocConfig(root=Path(root).expanduser().resolve()),
    )
    return render_document(result.document, "json")


__all__ = ["GenerationResult", "Generator", "generate_openapi_doc"]
