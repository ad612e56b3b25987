"""Assembly of an OpenAPI document from a base definition and annotated fragments."""

from __future__ import annotations

import copy
from collections import OrderedDict
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

import yaml

from .definition import OpenAPIDefinition
from .errors import FragmentDecodeError, MergeConflictError
from .fragments import decode_fragment, to_json_value
from .logging import get_logger
from .merge import IncompatibleTypesError, deep_merge
from .models import Declaration, DeclarationKind
from .selector import select_fragment
from .validation import OpenAPISchemaValidator, Validator, ensure_valid

FragmentDecoder = Callable[[str], Any]
BaseDefinition = Union[OpenAPIDefinition, Mapping[str, Any]]


def order_declarations(declarations: Iterable[Declaration]) -> List[Declaration]:
    """Return declarations in the order fragments are merged.

    Files are visited in lexicographic path order. Within a file every type is
    followed by its methods, then methods of types that were not listed, then
    standalone functions; each group keeps its declared order.
    """
    by_file: Dict[str, List[Declaration]] = {}
    for declaration in declarations:
        by_file.setdefault(declaration.path, []).append(declaration)

    ordered: List[Declaration] = []
    for path in sorted(by_file):
        ordered.extend(_order_file(by_file[path]))
    return ordered


def _order_file(declarations: List[Declaration]) -> List[Declaration]:
    def declared(items: Iterable[Declaration]) -> List[Declaration]:
        return sorted(items, key=lambda item: item.position)

    types = declared(d for d in declarations if d.kind is DeclarationKind.TYPE)
    functions = declared(d for d in declarations if d.kind is DeclarationKind.FUNCTION)

    methods: "OrderedDict[str, List[Declaration]]" = OrderedDict()
    for method in declared(d for d in declarations if d.kind is DeclarationKind.METHOD):
        methods.setdefault(method.owner, []).append(method)

    ordered: List[Declaration] = []
    for type_declaration in types:
        ordered.append(type_declaration)
        ordered.extend(methods.pop(type_declaration.name, []))
    for orphans in methods.values():
        ordered.extend(orphans)
    ordered.extend(functions)
    return ordered


class DocumentAssembler:
    """Seeds a document from the base definition and merges every fragment into it.

    Each call to :meth:`assemble` owns its own accumulated document; nothing is
    kept on the instance between runs.
    """

    def __init__(
        self,
        validator: Optional[Validator] = None,
        decoder: Optional[FragmentDecoder] = None,
    ) -> None:
        self.validator = validator or OpenAPISchemaValidator()
        self.decoder = decoder or decode_fragment
        self.logger = get_logger("assembler")

    def assemble(
        self,
        definition: BaseDefinition,
        declarations: Iterable[Declaration],
        *,
        validate: bool = True,
    ) -> Dict[str, Any]:
        """Return the merged document or raise on the first failure."""
        document = self._seed(definition)
        merged = 0
        skipped = 0

        for declaration in order_declarations(declarations):
            markup = select_fragment(declaration.doc)
            if markup is None:
                skipped += 1
                continue

            fragment = self._decode(declaration, markup)
            if fragment is None:
                self.logger.debug("Annotated %s has an empty fragment", declaration.describe())
                continue

            document = self._merge(declaration, document, fragment)
            merged += 1
            self.logger.debug("Merged fragment from %s", declaration.describe())

        self.logger.info("Merged %d fragments (%d declarations without annotations)", merged, skipped)

        if validate:
            ensure_valid(document, self.validator)
        return document

    @staticmethod
    def _seed(definition: BaseDefinition) -> Dict[str, Any]:
        if isinstance(definition, OpenAPIDefinition):
            return to_json_value(definition.to_document())
        return to_json_value(copy.deepcopy(dict(definition)))

    def _decode(self, declaration: Declaration, markup: str) -> Any:
        try:
            return self.decoder(markup)
        except (yaml.YAMLError, ValueError, TypeError) as exc:
            raise FragmentDecodeError(
                f"Failed to decode @openapi fragment for {declaration.describe()}: {exc}",
                declaration,
            ) from exc

    @staticmethod
    def _merge(declaration: Declaration, document: Dict[str, Any], fragment: Any) -> Dict[str, Any]:
        try:
            return deep_merge(document, fragment)
        except IncompatibleTypesError as exc:
            raise MergeConflictError(
                f"Failed to merge @openapi fragment for {declaration.describe()}: {exc}",
                declaration,
            ) from exc


__all__ = ["DocumentAssembler", "order_declarations"]
