"""Base definition of an OpenAPI document supplied by the caller.

The definition seeds the accumulated document before any annotated fragment is
merged into it. Field names follow the OpenAPI 3 specification.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .errors import ConfigError

COMPONENT_SECTIONS = (
    "schemas",
    "parameters",
    "securitySchemes",
    "requestBodies",
    "responses",
    "headers",
    "examples",
    "links",
    "callbacks",
)


@dataclass(frozen=True)
class Contact:
    name: Optional[str] = None
    url: Optional[str] = None
    email: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({"name": self.name, "url": self.url, "email": self.email})


@dataclass(frozen=True)
class License:
    name: str = ""
    url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({"name": self.name, "url": self.url})


@dataclass(frozen=True)
class Info:
    """Metadata about the API. ``title`` and ``version`` are always emitted."""

    title: str = ""
    version: str = ""
    description: Optional[str] = None
    terms_of_service: Optional[str] = None
    contact: Optional[Contact] = None
    license: Optional[License] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"title": self.title, "version": self.version}
        data.update(
            _compact(
                {
                    "description": self.description,
                    "termsOfService": self.terms_of_service,
                    "contact": self.contact.to_dict() if self.contact else None,
                    "license": self.license.to_dict() if self.license else None,
                }
            )
        )
        return data


@dataclass(frozen=True)
class ExternalDocs:
    url: str = ""
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({"description": self.description, "url": self.url})


@dataclass(frozen=True)
class Server:
    url: str
    description: Optional[str] = None
    variables: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {
                "url": self.url,
                "description": self.description,
                "variables": copy.deepcopy(dict(self.variables)),
            }
        )


@dataclass(frozen=True)
class Tag:
    name: str
    description: Optional[str] = None
    external_docs: Optional[ExternalDocs] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {
                "name": self.name,
                "description": self.description,
                "externalDocs": self.external_docs.to_dict() if self.external_docs else None,
            }
        )


@dataclass(frozen=True)
class Components:
    """Static reusable definitions merged alongside annotated fragments."""

    schemas: Mapping[str, Any] = field(default_factory=dict)
    parameters: Mapping[str, Any] = field(default_factory=dict)
    security_schemes: Mapping[str, Any] = field(default_factory=dict)
    request_bodies: Mapping[str, Any] = field(default_factory=dict)
    responses: Mapping[str, Any] = field(default_factory=dict)
    headers: Mapping[str, Any] = field(default_factory=dict)
    examples: Mapping[str, Any] = field(default_factory=dict)
    links: Mapping[str, Any] = field(default_factory=dict)
    callbacks: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        values = {
            "schemas": self.schemas,
            "parameters": self.parameters,
            "securitySchemes": self.security_schemes,
            "requestBodies": self.request_bodies,
            "responses": self.responses,
            "headers": self.headers,
            "examples": self.examples,
            "links": self.links,
            "callbacks": self.callbacks,
        }
        return {key: copy.deepcopy(dict(value)) for key, value in values.items() if value}


@dataclass(frozen=True)
class OpenAPIDefinition:
    """General properties of an API, combined with annotated fragments."""

    openapi: str = ""
    info: Info = field(default_factory=Info)
    security: Sequence[Mapping[str, Sequence[str]]] = ()
    servers: Sequence[Server] = ()
    tags: Sequence[Tag] = ()
    external_docs: Optional[ExternalDocs] = None
    components: Components = field(default_factory=Components)

    def to_document(self) -> Dict[str, Any]:
        """Serialize the definition into a fresh JSON-compatible document."""
        document: Dict[str, Any] = {"openapi": self.openapi, "info": self.info.to_dict()}
        if self.security:
            document["security"] = [
                {name: list(scopes) for name, scopes in requirement.items()}
                for requirement in self.security
            ]
        if self.servers:
            document["servers"] = [server.to_dict() for server in self.servers]
        if self.tags:
            document["tags"] = [tag.to_dict() for tag in self.tags]
        if self.external_docs is not None:
            document["externalDocs"] = self.external_docs.to_dict()
        components = self.components.to_dict()
        if components:
            document["components"] = components
        return document

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "OpenAPIDefinition":
        """Build a definition from a plain mapping using OpenAPI field names."""
        if not isinstance(data, Mapping):
            raise ConfigError("definition must be a mapping")

        info_data = _as_mapping(data.get("info"), "info")
        contact_data = info_data.get("contact")
        license_data = info_data.get("license")
        info = Info(
            title=_as_str(info_data.get("title")) or "",
            version=_as_str(info_data.get("version")) or "",
            description=_as_str(info_data.get("description")),
            terms_of_service=_as_str(info_data.get("termsOfService")),
            contact=Contact(**_pick(_as_mapping(contact_data, "info.contact"), ("name", "url", "email")))
            if contact_data
            else None,
            license=License(**_pick(_as_mapping(license_data, "info.license"), ("name", "url")))
            if license_data
            else None,
        )

        servers = []
        for entry in _as_list(data.get("servers"), "servers"):
            server = _as_mapping(entry, "servers[]")
            servers.append(
                Server(
                    url=_as_str(server.get("url")) or "",
                    description=_as_str(server.get("description")),
                    variables=_as_mapping(server.get("variables"), "servers[].variables"),
                )
            )

        tags = []
        for entry in _as_list(data.get("tags"), "tags"):
            tag = _as_mapping(entry, "tags[]")
            tags.append(
                Tag(
                    name=_as_str(tag.get("name")) or "",
                    description=_as_str(tag.get("description")),
                    external_docs=_external_docs(tag.get("externalDocs")),
                )
            )

        security = []
        for entry in _as_list(data.get("security"), "security"):
            requirement = _as_mapping(entry, "security[]")
            security.append(
                {str(name): [str(scope) for scope in _as_list(scopes, "security[].scopes")]
                 for name, scopes in requirement.items()}
            )

        components_data = _as_mapping(data.get("components"), "components")
        unknown = sorted(set(components_data) - set(COMPONENT_SECTIONS))
        if unknown:
            raise ConfigError(f"Unknown component sections: {', '.join(unknown)}")
        components = Components(
            schemas=_as_mapping(components_data.get("schemas"), "components.schemas"),
            parameters=_as_mapping(components_data.get("parameters"), "components.parameters"),
            security_schemes=_as_mapping(
                components_data.get("securitySchemes"), "components.securitySchemes"
            ),
            request_bodies=_as_mapping(
                components_data.get("requestBodies"), "components.requestBodies"
            ),
            responses=_as_mapping(components_data.get("responses"), "components.responses"),
            headers=_as_mapping(components_data.get("headers"), "components.headers"),
            examples=_as_mapping(components_data.get("examples"), "components.examples"),
            links=_as_mapping(components_data.get("links"), "components.links"),
            callbacks=_as_mapping(components_data.get("callbacks"), "components.callbacks"),
        )

        return cls(
            openapi=_as_str(data.get("openapi")) or "",
            info=info,
            security=tuple(security),
            servers=tuple(servers),
            tags=tuple(tags),
            external_docs=_external_docs(data.get("externalDocs")),
            components=components,
        )


def _external_docs(value: Any) -> Optional[ExternalDocs]:
    if not value:
        return None
    data = _as_mapping(value, "externalDocs")
    return ExternalDocs(url=_as_str(data.get("url")) or "", description=_as_str(data.get("description")))


def _compact(values: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value not in (None, "", {}, [])}


def _pick(data: Mapping[str, Any], keys: Sequence[str]) -> Dict[str, Any]:
    return {key: _as_str(data.get(key)) for key in keys if data.get(key) is not None}


def _as_mapping(value: Any, where: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"{where} must be a mapping")
    return dict(value)


def _as_list(value: Any, where: str) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise ConfigError(f"{where} must be a list")
    return list(value)


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


__all__ = [
    "COMPONENT_SECTIONS",
    "Components",
    "Contact",
    "ExternalDocs",
    "Info",
    "License",
    "OpenAPIDefinition",
    "Server",
    "Tag",
]
