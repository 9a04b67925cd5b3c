"""Document assembly service.

Assembly runs in phases: every type reference in the declaration is
synthesized first, the registry is then frozen and checked for dangling
references, and only afterwards is the document emitted.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from typed_openapi.schema_registry.registry import SchemaRegistry
from typed_openapi.schema_synthesis.schema_nodes import SchemaNode
from typed_openapi.schema_synthesis.synthesizer import synthesize
from typed_openapi.type_modeling.type_descriptors import TypeDescriptor, descriptor_display_name

from .api_declarations import (
    ApiDeclaration,
    ApiInfo,
    ApiKeySecurityScheme,
    HttpMethod,
    OperationDeclaration,
    ParameterDeclaration,
    ParameterLocation,
    PathDeclaration,
    PathParameter,
    RequestBodyDeclaration,
    ResponseDeclaration,
    SecurityRequirement,
    SecurityScheme,
    Server,
    Tag,
)
from .openapi_document import (
    JSON_MEDIA_TYPE,
    OPENAPI_VERSION,
    AssemblyOptions,
    OpenApiDocument,
    SecurityReferencePolicy,
)

_LOGGER = logging.getLogger("typed_openapi.assembly")
_LOGGER.addHandler(logging.NullHandler())


class AssemblyError(Exception):
    """Raised when declarations cannot be combined into one document."""


class UnknownSecuritySchemeError(AssemblyError):
    """Raised when an operation references a security scheme nobody defines."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Security scheme '{name}' is referenced but never defined.")


def assemble_declaration(
    declaration: ApiDeclaration,
    registry: SchemaRegistry | None = None,
    *,
    options: AssemblyOptions | None = None,
) -> OpenApiDocument:
    """Assemble an ApiDeclaration bundle, creating a fresh registry if none is given."""
    return assemble(
        declaration.info,
        declaration.tags,
        declaration.servers,
        declaration.security_schemes,
        declaration.paths,
        registry if registry is not None else SchemaRegistry(),
        options=options,
    )


def assemble(  # pylint: disable=too-many-arguments
    info: ApiInfo,
    tags: Iterable[Tag],
    servers: Iterable[Server],
    security_schemes: Mapping[str, SecurityScheme],
    paths: Iterable[PathDeclaration],
    registry: SchemaRegistry,
    *,
    options: AssemblyOptions | None = None,
) -> OpenApiDocument:
    """Produce the full OpenAPI document for the supplied declarations."""
    options = options or AssemblyOptions()
    assembly = _PathAssembly(registry, options, security_schemes)

    rendered_paths = assembly.render_paths(paths)

    registry.freeze()
    registry.verify_references(assembly.schema_nodes)
    assembly.check_security_references()

    root: dict[str, Any] = {"openapi": OPENAPI_VERSION, "info": _render_info(info)}
    rendered_tags = _render_tags(tags)
    if rendered_tags:
        root["tags"] = rendered_tags
    rendered_servers = [_render_server(server) for server in servers]
    if rendered_servers:
        root["servers"] = rendered_servers
    root["paths"] = rendered_paths
    root["components"] = _render_components(registry, assembly.security_schemes)

    _LOGGER.debug(
        "assembled document with %d paths and %d schemas", len(rendered_paths), len(registry)
    )
    return OpenApiDocument(root)


class _PathAssembly:
    """Synthesizes and renders paths while collecting schema nodes and security names."""

    def __init__(
        self,
        registry: SchemaRegistry,
        options: AssemblyOptions,
        security_schemes: Mapping[str, SecurityScheme],
    ) -> None:
        self._registry = registry
        self._options = options
        self.security_schemes: dict[str, SecurityScheme] = dict(security_schemes)
        self.schema_nodes: list[SchemaNode] = []
        self._referenced_schemes: set[str] = set()

    def render_paths(self, paths: Iterable[PathDeclaration]) -> dict[str, Any]:
        merged: dict[str, _PathItem] = {}
        for path in paths:
            template, template_parameters = self._path_template(path)
            item = merged.setdefault(template, _PathItem(template))
            item.merge(path, template_parameters)
        return {template: self._render_path_item(item) for template, item in merged.items()}

    def check_security_references(self) -> None:
        unknown = sorted(self._referenced_schemes - set(self.security_schemes))
        if not unknown:
            return
        if self._options.unknown_security_schemes is SecurityReferencePolicy.ERROR:
            raise UnknownSecuritySchemeError(unknown[0])
        _LOGGER.warning("security schemes referenced but not defined: %s", ", ".join(unknown))

    def _schema(self, descriptor: TypeDescriptor) -> dict[str, Any]:
        node = synthesize(descriptor, self._registry)
        self.schema_nodes.append(node)
        return node.to_openapi()

    def _path_template(
        self, path: PathDeclaration
    ) -> tuple[str, list[ParameterDeclaration]]:
        rendered: list[str] = []
        parameters: list[ParameterDeclaration] = []
        for segment in path.segments:
            if isinstance(segment, PathParameter):
                name = _path_parameter_name(segment)
                rendered.append(f"{{{name}}}")
                parameters.append(
                    ParameterDeclaration(
                        name=name,
                        location=ParameterLocation.PATH,
                        schema=segment.type,
                        required=True,
                    )
                )
            else:
                rendered.append(segment.strip("/"))
        return "/" + "/".join(part for part in rendered if part), parameters

    def _render_path_item(self, item: _PathItem) -> dict[str, Any]:
        rendered: dict[str, Any] = {}
        if item.summary is not None:
            rendered["summary"] = item.summary
        if item.description is not None:
            rendered["description"] = item.description
        for method in sorted(item.operations, key=lambda method: method.position):
            rendered[method.value] = self._render_operation(item.operations[method])
        parameters = self._render_parameters(item.parameters)
        if parameters:
            rendered["parameters"] = parameters
        return rendered

    def _render_operation(self, operation: OperationDeclaration) -> dict[str, Any]:
        if not operation.responses:
            raise AssemblyError("Every operation needs at least one response.")
        rendered: dict[str, Any] = {}
        if operation.tags:
            rendered["tags"] = list(operation.tags)
        if operation.summary is not None:
            rendered["summary"] = operation.summary
        if operation.operation_id is not None:
            rendered["operationId"] = operation.operation_id
        if operation.description is not None:
            rendered["description"] = operation.description
        if operation.deprecated:
            rendered["deprecated"] = True
        if operation.security:
            rendered["security"] = [
                self._render_security_requirement(requirement)
                for requirement in operation.security
            ]
        if operation.body is not None:
            rendered["requestBody"] = self._render_request_body(operation.body)
        rendered["responses"] = {
            str(code): self._render_response(operation.responses[code])
            for code in sorted(operation.responses)
        }
        parameters = self._render_parameters(_dedupe_parameters(operation.parameters))
        if parameters:
            rendered["parameters"] = parameters
        if operation.callbacks:
            rendered["callbacks"] = {
                name: self.render_paths(operation.callbacks[name])
                for name in sorted(operation.callbacks)
            }
        return rendered

    def _render_security_requirement(
        self, requirement: SecurityRequirement
    ) -> dict[str, list[str]]:
        rendered: dict[str, list[str]] = {}
        for reference in sorted(requirement.references, key=lambda reference: reference.name):
            if reference.scheme is not None:
                existing = self.security_schemes.setdefault(reference.name, reference.scheme)
                if existing != reference.scheme:
                    raise AssemblyError(
                        f"Security scheme '{reference.name}' is defined twice "
                        "with different settings."
                    )
            self._referenced_schemes.add(reference.name)
            rendered[reference.name] = list(reference.scopes)
        return rendered

    def _render_request_body(self, body: RequestBodyDeclaration) -> dict[str, Any]:
        rendered: dict[str, Any] = {}
        if body.required:
            rendered["required"] = True
        if body.description is not None:
            rendered["description"] = body.description
        rendered["content"] = {JSON_MEDIA_TYPE: {"schema": self._schema(body.schema)}}
        return rendered

    def _render_response(self, response: ResponseDeclaration) -> dict[str, Any]:
        rendered: dict[str, Any] = {
            "description": response.description or self._options.default_response_description
        }
        if response.schema is not None:
            rendered["content"] = {JSON_MEDIA_TYPE: {"schema": self._schema(response.schema)}}
        return rendered

    def _render_parameters(
        self, parameters: Iterable[ParameterDeclaration]
    ) -> list[dict[str, Any]]:
        ordered = sorted(
            parameters, key=lambda parameter: (parameter.name, parameter.location.value)
        )
        return [self._render_parameter(parameter) for parameter in ordered]

    def _render_parameter(self, parameter: ParameterDeclaration) -> dict[str, Any]:
        rendered: dict[str, Any] = {"name": parameter.name}
        if parameter.description is not None:
            rendered["description"] = parameter.description
        rendered["in"] = parameter.location.value
        if parameter.required or parameter.location is ParameterLocation.PATH:
            rendered["required"] = True
        if parameter.deprecated:
            rendered["deprecated"] = True
        if parameter.schema is not None:
            rendered["schema"] = self._schema(parameter.schema)
        return rendered


class _PathItem:
    """Operations and parameters gathered for one path template."""

    def __init__(self, template: str) -> None:
        self.template = template
        self.summary: str | None = None
        self.description: str | None = None
        self.operations: dict[HttpMethod, OperationDeclaration] = {}
        self._parameters: dict[tuple[str, str], ParameterDeclaration] = {}

    @property
    def parameters(self) -> list[ParameterDeclaration]:
        return list(self._parameters.values())

    def merge(
        self, path: PathDeclaration, template_parameters: list[ParameterDeclaration]
    ) -> None:
        for method, operation in path.operations.items():
            if method in self.operations:
                raise AssemblyError(
                    f"Operation {method.value.upper()} {self.template} is declared more than once."
                )
            self.operations[method] = operation
        for parameter in (*template_parameters, *path.parameters):
            self._parameters.setdefault(parameter.key, parameter)
        self.summary = self.summary if self.summary is not None else path.summary
        self.description = self.description if self.description is not None else path.description


def _dedupe_parameters(
    parameters: Iterable[ParameterDeclaration],
) -> list[ParameterDeclaration]:
    unique: dict[tuple[str, str], ParameterDeclaration] = {}
    for parameter in parameters:
        unique.setdefault(parameter.key, parameter)
    return list(unique.values())


def _path_parameter_name(segment: PathParameter) -> str:
    if segment.name:
        return segment.name
    type_name = descriptor_display_name(segment.type)
    if not type_name:
        raise AssemblyError("Path parameters of anonymous types need an explicit name.")
    return type_name[0].lower() + type_name[1:]


def _render_info(info: ApiInfo) -> dict[str, Any]:
    rendered: dict[str, Any] = {"title": info.title, "version": info.version}
    if info.description is not None:
        rendered["description"] = info.description
    return rendered


def _render_tags(tags: Iterable[Tag]) -> list[dict[str, Any]]:
    unique: dict[str, Tag] = {}
    for tag in tags:
        existing = unique.setdefault(tag.name, tag)
        if existing != tag:
            raise AssemblyError(f"Tag '{tag.name}' is declared twice with different descriptions.")
    rendered = []
    for name in sorted(unique):
        entry: dict[str, Any] = {"name": name}
        if unique[name].description is not None:
            entry["description"] = unique[name].description
        rendered.append(entry)
    return rendered


def _render_server(server: Server) -> dict[str, Any]:
    rendered: dict[str, Any] = {"url": server.url}
    if server.description is not None:
        rendered["description"] = server.description
    return rendered


def _render_components(
    registry: SchemaRegistry, security_schemes: Mapping[str, SecurityScheme]
) -> dict[str, Any]:
    components: dict[str, Any] = {}
    schemas = registry.all()
    if schemas:
        components["schemas"] = {name: node.to_openapi() for name, node in schemas}
    if security_schemes:
        components["securitySchemes"] = {
            name: _render_security_scheme(security_schemes[name])
            for name in sorted(security_schemes)
        }
    return components


def _render_security_scheme(scheme: SecurityScheme) -> dict[str, Any]:
    if isinstance(scheme, ApiKeySecurityScheme):
        rendered: dict[str, Any] = {
            "type": "apiKey",
            "in": scheme.location.value,
            "name": scheme.name,
        }
    else:
        rendered = {"type": "http", "scheme": scheme.scheme.value}
        if scheme.bearer_format is not None:
            rendered["bearerFormat"] = scheme.bearer_format
    if scheme.description is not None:
        rendered["description"] = scheme.description
    return rendered
