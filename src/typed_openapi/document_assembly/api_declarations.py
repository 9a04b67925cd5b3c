"""API declaration entities supplied by the path/operation DSL layer."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from typed_openapi.type_modeling.builtin_types import STRING
from typed_openapi.type_modeling.type_descriptors import TypeDescriptor


class HttpMethod(str, Enum):
    """Path item operation keys in emission order."""

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"

    @property
    def position(self) -> int:
        return list(HttpMethod).index(self)


class ParameterLocation(str, Enum):
    """Where a parameter or API key is carried."""

    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    COOKIE = "cookie"


class HttpAuthScheme(str, Enum):
    BASIC = "basic"
    BEARER = "bearer"


@dataclass(frozen=True)
class ApiInfo:
    title: str
    version: str
    description: str | None = None


@dataclass(frozen=True)
class Tag:
    name: str
    description: str | None = None


@dataclass(frozen=True)
class Server:
    url: str
    description: str | None = None


@dataclass(frozen=True)
class HttpSecurityScheme:
    """HTTP authentication scheme (basic or bearer)."""

    scheme: HttpAuthScheme
    bearer_format: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class ApiKeySecurityScheme:
    """API key carried in a header, query parameter or cookie."""

    location: ParameterLocation
    name: str
    description: str | None = None


SecurityScheme = HttpSecurityScheme | ApiKeySecurityScheme


@dataclass(frozen=True)
class SecurityReference:
    """Reference to a security scheme by name.

    When `scheme` is given the scheme is declared in place and added to the
    document components under `name`.
    """

    name: str
    scopes: tuple[str, ...] = ()
    scheme: SecurityScheme | None = None


@dataclass(frozen=True)
class SecurityRequirement:
    """All referenced schemes must be satisfied together."""

    references: tuple[SecurityReference, ...]

    @staticmethod
    def of(*names: str) -> SecurityRequirement:
        return SecurityRequirement(tuple(SecurityReference(name) for name in names))


@dataclass(frozen=True)
class ParameterDeclaration:
    name: str
    location: ParameterLocation
    schema: TypeDescriptor | None = None
    description: str | None = None
    required: bool = False
    deprecated: bool = False

    @property
    def key(self) -> tuple[str, str]:
        return (self.location.value, self.name)

    @staticmethod
    def header(
        name: str,
        *,
        schema: TypeDescriptor = STRING,
        description: str | None = None,
        required: bool = True,
        deprecated: bool = False,
    ) -> ParameterDeclaration:
        return ParameterDeclaration(
            name=name,
            location=ParameterLocation.HEADER,
            schema=schema,
            description=description,
            required=required,
            deprecated=deprecated,
        )

    @staticmethod
    def query(
        name: str,
        schema: TypeDescriptor,
        *,
        description: str | None = None,
        required: bool = False,
        deprecated: bool = False,
    ) -> ParameterDeclaration:
        return ParameterDeclaration(
            name=name,
            location=ParameterLocation.QUERY,
            schema=schema,
            description=description,
            required=required,
            deprecated=deprecated,
        )


@dataclass(frozen=True)
class PathParameter:
    """Templated path segment; unnamed segments take the type's name."""

    type: TypeDescriptor
    name: str | None = None


PathSegment = str | PathParameter


@dataclass(frozen=True)
class RequestBodyDeclaration:
    schema: TypeDescriptor
    description: str | None = None
    required: bool = True


@dataclass(frozen=True)
class ResponseDeclaration:
    description: str | None = None
    schema: TypeDescriptor | None = None


@dataclass(frozen=True)
class OperationDeclaration:  # pylint: disable=too-many-instance-attributes
    responses: Mapping[int, ResponseDeclaration]
    tags: tuple[str, ...] = ()
    summary: str | None = None
    description: str | None = None
    operation_id: str | None = None
    deprecated: bool = False
    parameters: tuple[ParameterDeclaration, ...] = ()
    body: RequestBodyDeclaration | None = None
    security: tuple[SecurityRequirement, ...] = ()
    callbacks: Mapping[str, tuple[PathDeclaration, ...]] = field(default_factory=dict)


@dataclass(frozen=True)
class PathDeclaration:
    segments: tuple[PathSegment, ...]
    operations: Mapping[HttpMethod, OperationDeclaration]
    parameters: tuple[ParameterDeclaration, ...] = ()
    summary: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class ApiDeclaration:
    """Everything needed to assemble one document."""

    info: ApiInfo
    paths: tuple[PathDeclaration, ...] = ()
    tags: tuple[Tag, ...] = ()
    servers: tuple[Server, ...] = ()
    security_schemes: Mapping[str, SecurityScheme] = field(default_factory=dict)
