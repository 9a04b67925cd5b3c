"""Document assembly exports."""

from .api_declarations import (
    ApiDeclaration,
    ApiInfo,
    ApiKeySecurityScheme,
    HttpAuthScheme,
    HttpMethod,
    HttpSecurityScheme,
    OperationDeclaration,
    ParameterDeclaration,
    ParameterLocation,
    PathDeclaration,
    PathParameter,
    PathSegment,
    RequestBodyDeclaration,
    ResponseDeclaration,
    SecurityReference,
    SecurityRequirement,
    SecurityScheme,
    Server,
    Tag,
)
from .document_assembler import (
    AssemblyError,
    UnknownSecuritySchemeError,
    assemble,
    assemble_declaration,
)
from .openapi_document import (
    JSON_MEDIA_TYPE,
    OPENAPI_VERSION,
    AssemblyOptions,
    OpenApiDocument,
    SecurityReferencePolicy,
)

__all__ = [
    "JSON_MEDIA_TYPE",
    "OPENAPI_VERSION",
    "ApiDeclaration",
    "ApiInfo",
    "ApiKeySecurityScheme",
    "AssemblyError",
    "AssemblyOptions",
    "HttpAuthScheme",
    "HttpMethod",
    "HttpSecurityScheme",
    "OpenApiDocument",
    "OperationDeclaration",
    "ParameterDeclaration",
    "ParameterLocation",
    "PathDeclaration",
    "PathParameter",
    "PathSegment",
    "RequestBodyDeclaration",
    "ResponseDeclaration",
    "SecurityReference",
    "SecurityReferencePolicy",
    "SecurityRequirement",
    "SecurityScheme",
    "Server",
    "Tag",
    "UnknownSecuritySchemeError",
    "assemble",
    "assemble_declaration",
]
