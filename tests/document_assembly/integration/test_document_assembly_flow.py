"""End-to-end document assembly tests."""

from __future__ import annotations

from typed_openapi.document_assembly import (
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
    RequestBodyDeclaration,
    ResponseDeclaration,
    SecurityReference,
    SecurityRequirement,
    Server,
    Tag,
    assemble_declaration,
)
from typed_openapi.document_output import render_document
from typed_openapi.type_modeling import (
    INT32,
    STRING,
    UINT32,
    UNIT,
    UUID,
    Array,
    EnumType,
    ExternalTagging,
    Field,
    Named,
    Object,
    Optional,
    Variant,
)

_SIMPLE_ENUM = Named(
    name="SimpleEnum",
    underlying=EnumType(
        name="SimpleEnum",
        representation=ExternalTagging(),
        variants=(Variant.unit("test"), Variant.unit("another"), Variant.unit("yay")),
    ),
    description="Simple enum",
)
_TEST = Named(
    name="Test",
    underlying=Object(name="Test", fields=(Field(name="another_field", type=Optional(STRING)),)),
)
_IN_MODULE = Named(
    name="InModule",
    underlying=Object(
        name="InModule",
        fields=(Field(name="field", type=STRING), Field(name="second", type=_TEST)),
    ),
)


def _declaration() -> ApiDeclaration:
    callback_path = PathDeclaration(
        segments=("callback_url",),
        operations={
            HttpMethod.POST: OperationDeclaration(
                body=RequestBodyDeclaration(schema=_IN_MODULE),
                responses={200: ResponseDeclaration(schema=Array(STRING))},
            )
        },
    )
    test_auth = SecurityReference(
        name="test_auth",
        scheme=ApiKeySecurityScheme(location=ParameterLocation.QUERY, name="X-MY-SUPER-API"),
    )
    return ApiDeclaration(
        info=ApiInfo(title="My super API", version="0.0.0"),
        tags=(Tag("internal"), Tag("admin", "Super admin methods")),
        servers=(Server("https://my.super.server.com/v1"), Server("http://test/123")),
        security_schemes={
            "bearerAuth": HttpSecurityScheme(
                scheme=HttpAuthScheme.BEARER,
                bearer_format="JWT",
                description="Test description",
            ),
            "basicAuth": HttpSecurityScheme(
                scheme=HttpAuthScheme.BASIC, description="Another test description"
            ),
            "ApiKeyAuth": ApiKeySecurityScheme(
                location=ParameterLocation.QUERY,
                name="X-API-KEY",
                description="And another test description",
            ),
        },
        paths=(
            PathDeclaration(
                segments=("test", PathParameter(UUID)),
                operations={
                    HttpMethod.POST: OperationDeclaration(
                        operation_id="test",
                        security=(
                            SecurityRequirement((test_auth, SecurityReference("basicAuth"))),
                        ),
                        deprecated=True,
                        body=RequestBodyDeclaration(schema=_IN_MODULE),
                        responses={200: ResponseDeclaration(schema=Array(STRING))},
                        callbacks={"myCallback": (callback_path,)},
                    )
                },
            ),
            PathDeclaration(
                segments=("hello", "world", PathParameter(STRING, name="paramTest")),
                summary="Some test group of requests",
                description="Another test description",
                parameters=(
                    ParameterDeclaration.header("x-request-id", description="Test"),
                    ParameterDeclaration.query("test", INT32),
                    ParameterDeclaration.header("asd"),
                ),
                operations={
                    HttpMethod.OPTIONS: OperationDeclaration(
                        responses={200: ResponseDeclaration(schema=UNIT)}
                    ),
                    HttpMethod.DELETE: OperationDeclaration(responses={200: ResponseDeclaration()}),
                    HttpMethod.POST: OperationDeclaration(
                        operation_id="testPost",
                        tags=("admin",),
                        body=RequestBodyDeclaration(
                            schema=STRING, description="Some interesting description"
                        ),
                        responses={200: ResponseDeclaration(schema=_SIMPLE_ENUM)},
                    ),
                    HttpMethod.GET: OperationDeclaration(
                        operation_id="testGet",
                        tags=("internal",),
                        summary="Small summary",
                        description="Small description",
                        parameters=(
                            ParameterDeclaration.query(
                                "someParam", UINT32, description="Test", deprecated=True
                            ),
                        ),
                        responses={200: ResponseDeclaration("Custom response desc", STRING)},
                    ),
                },
            ),
        ),
    )


_EXPECTED_YAML = """openapi: 3.0.3
info:
  title: My super API
  version: 0.0.0
tags:
- name: admin
  description: Super admin methods
- name: internal
servers:
- url: https://my.super.server.com/v1
- url: http://test/123
paths:
  /test/{uuid}:
    post:
      operationId: test
      deprecated: true
      security:
      - basicAuth: []
        test_auth: []
      requestBody:
        required: true
        content:
          application/json:
            schema:
              $ref: '#/components/schemas/InModule'
      responses:
        '200':
          description: OK
          content:
            application/json:
              schema:
                type: array
                items:
                  type: string
      callbacks:
        myCallback:
          /callback_url:
            post:
              requestBody:
                required: true
                content:
                  application/json:
                    schema:
                      $ref: '#/components/schemas/InModule'
              responses:
                '200':
                  description: OK
                  content:
                    application/json:
                      schema:
                        type: array
                        items:
                          type: string
    parameters:
    - name: uuid
      in: path
      required: true
      schema:
        description: UUID ver. 4 [rfc](https://tools.ietf.org/html/rfc4122)
        type: string
        format: uuid
        example: 00000000-0000-0000-0000-000000000000
  /hello/world/{paramTest}:
    summary: Some test group of requests
    description: Another test description
    get:
      tags:
      - internal
      summary: Small summary
      operationId: testGet
      description: Small description
      responses:
        '200':
          description: Custom response desc
          content:
            application/json:
              schema:
                type: string
      parameters:
      - name: someParam
        description: Test
        in: query
        deprecated: true
        schema:
          type: integer
          format: uint32
    post:
      tags:
      - admin
      operationId: testPost
      requestBody:
        required: true
        description: Some interesting description
        content:
          application/json:
            schema:
              type: string
      responses:
        '200':
          description: OK
          content:
            application/json:
              schema:
                $ref: '#/components/schemas/SimpleEnum'
    delete:
      responses:
        '200':
          description: OK
    options:
      responses:
        '200':
          description: OK
          content:
            application/json:
              schema:
                description: Always `null`
                nullable: true
                type: string
                format: 'null'
    parameters:
    - name: asd
      in: header
      required: true
      schema:
        type: string
    - name: paramTest
      in: path
      required: true
      schema:
        type: string
    - name: test
      in: query
      schema:
        type: integer
        format: int32
    - name: x-request-id
      description: Test
      in: header
      required: true
      schema:
        type: string
components:
  schemas:
    InModule:
      type: object
      properties:
        field:
          type: string
        second:
          $ref: '#/components/schemas/Test'
      required:
      - field
      - second
    SimpleEnum:
      description: Simple enum
      type: string
      enum:
      - test
      - another
      - yay
      example: test
    Test:
      type: object
      properties:
        another_field:
          nullable: true
          type: string
      required:
      - another_field
  securitySchemes:
    ApiKeyAuth:
      type: apiKey
      in: query
      name: X-API-KEY
      description: And another test description
    basicAuth:
      type: http
      scheme: basic
      description: Another test description
    bearerAuth:
      type: http
      scheme: bearer
      bearerFormat: JWT
      description: Test description
    test_auth:
      type: apiKey
      in: query
      name: X-MY-SUPER-API
"""


def test_full_declaration_renders_expected_yaml() -> None:
    document = assemble_declaration(_declaration())

    assert render_document(document, "yaml") == _EXPECTED_YAML


def test_regenerating_the_same_declaration_is_byte_identical() -> None:
    first = render_document(assemble_declaration(_declaration()), "json")
    second = render_document(assemble_declaration(_declaration()), "json")

    assert first == second


def test_document_exposes_paths_and_schema_names() -> None:
    document = assemble_declaration(_declaration())

    assert document.path_keys == ("/test/{uuid}", "/hello/world/{paramTest}")
    assert document.schema_names == ("InModule", "SimpleEnum", "Test")
