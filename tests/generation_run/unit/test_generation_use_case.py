"""Tests for generation run use-case service."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml
from typed_openapi.generation_run import (
    GenerationRequest,
    GenerationRunError,
    execute_generation_run,
)

_DECLARATION_SOURCE = """
from typed_openapi.document_assembly import (
    ApiDeclaration,
    ApiInfo,
    HttpMethod,
    OperationDeclaration,
    PathDeclaration,
    PathParameter,
    ResponseDeclaration,
    SecurityRequirement,
)
from typed_openapi.type_modeling import INT64, STRING, Field, Named, Object, Reference

USER = Named(
    name="User",
    underlying=Object(
        name="User",
        fields=(Field(name="id", type=INT64), Field(name="name", type=STRING)),
    ),
)

API = ApiDeclaration(
    info=ApiInfo(title="Users", version="1.0.0"),
    paths=(
        PathDeclaration(
            segments=("users", PathParameter(INT64, name="id")),
            operations={
                HttpMethod.GET: OperationDeclaration(
                    responses={200: ResponseDeclaration(schema=USER)},
                    security=(SecurityRequirement.of("tokenAuth"),),
                )
            },
        ),
    ),
)

DANGLING = ApiDeclaration(
    info=ApiInfo(title="Broken", version="1.0.0"),
    paths=(
        PathDeclaration(
            segments=("ghosts",),
            operations={
                HttpMethod.GET: OperationDeclaration(
                    responses={200: ResponseDeclaration(schema=Reference("Ghost"))}
                )
            },
        ),
    ),
)
"""


def _write_config(tmp_path: Path, **overrides) -> Path:
    (tmp_path / "declarations.py").write_text(_DECLARATION_SOURCE, encoding="utf-8")
    config = {
        "declaration": {"target": overrides.pop("target", "declarations.py:API")},
        "output": {"path": "build/openapi.yaml"},
    }
    config.update(overrides)
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(config), encoding="utf-8")
    return path


def test_writes_document_to_configured_path(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)

    outcome = execute_generation_run(GenerationRequest(config_path=str(config_path)))

    assert outcome.output_path == (tmp_path / "build" / "openapi.yaml").resolve()
    assert outcome.schema_count == 1
    assert outcome.path_count == 1
    assert outcome.dry_run is False
    document = yaml.safe_load(outcome.output_path.read_text(encoding="utf-8"))
    assert list(document["paths"]) == ["/users/{id}"]
    assert list(document["components"]["schemas"]) == ["User"]


def test_output_override_and_json_format(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path, output={"format": "json"})
    override = tmp_path / "custom.json"

    outcome = execute_generation_run(
        GenerationRequest(config_path=str(config_path), output_path=str(override))
    )

    assert outcome.output_path == override.resolve()
    assert json.loads(override.read_text(encoding="utf-8"))["info"]["title"] == "Users"


def test_dry_run_validates_without_writing(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)

    outcome = execute_generation_run(GenerationRequest(config_path=str(config_path), dry_run=True))

    assert outcome.dry_run is True
    assert outcome.schema_count == 1
    assert not outcome.output_path.exists()


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"target": "declarations.py:MISSING"}, "has no attribute 'MISSING'"),
        ({"target": "declarations.py:DANGLING"}, "Schema reference 'Ghost'"),
        (
            {"assembly": {"unknown_security_schemes": "error"}},
            "Security scheme 'tokenAuth' is referenced but never defined",
        ),
        ({"output": {"format": "xml"}}, "output.format must be one of"),
    ],
)
def test_collaborator_errors_are_wrapped(tmp_path: Path, overrides: dict, message: str) -> None:
    config_path = _write_config(tmp_path, **overrides)

    with pytest.raises(GenerationRunError, match=message) as exc_info:
        execute_generation_run(GenerationRequest(config_path=str(config_path)))

    assert exc_info.value.__cause__ is not None


def test_missing_configuration_is_wrapped(tmp_path: Path) -> None:
    with pytest.raises(GenerationRunError, match="Configuration file not found"):
        execute_generation_run(GenerationRequest(config_path=str(tmp_path / "none.yaml")))
