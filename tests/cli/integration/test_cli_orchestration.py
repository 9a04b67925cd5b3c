"""CLI orchestration integration tests."""

from __future__ import annotations

from pathlib import Path

import yaml
from click.testing import CliRunner
from typed_openapi.cli import cli, main

_DECLARATION_SOURCE = """
from typed_openapi.document_assembly import (
    ApiDeclaration,
    ApiInfo,
    HttpMethod,
    OperationDeclaration,
    PathDeclaration,
    RequestBodyDeclaration,
    ResponseDeclaration,
)
from typed_openapi.type_modeling import (
    STRING,
    EnumType,
    Field,
    InternalTagging,
    Named,
    Variant,
)

SHAPE = Named(
    name="Shape",
    underlying=EnumType(
        name="Shape",
        representation=InternalTagging("kind"),
        variants=(
            Variant.struct("Circle", (Field(name="radius", type=STRING),)),
            Variant.unit("Dot"),
        ),
    ),
)


def build_api():
    return ApiDeclaration(
        info=ApiInfo(title="Shapes", version="0.1.0"),
        paths=(
            PathDeclaration(
                segments=("shapes",),
                operations={
                    HttpMethod.POST: OperationDeclaration(
                        body=RequestBodyDeclaration(schema=SHAPE),
                        responses={201: ResponseDeclaration("Created")},
                    )
                },
            ),
        ),
    )
"""


def _write_config(tmp_path: Path) -> Path:
    (tmp_path / "shapes_api.py").write_text(_DECLARATION_SOURCE, encoding="utf-8")
    config_path = tmp_path / "typed-openapi.yaml"
    config_path.write_text(
        yaml.safe_dump({"declaration": {"target": "shapes_api.py:build_api"}}),
        encoding="utf-8",
    )
    return config_path


def test_render_command_writes_document(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_config(tmp_path)

    result = runner.invoke(cli, ["render", "--config", str(config_path)])

    output_path = (tmp_path / "openapi.yaml").resolve()
    assert result.exit_code == 0
    assert str(output_path) in result.output
    document = yaml.safe_load(output_path.read_text(encoding="utf-8"))
    branches = document["components"]["schemas"]["Shape"]["oneOf"]
    assert [branch["properties"]["kind"]["enum"] for branch in branches] == [["Circle"], ["Dot"]]
    assert document["paths"]["/shapes"]["post"]["responses"]["201"] == {"description": "Created"}


def test_render_command_dry_run_writes_nothing(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_config(tmp_path)

    result = runner.invoke(cli, ["render", "--config", str(config_path), "--dry-run"])

    assert result.exit_code == 0
    assert "dry run: 1 paths and 1 schemas validated" in result.output
    assert not (tmp_path / "openapi.yaml").exists()


def test_render_command_honors_output_override(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    override = tmp_path / "out" / "spec.yaml"

    exit_code = main(["render", "--config", str(config_path), "--output", str(override)])

    assert exit_code == 0
    assert override.exists()


def test_render_command_verbose_logs_assembly(tmp_path: Path, caplog) -> None:
    runner = CliRunner()
    config_path = _write_config(tmp_path)

    result = runner.invoke(cli, ["render", "--config", str(config_path), "--verbose"])

    assert result.exit_code == 0
    assert "registered schema Shape" in caplog.text


def test_generate_config_command_writes_placeholder_file_with_default_name(tmp_path: Path) -> None:
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=str(tmp_path)):
        result = runner.invoke(cli, ["generate-config"])
        output_path = Path("typed-openapi.yaml").resolve()

        assert result.exit_code == 0
        assert output_path.exists()
        content = output_path.read_text(encoding="utf-8")
        assert "declaration:" in content
        assert "<REQUIRED>" in content
        assert str(output_path) in result.output


def test_generate_config_command_fails_when_output_file_already_exists(tmp_path: Path) -> None:
    runner = CliRunner()
    output_path = tmp_path / "typed-openapi.yaml"
    output_path.write_text("already-there", encoding="utf-8")

    result = runner.invoke(cli, ["generate-config", "--output", str(output_path)])

    assert result.exit_code != 0
    assert "already exists" in str(result.exception).lower()
    assert output_path.read_text(encoding="utf-8") == "already-there"
