"""Unit tests for the ALN runtime CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from _pytest.monkeypatch import MonkeyPatch
from typer.testing import CliRunner

from aln_runtime.cli.cli import app

_RUNNER = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_cwd(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    """Run every command from an empty directory so no aln.yaml is picked up."""
    monkeypatch.chdir(tmp_path)


def _write_json(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.mark.unit
def test_describe_prints_protocol_json() -> None:
    """`aln describe` prints version and supported intents as JSON."""
    # Act - describe
    result = _RUNNER.invoke(app, ["describe"])

    # Assert - JSON protocol description
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["shortName"] == "ALN"
    assert "aln::plan_repository" in payload["supportedIntents"]


@pytest.mark.unit
def test_manifest_echoes_context() -> None:
    """`aln manifest --context` embeds the host context."""
    # Act - manifest with a host context
    result = _RUNNER.invoke(app, ["manifest", "--context", '{"host": "ci"}'])

    # Assert - context echoed and four capabilities listed
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["hostContext"] == {"host": "ci"}
    assert len(payload["capabilities"]) == 4


@pytest.mark.unit
def test_plan_json_output() -> None:
    """`aln plan --json` emits the camelCase plan result."""
    # Act - plan with constraints and a model id override
    result = _RUNNER.invoke(
        app,
        [
            "plan",
            "Plan a repository with a GitHub workflow",
            "--constraints",
            '{"jurisdictions": ["EU"]}',
            "--model-id",
            "cli-model",
            "--json",
        ],
    )

    # Assert - plan parsed, compliance step present, model id applied
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert len(payload["planId"]) == 16
    assert payload["transparencyTrail"]["modelId"] == "cli-model"
    assert payload["transparencyTrail"]["intentType"] == "ci_workflow"
    assert "compliance-alignment" in [step["id"] for step in payload["steps"]]


@pytest.mark.unit
def test_plan_renders_tables() -> None:
    """Without --json the plan is rendered with Rich."""
    # Act - plan with table output
    result = _RUNNER.invoke(app, ["plan", "Draft a policy"])

    # Assert - step table and trail panel rendered
    assert result.exit_code == 0
    assert "Transparency Trail" in result.output
    assert "analyze-intent" in result.output


@pytest.mark.unit
def test_plan_renders_bracketed_text_literally() -> None:
    """Square brackets in user input are shown as text, not parsed as markup."""
    # Act - plan with bracketed intent type and language
    result = _RUNNER.invoke(
        app,
        [
            "plan",
            "hello",
            "--intent-type",
            "[/x]",
            "--constraints",
            '{"language": "[bold]Lang"}',
        ],
    )

    # Assert - rendered verbatim
    assert result.exit_code == 0
    assert "Intent type: [/x]" in result.output
    assert "Target implementation language is [bold]Lang." in result.output


@pytest.mark.unit
def test_plan_rejects_malformed_json_option() -> None:
    """Malformed JSON options are usage errors."""
    # Act - plan with broken constraints JSON
    result = _RUNNER.invoke(app, ["plan", "Plan a repo", "--constraints", "{nope"])

    # Assert - usage error exit code
    assert result.exit_code == 2


@pytest.mark.unit
def test_plan_rejects_blank_text() -> None:
    """Blank intent text is a usage error."""
    # Act - plan whitespace
    result = _RUNNER.invoke(app, ["plan", "   "])

    # Assert - usage error exit code
    assert result.exit_code == 2


@pytest.mark.unit
def test_validate_valid_envelope(tmp_path: Path) -> None:
    """A valid envelope exits 0."""
    # Arrange - valid heartbeat file
    path = _write_json(
        tmp_path / "hb.json",
        {"id": "hb-1", "kind": "aln::heartbeat", "timestamp": 1, "payload": {}},
    )

    # Act - validate
    result = _RUNNER.invoke(app, ["validate", str(path)])

    # Assert - success panel
    assert result.exit_code == 0
    assert "valid envelope" in result.output


@pytest.mark.unit
def test_validate_invalid_envelope_exits_one(tmp_path: Path) -> None:
    """An invalid envelope lists errors and exits 1."""
    # Arrange - envelope missing several fields
    path = _write_json(tmp_path / "bad.json", {"id": "", "kind": "aln::heartbeat"})

    # Act - validate
    result = _RUNNER.invoke(app, ["validate", str(path)])

    # Assert - failure panel and exit 1
    assert result.exit_code == 1
    assert "invalid envelope" in result.output


@pytest.mark.unit
def test_validate_lists_bracketed_intent_verbatim(tmp_path: Path) -> None:
    """Envelope values containing markup-like brackets appear verbatim in errors."""
    # Arrange - intent request with a bracketed unknown intent
    path = _write_json(
        tmp_path / "odd.json",
        {
            "id": "r-1",
            "kind": "aln::intent_request",
            "intent": "[/oops]",
            "timestamp": 1,
            "payload": {},
        },
    )

    # Act - validate
    result = _RUNNER.invoke(app, ["validate", str(path)])

    # Assert - error listed, exit 1
    assert result.exit_code == 1
    assert 'Unknown intent "[/oops]"' in result.output


@pytest.mark.unit
def test_validate_non_json_file_exits_two(tmp_path: Path) -> None:
    """Files that are not JSON exit 2."""
    # Arrange - truncated JSON file
    path = tmp_path / "broken.json"
    path.write_text("{", encoding="utf-8")

    # Act - validate
    result = _RUNNER.invoke(app, ["validate", str(path)])

    # Assert - exit 2
    assert result.exit_code == 2


@pytest.mark.unit
def test_heartbeat_command() -> None:
    """`aln heartbeat` prints a heartbeat envelope with the given payload."""
    # Act - heartbeat with payload
    result = _RUNNER.invoke(app, ["heartbeat", "hb-9", "--payload", '{"load": 0.5}'])

    # Assert - envelope JSON
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["id"] == "hb-9"
    assert payload["kind"] == "aln::heartbeat"
    assert payload["payload"] == {"load": 0.5}


@pytest.mark.unit
def test_invalid_config_exits_two(tmp_path: Path) -> None:
    """An invalid config file stops the command with exit code 2."""
    # Arrange - malformed YAML config
    config = tmp_path / "aln.yaml"
    config.write_text("kernel: [oops", encoding="utf-8")

    # Act - run any command with it
    result = _RUNNER.invoke(app, ["describe", "--config", str(config)])

    # Assert - exit 2 with the decode message
    assert result.exit_code == 2
    assert "Invalid config YAML" in result.output


@pytest.mark.unit
def test_catalog_add_and_list_sources(tmp_path: Path) -> None:
    """Sources added via the CLI are listed back with filters applied."""
    # Arrange - empty catalog directory
    catalog_dir = tmp_path / "catalog"

    # Act - add two sources then list by tag
    first = _RUNNER.invoke(
        app,
        [
            "catalog",
            "add-source",
            "https://example.org/api",
            "--kind",
            "url",
            "--tag",
            "api",
            "--tag",
            "public",
            "--catalog-dir",
            str(catalog_dir),
        ],
    )
    second = _RUNNER.invoke(
        app,
        ["catalog", "add-source", "file://notes.md", "--catalog-dir", str(catalog_dir)],
    )
    listed = _RUNNER.invoke(
        app,
        ["catalog", "sources", "--tag", "api", "--json", "--catalog-dir", str(catalog_dir)],
    )

    # Assert - both stored, filter returns only the tagged source
    assert first.exit_code == 0
    assert second.exit_code == 0
    stored = json.loads((catalog_dir / "sources.json").read_text(encoding="utf-8"))
    assert [entry["uri"] for entry in stored] == ["https://example.org/api", "file://notes.md"]
    assert listed.exit_code == 0
    entries = json.loads(listed.stdout)
    assert [entry["uri"] for entry in entries] == ["https://example.org/api"]
    assert entries[0]["tags"] == ["api", "public"]


@pytest.mark.unit
def test_catalog_virtual_objects_table(tmp_path: Path) -> None:
    """Listing an empty catalog renders an empty table."""
    # Act - list virtual objects in a fresh catalog
    result = _RUNNER.invoke(
        app, ["catalog", "virtual-objects", "--catalog-dir", str(tmp_path / "catalog")]
    )

    # Assert - table title rendered
    assert result.exit_code == 0
    assert "Virtual Objects" in result.output


@pytest.mark.unit
@pytest.mark.parametrize(
    ("filename", "args"),
    [
        ("sources.json", ["catalog", "sources"]),
        ("virtual-objects.json", ["catalog", "virtual-objects"]),
        ("sources.json", ["catalog", "add-source", "file://x"]),
    ],
    ids=["sources", "virtual-objects", "add-source"],
)
def test_corrupt_catalog_exits_two(tmp_path: Path, filename: str, args: list[str]) -> None:
    """A corrupt catalog file is reported on stderr with exit code 2."""
    # Arrange - catalog directory with one unreadable file
    catalog_dir = tmp_path / "catalog"
    catalog_dir.mkdir()
    (catalog_dir / filename).write_text("{not json", encoding="utf-8")

    # Act - run the catalog command
    result = _RUNNER.invoke(app, [*args, "--catalog-dir", str(catalog_dir)])

    # Assert - clean exit with the catalog message
    assert result.exit_code == 2
    assert "Catalog error" in result.output
    assert filename in result.output
