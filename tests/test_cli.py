import json

import pytest
from click.testing import CliRunner

from apiregistry.cli.main import cli
from apiregistry.registry import ApiRegistry, ChangeBus, JsonFileStore


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "apis.json"


def _run(store_path, *args, **kwargs):
    return CliRunner().invoke(
        cli,
        ["--store", str(store_path), *args],
        catch_exceptions=False,
        **kwargs,
    )


def _registry(store_path) -> ApiRegistry:
    return ApiRegistry(JsonFileStore(store_path), ChangeBus())


def test_add_list_update_remove(store_path):
    result = _run(
        store_path,
        "apis",
        "add",
        "OpenAI Prod",
        "--credential",
        "sk-abcdefghijk",
        "--provider",
        "openai",
    )
    assert result.exit_code == 0
    assert "sk-*******hijk" in result.output
    assert "sk-abcdefghijk" not in result.output

    (entry,) = _registry(store_path).load_all()
    assert entry.provider == "openai"

    result = _run(store_path, "apis", "list")
    assert "OpenAI Prod" in result.output
    assert "sk-abcdefghijk" not in result.output

    result = _run(store_path, "apis", "update", entry.id, "--disable")
    assert result.exit_code == 0
    assert _registry(store_path).get(entry.id).is_active is False

    result = _run(store_path, "apis", "remove", entry.id, "--yes")
    assert result.exit_code == 0
    assert _registry(store_path).load_all() == []


def test_add_prompts_for_hidden_credential(store_path):
    result = _run(store_path, "apis", "add", "Gemini", input="AIza-key\n")
    assert result.exit_code == 0
    assert _registry(store_path).load_all()[0].credential == "AIza-key"


def test_add_blank_name_fails(store_path):
    result = _run(store_path, "apis", "add", "  ", "--credential", "sk")
    assert result.exit_code == 1
    assert "name must not be empty" in result.output
    assert not store_path.exists()


def test_update_unknown_id_fails(store_path):
    result = _run(store_path, "apis", "update", "ghost", "--name", "x")
    assert result.exit_code == 1
    assert "not found" in result.output


def test_list_reports_unreadable_store(store_path):
    store_path.write_text("{broken", encoding="utf-8")
    result = _run(store_path, "apis", "list")
    assert result.exit_code == 1


def test_list_empty(store_path):
    result = _run(store_path, "apis", "list")
    assert result.exit_code == 0
    assert "No API integrations configured." in result.output


def test_models_list():
    result = CliRunner().invoke(cli, ["models", "list"])
    assert result.exit_code == 0
    assert "gpt-4o-mini" in result.output


def test_models_test_without_key_fails(store_path):
    store_path.write_text(json.dumps({}), encoding="utf-8")
    result = _run(store_path, "models", "test", "openai", "gpt-4o-mini")
    assert result.exit_code == 1
    assert "OpenAI API key is not configured" in result.output


def test_remove_reports_unreadable_store(store_path):
    store_path.write_text("{broken", encoding="utf-8")
    result = _run(store_path, "apis", "remove", "x", "--yes")
    assert result.exit_code == 1
    assert "Error:" in result.output
