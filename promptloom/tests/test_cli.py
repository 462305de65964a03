"""Tests for the promptloom command-line interface."""

import pytest

from promptloom import __main__ as cli
from promptloom.core.config import config_loader
from promptloom.core.enrichment import CodeEntity, EntityType
from promptloom.core.enrichment.constants import PROJECT_CONSTRAINTS
from promptloom.core.knowledge import KnowledgeGraph


# ── Fixtures ──────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda level="INFO": None)
    monkeypatch.delenv("PROMPTLOOM_KNOWLEDGE_INDEX", raising=False)


@pytest.fixture
def workspace(tmp_path):
    """Project with one legacy page, a knowledge index and an empty config."""
    src = tmp_path / "src"
    (src / "pages").mkdir(parents=True)
    page = src / "pages" / "ButtonBar.jsx"
    page.write_text("class ButtonBar extends React.Component {}\n", encoding="utf-8")

    graph = KnowledgeGraph()
    graph.add_entity(CodeEntity(
        id="button",
        name="Button",
        type=EntityType.COMPONENT,
        file_path=str(src / "components" / "Button.tsx"),
        description="Design-system button",
        props={"label": "string", "onClick": "function"},
    ))
    index = tmp_path / "kg.json"
    graph.save(index)

    config = tmp_path / "promptloom.yaml"
    config.write_text("log_level: INFO\n", encoding="utf-8")
    return {"page": page, "index": index, "config": config}


def _run(capsys, *argv):
    code = cli.main(list(argv))
    return code, capsys.readouterr().out


# ── Tests ─────────────────────────────────────────────────────────────────


class TestMigrateCommand:

    def test_migrate_component(self, workspace, capsys):
        code, out = _run(
            capsys,
            "--config", str(workspace["config"]),
            "--index", str(workspace["index"]),
            "migrate", str(workspace["page"]),
            "--component", "--pattern", "state", "--pattern", "nope",
        )

        assert code == 0
        assert out.startswith(cli.DEFAULT_MIGRATE_PROMPT)
        assert "class ButtonBar extends React.Component {}" in out
        assert "- Button: ../components/Button.tsx" in out
        assert "  Description: Design-system button" in out
        assert "- state: Prefer useState" in out
        assert "nope" not in out
        assert out.endswith(PROJECT_CONSTRAINTS)

    def test_missing_index_file_fails(self, workspace, tmp_path, capsys):
        code, out = _run(
            capsys,
            "--config", str(workspace["config"]),
            "--index", str(tmp_path / "absent.json"),
            "migrate", str(workspace["page"]),
        )
        assert code == 1
        assert out == ""

    def test_missing_source_fails(self, workspace, tmp_path, capsys):
        code, _ = _run(
            capsys,
            "--config", str(workspace["config"]),
            "migrate", str(tmp_path / "Nope.jsx"),
        )
        assert code == 1

    def test_non_utf8_source_fails(self, workspace, tmp_path, capsys):
        legacy = tmp_path / "Legacy.jsx"
        legacy.write_bytes(b"var x = '\xff';\n")

        code, out = _run(
            capsys,
            "--config", str(workspace["config"]),
            "migrate", str(legacy),
        )
        assert code == 1
        assert out == ""


class TestRefactorCommand:

    def test_refactor_lists_issues_and_solutions(self, workspace, capsys):
        code, out = _run(
            capsys,
            "--config", str(workspace["config"]),
            "refactor", str(workspace["page"]),
            "--issue", "Found Class Component usage",
            "--issue", "Odd spacing",
        )

        assert code == 0
        assert "- Found Class Component usage" in out
        assert "- Odd spacing" in out
        assert "- Convert to a Functional Component with hooks" in out

    def test_issue_is_required(self, workspace):
        with pytest.raises(SystemExit):
            cli.main(["refactor", str(workspace["page"])])


class TestTestCommand:

    def test_known_component(self, workspace, capsys):
        code, out = _run(
            capsys,
            "--config", str(workspace["config"]),
            "--index", str(workspace["index"]),
            "test", "src/components/Button.tsx",
        )

        assert code == 0
        assert "- label: string" in out
        assert "- onClick: function" in out
        assert "5. Accessibility (aria-labels, keyboard navigation)" in out

    def test_unknown_component_prints_base_prompt(self, workspace, capsys):
        code, out = _run(
            capsys,
            "--config", str(workspace["config"]),
            "--index", str(workspace["index"]),
            "test", "Modal.tsx", "--prompt", "Write tests",
        )

        assert code == 0
        assert out == "Write tests\n"


class TestSettingsResolution:

    def test_default_config_dir_used_without_flag(self, workspace, tmp_path, monkeypatch, capsys):
        config_dir = tmp_path / "conf"
        config_dir.mkdir()
        (config_dir / "promptloom.yaml").write_text(
            f"knowledge_index: {workspace['index']}\n", encoding="utf-8"
        )
        monkeypatch.setenv("PROMPTLOOM_CONFIG_DIR", str(config_dir))
        config_loader.get_settings.cache_clear()

        try:
            code, out = _run(capsys, "test", "Button.tsx")
        finally:
            config_loader.get_settings.cache_clear()

        assert code == 0
        assert "- label: string" in out

    def test_logging_configured_before_settings_load(self, workspace, monkeypatch, capsys):
        calls = []
        monkeypatch.setattr(cli, "setup_logging", lambda level="INFO": calls.append(("logging", level)))
        real_load = cli.load_settings
        monkeypatch.setattr(
            cli, "load_settings", lambda path=None: calls.append(("settings", path)) or real_load(path)
        )

        code, _ = _run(
            capsys,
            "--config", str(workspace["config"]),
            "--index", str(workspace["index"]),
            "test", "Button.tsx",
        )

        assert code == 0
        assert calls == [("logging", "INFO"), ("settings", str(workspace["config"]))]
