"""
Tests for the command line entry point.
"""

import json
from pathlib import Path

import pytest

from reconciliation import pipeline
from reconciliation.strategies.operations import (
    CategorizationOperation,
    ConsolidationOperation,
    FuzzyMatchingOperation,
)
from tests.helpers import (
    ScriptedCompletionStrategy,
    current_items,
    function_responder,
    mapping_responder,
    reply,
)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Empty working directory without a .env file or run settings."""
    monkeypatch.chdir(tmp_path)
    for name in ("RECONCILIATION_MODEL", "RECONCILIATION_SEED", "RECONCILIATION_RETRIES"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture
def use_stub(monkeypatch):
    """Route strategy creation to a scripted stub and record the requested model."""
    requested = {}

    def install(stub):
        def factory(model, **kwargs):
            requested["model"] = model
            requested.update(kwargs)
            return stub

        monkeypatch.setattr(
            "reconciliation.steps.d_orchestration.create_completion_strategy", factory
        )
        return requested

    return install


def write_lines(path: Path, lines):
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


class TestConsolidateCommand:
    def test_csv_to_stdout(self, workdir, use_stub, capsys):
        items = write_lines(workdir / "companies.txt", ["ExxonMobil", "", "Exxon Mobil"])
        stub = ScriptedCompletionStrategy(
            responder=function_responder(ConsolidationOperation(), lambda item: "ExxonMobil")
        )
        requested = use_stub(stub)

        code = pipeline.main(["consolidate", str(items), "--seed", "5"])

        assert code == 0
        assert capsys.readouterr().out == (
            "entity,consolidated\nExxonMobil,ExxonMobil\nExxon Mobil,ExxonMobil\n"
        )
        assert requested["model"] == "gpt-4o"
        assert requested["seed"] == 5

    def test_clean_names(self, workdir, use_stub):
        items = write_lines(workdir / "companies.txt", ["Müller Ltd.", "The Coca-Cola Company"])
        stub = ScriptedCompletionStrategy(
            responder=function_responder(ConsolidationOperation(), lambda item: item)
        )
        use_stub(stub)

        assert pipeline.main(["consolidate", str(items), "--clean-names"]) == 0
        assert "MULLER\nCOCACOLA" in stub.user_prompts[0]

    def test_clean_names_drops_empty_results(self, workdir, use_stub, caplog):
        items = write_lines(workdir / "companies.txt", ["(n/a)", "BP plc"])
        stub = ScriptedCompletionStrategy(
            responder=function_responder(ConsolidationOperation(), lambda item: item)
        )
        use_stub(stub)

        assert pipeline.main(["consolidate", str(items), "--clean-names"]) == 0
        assert current_items(stub.user_prompts[0], ConsolidationOperation()) == ["BP"]
        assert "Dropping '(n/a)'" in caplog.text

    def test_unsupported_model_prefix(self, workdir, capsys):
        items = write_lines(workdir / "companies.txt", ["BP"])

        code = pipeline.main(["consolidate", str(items), "--model", "azure/gpt-4o"])

        assert code == 1
        assert "❌ Unsupported model format: azure/gpt-4o" in capsys.readouterr().err

    def test_failure_reports_chunk_and_response(self, workdir, use_stub, capsys):
        items = write_lines(workdir / "companies.txt", ["BP"])
        use_stub(ScriptedCompletionStrategy([reply([("BP", "BP")], finish_reason="length")]))

        code = pipeline.main(["consolidate", str(items)])

        assert code == 1
        err = capsys.readouterr().err
        assert "(chunk 1)" in err
        assert '"finish_reason": "length"' in err

    def test_missing_input_file(self, workdir, capsys):
        assert pipeline.main(["consolidate", str(workdir / "missing.txt")]) == 1
        assert "missing.txt" in capsys.readouterr().err


class TestCategorizeCommand:
    def test_examples_and_description(self, workdir, use_stub):
        items = write_lines(workdir / "shapes.txt", ["purple", "cube"])
        examples = workdir / "examples.csv"
        examples.write_text("entity,label\nblue,color\ntriangle,shape\n", encoding="utf-8")
        stub = ScriptedCompletionStrategy(
            responder=mapping_responder(
                CategorizationOperation("x"), {"purple": "color", "cube": "shape"}
            )
        )
        use_stub(stub)
        output = workdir / "labels.jsonl"

        code = pipeline.main(
            [
                "categorize",
                str(items),
                "--description",
                "Categorize the entities as color or shape.",
                "--examples",
                str(examples),
                "--output",
                str(output),
            ]
        )

        assert code == 0
        system_prompt, user_prompt = stub.calls[0]
        assert "color or shape" in system_prompt
        assert '["triangle", "shape"]' in user_prompt
        records = [json.loads(line) for line in output.read_text(encoding="utf-8").splitlines()]
        assert records == [
            {"entity": "purple", "label": "color"},
            {"entity": "cube", "label": "shape"},
        ]

    def test_description_required(self, workdir, capsys):
        items = write_lines(workdir / "shapes.txt", ["cube"])
        assert pipeline.main(["categorize", str(items)]) == 1
        assert "--description" in capsys.readouterr().err


class TestMatchCommand:
    def test_markdown_output(self, workdir, use_stub):
        dataset = workdir / "dataset.csv"
        dataset.write_text("id,name\n1,entity a\n2,\"entity b, inc\"\n", encoding="utf-8")
        reference = write_lines(workdir / "interest.txt", ["entity b", "entity d"])
        stub = ScriptedCompletionStrategy(
            responder=mapping_responder(
                FuzzyMatchingOperation(["x"]), {"entity a": "", "entity b, inc": "entity b"}
            )
        )
        requested = use_stub(stub)
        output = workdir / "matches.md"

        code = pipeline.main(
            [
                "match",
                str(dataset),
                str(reference),
                "--column",
                "name",
                "--model",
                "openrouter/openai/gpt-4o",
                "--output",
                str(output),
            ]
        )

        assert code == 0
        assert requested["model"] == "openrouter/openai/gpt-4o"
        assert "entity b\nentity d" in stub.user_prompts[0]
        markdown = output.read_text(encoding="utf-8")
        assert "| entity b, inc | entity b |" in markdown
        assert "| entity a      |          |" in markdown


class TestLoaders:
    def test_csv_first_column_by_default(self, tmp_path):
        path = tmp_path / "items.csv"
        path.write_text("name,country\nBP,UK\nShell,NL\n", encoding="utf-8")
        assert pipeline.load_entities(path) == ["BP", "Shell"]

    def test_unknown_column(self, tmp_path):
        path = tmp_path / "items.csv"
        path.write_text("name\nBP\n", encoding="utf-8")
        with pytest.raises(ValueError, match="country"):
            pipeline.load_entities(path, "country")

    def test_examples_need_two_columns(self, tmp_path):
        path = tmp_path / "examples.csv"
        path.write_text("entity,label\nblue\n", encoding="utf-8")
        with pytest.raises(ValueError, match="examples.csv:2"):
            pipeline.load_examples(path)
