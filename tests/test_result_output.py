"""
Tests for result table output.
"""

import json

import pytest

from reconciliation.steps.c_response_parsing import ResultRow
from reconciliation.steps.d_orchestration import ResultTable
from reconciliation.steps.e_result_output import (
    format_table,
    infer_format,
    render_csv,
    render_grid_table,
    render_markdown,
    save_table,
)


@pytest.fixture
def match_table():
    return ResultTable(
        columns=("entity", "match"),
        rows=(ResultRow("BP Europe", "BP"), ResultRow("Shell, plc", None)),
    )


class TestGridTable:
    def test_layout(self):
        expected = "\n".join(
            [
                "+--------+-------+",
                "| entity | match |",
                "+========+=======+",
                "| BP     | BP    |",
                "+--------+-------+",
            ]
        )
        assert render_grid_table(["entity", "match"], [["BP", "BP"]]) == expected

    def test_multiline_cells(self):
        text = render_grid_table(["a", "b"], [["one\ntwo", "x"]])
        assert "| one | x |" in text
        assert "| two |   |" in text


class TestMarkdown:
    def test_wraps_to_width(self):
        table = ResultTable(
            columns=("entity", "consolidated"),
            rows=(
                ResultRow("Exxon Mobil Corporation of America Holdings", "ExxonMobil"),
                ResultRow("BP", "BP"),
            ),
        )
        markdown = render_markdown(table, max_width=30)

        assert all(len(line) <= 30 for line in markdown.split("\n"))
        words = " ".join(markdown.replace("|", " ").split())
        for word in ("Exxon", "Mobil", "Corporation", "America", "Holdings"):
            assert word in words

    def test_narrow_table_unchanged(self, match_table):
        markdown = render_markdown(match_table, max_width=80)
        assert markdown == render_grid_table(
            ["entity", "match"], [["BP Europe", "BP"], ["Shell, plc", ""]]
        )

    def test_single_words_cannot_be_wrapped(self, caplog):
        table = ResultTable(
            columns=("entity", "label"),
            rows=(ResultRow("Supercalifragilisticexpialidocious", "word"),),
        )
        with caplog.at_level("INFO"):
            markdown = render_markdown(table, max_width=20)

        assert "Supercalifragilisticexpialidocious" in markdown
        assert "No modifiable columns left" in caplog.text


class TestFlatFormats:
    def test_csv(self, match_table):
        assert format_table(match_table, "csv") == (
            'entity,match\nBP Europe,BP\n"Shell, plc",NA\n'
        )

    def test_csv_missing_marker(self, match_table):
        lines = render_csv(match_table, na_rep="").splitlines()
        assert lines[-1] == '"Shell, plc",'

    def test_jsonl(self, match_table):
        lines = format_table(match_table, "jsonl").splitlines()
        assert [json.loads(line) for line in lines] == [
            {"entity": "BP Europe", "match": "BP"},
            {"entity": "Shell, plc", "match": None},
        ]

    def test_unknown_format(self, match_table):
        with pytest.raises(ValueError):
            format_table(match_table, "xlsx")


class TestSaveTable:
    @pytest.mark.parametrize(
        "name, fmt",
        [("out.csv", "csv"), ("out.jsonl", "jsonl"), ("out.md", "markdown"), ("out.txt", "csv")],
    )
    def test_infer_format(self, tmp_path, name, fmt):
        assert infer_format(tmp_path / name) == fmt

    def test_creates_parent_directories(self, tmp_path, match_table):
        path = save_table(match_table, tmp_path / "results" / "matches.md")

        assert path.exists()
        assert path.read_text(encoding="utf-8").startswith("+----")

    def test_explicit_format_wins(self, tmp_path, match_table):
        path = save_table(match_table, tmp_path / "matches.txt", fmt="jsonl")
        assert json.loads(path.read_text(encoding="utf-8").splitlines()[0])["match"] == "BP"
