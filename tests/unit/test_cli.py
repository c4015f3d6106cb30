"""Unit tests for the command line interface (sentiment_analysis/__main__.py)."""

import pandas as pd
import pytest

from sentiment_analysis.__main__ import build_parser, main
from sentiment_analysis.features.dictionaries import read_dictionary_csv


@pytest.fixture
def documents_csv(tmp_path, good_bad_corpus):
    texts, response = good_bad_corpus
    path = tmp_path / "docs.csv"
    pd.DataFrame({"text": texts, "rating": response}).to_csv(path, index=False)
    return path


class TestParser:
    def test_subcommand_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_rule_choices(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["generate", "--input", "x.csv", "--response-column", "y", "--rule", "max"])

    def test_repeatable_dictionaries(self):
        args = build_parser().parse_args(
            ["score", "--input", "x.csv", "--dictionary", "HE", "--dictionary", "GENERAL"]
        )
        assert args.dictionary == ["HE", "GENERAL"]


class TestScoreCommand:
    def test_writes_score_table(self, documents_csv, tmp_path):
        output = tmp_path / "out" / "scores.csv"
        code = main([
            "--quiet", "score", "--input", str(documents_csv), "--text-column", "text",
            "--dictionary", "GENERAL", "--output", str(output),
        ])
        assert code == 0
        table = pd.read_csv(output)
        assert len(table) == 60
        assert {"text", "rating", "word_count", "GENERAL_net_sentiment"} <= set(table.columns)

    def test_dictionary_file(self, documents_csv, tmp_path):
        custom = tmp_path / "custom.csv"
        custom.write_text("term,weight\nreport,0.5\n", encoding="utf-8")
        output = tmp_path / "scores.json"
        code = main([
            "--quiet", "score", "--input", str(documents_csv), "--dictionary-file", str(custom),
            "--output", str(output),
        ])
        assert code == 0
        table = pd.read_json(output)
        assert "CUSTOM_weighted_sum" in table.columns

    def test_unknown_dictionary_exits_1(self, documents_csv, tmp_path):
        code = main([
            "--quiet", "score", "--input", str(documents_csv), "--dictionary", "NOPE",
            "--output", str(tmp_path / "x.csv"),
        ])
        assert code == 1

    def test_missing_column_exits_1(self, documents_csv, tmp_path):
        code = main([
            "--quiet", "score", "--input", str(documents_csv), "--text-column", "body",
            "--output", str(tmp_path / "x.csv"),
        ])
        assert code == 1

    def test_non_numeric_dictionary_weight_exits_1(self, documents_csv, tmp_path):
        custom = tmp_path / "custom.csv"
        custom.write_text("term,weight\nreport,high\n", encoding="utf-8")
        code = main([
            "--quiet", "score", "--input", str(documents_csv), "--dictionary-file", str(custom),
            "--output", str(tmp_path / "x.csv"),
        ])
        assert code == 1

    def test_missing_input_exits_1(self, tmp_path):
        code = main(["--quiet", "score", "--input", str(tmp_path / "nope.csv"), "--output", str(tmp_path / "x.csv")])
        assert code == 1


class TestGenerateCommand:
    def test_writes_dictionary(self, documents_csv, tmp_path, capsys):
        output = tmp_path / "GEN.csv"
        code = main([
            "--quiet", "generate", "--input", str(documents_csv), "--response-column", "rating",
            "--min-doc-freq", "1", "--cv-folds", "5", "--rule", "min", "--name", "GEN",
            "--output", str(output),
        ])
        assert code == 0
        dictionary = read_dictionary_csv(output)
        assert dictionary.lookup("good") > 0
        assert dictionary.lookup("bad") < 0
        assert "Generated GEN" in capsys.readouterr().out

    def test_too_few_documents_exits_1(self, tmp_path):
        path = tmp_path / "small.csv"
        pd.DataFrame({"text": ["good", "bad"], "rating": [1.0, -1.0]}).to_csv(path, index=False)
        code = main([
            "--quiet", "generate", "--input", str(path), "--response-column", "rating",
            "--output", str(tmp_path / "g.csv"),
        ])
        assert code == 1


class TestCompareCommand:
    def test_prints_and_writes_comparison(self, tmp_path, capsys):
        path = tmp_path / "scores.csv"
        pd.DataFrame({
            "word_count": [3, 3, 3, 3],
            "GENERAL_net_sentiment": [0.3, -0.3, 0.0, 0.6],
            "rating": [1.0, -1.0, 0.0, 2.0],
        }).to_csv(path, index=False)
        output = tmp_path / "comparison.csv"
        code = main([
            "--quiet", "compare", "--input", str(path), "--response-column", "rating",
            "--output", str(output),
        ])
        assert code == 0
        assert "GENERAL_net_sentiment" in capsys.readouterr().out
        result = pd.read_csv(output, index_col=0)
        assert result.loc["GENERAL_net_sentiment", "correlation"] == pytest.approx(1.0)
        assert result.loc["GENERAL_net_sentiment", "accuracy"] == 1.0


class TestListDictionaries:
    def test_lists_builtins(self, capsys):
        assert main(["list-dictionaries"]) == 0
        out = capsys.readouterr().out
        assert "HE" in out
        assert "GENERAL" in out
