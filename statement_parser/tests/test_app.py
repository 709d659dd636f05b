"""
CLI tests.
"""
import json

import pytest
from typer.testing import CliRunner

from statement_parser.app import app

runner = CliRunner()

STATEMENT_TEXT = (
    "HDFC Bank\n"
    "Account No: 1234567890 IFSC: HDFC0001234\n"
    "15-03-24 ATM-CASH WITHDRAWAL 2,000.00 48,000.00\n"
    "16-03-24 SALARY CREDIT 50,000.00\n"
)


@pytest.fixture
def statement_txt(tmp_path):
    path = tmp_path / "statement.txt"
    path.write_text(STATEMENT_TEXT, encoding="utf-8")
    return path


class TestTextCommand:

    def test_json_output(self, statement_txt, tmp_path):
        out = tmp_path / "result.json"

        result = runner.invoke(app, ["text", str(statement_txt), "--out", str(out)])

        assert result.exit_code == 0
        data = json.loads(out.read_text())
        assert data["header"]["Account"] == "1234567890"
        assert len(data["rows"]) == 2
        assert data["rows"][1]["credit"] == "50,000.00"

    def test_csv_output(self, statement_txt, tmp_path):
        out = tmp_path / "result.csv"

        result = runner.invoke(app, ["text", str(statement_txt), "-f", "csv", "-o", str(out)])

        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8").startswith("Source PDF,statement.txt")

    def test_csv_requires_out(self, statement_txt):
        result = runner.invoke(app, ["text", str(statement_txt), "--format", "csv"])
        assert result.exit_code == 1

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["text", str(tmp_path / "missing.txt")])
        assert result.exit_code == 1

    def test_bad_config(self, statement_txt, tmp_path):
        config = tmp_path / "bad.yaml"
        config.write_text("unknown_key: 1\n")

        result = runner.invoke(app, ["text", str(statement_txt), "--config", str(config)])

        assert result.exit_code == 1


class TestOptionFlags:

    WRAPPED_TEXT = (
        "01-02-2024 UPI/P2A/ABC 500.00 9,500.00\n"
        "PAYMENT TO XYZ\n"
        "02-02-2024 ATM WITHDRAWAL 100.00 9,400.00\n"
    )

    @pytest.fixture
    def merging_config(self, tmp_path):
        config = tmp_path / "settings.yaml"
        config.write_text("options:\n  mergeMultilineParticulars: true\n")
        return config

    def first_description(self, tmp_path, *args):
        source = tmp_path / "wrapped.txt"
        source.write_text(self.WRAPPED_TEXT, encoding="utf-8")
        out = tmp_path / "result.json"

        result = runner.invoke(app, ["text", str(source), "--out", str(out), *args])

        assert result.exit_code == 0
        return json.loads(out.read_text())["rows"][0]["description"]

    def test_settings_file_option_applies(self, tmp_path, merging_config):
        description = self.first_description(tmp_path, "--config", str(merging_config))
        assert description == "UPI/P2A/ABC PAYMENT TO XYZ"

    def test_flag_turns_option_off(self, tmp_path, merging_config):
        description = self.first_description(
            tmp_path, "--config", str(merging_config), "--no-merge-particulars")
        assert description == "UPI/P2A/ABC"

    def test_flag_turns_option_on(self, tmp_path):
        description = self.first_description(tmp_path, "--merge-particulars")
        assert description == "UPI/P2A/ABC PAYMENT TO XYZ"


class TestParseCommand:

    def test_missing_pdf(self, tmp_path):
        result = runner.invoke(app, ["parse", str(tmp_path / "missing.pdf")])
        assert result.exit_code == 1

    def test_not_a_pdf(self, tmp_path):
        bogus = tmp_path / "statement.pdf"
        bogus.write_text("plain text pretending to be a PDF")

        result = runner.invoke(app, ["parse", str(bogus)])

        assert result.exit_code == 1


class TestValidateCommand:

    def test_valid_result(self, statement_txt, tmp_path):
        out = tmp_path / "result.json"
        runner.invoke(app, ["text", str(statement_txt), "--out", str(out)])

        result = runner.invoke(app, ["validate", str(out)])

        assert result.exit_code == 0
        assert "Transactions: 2" in result.output

    def test_invalid_result(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text(json.dumps({"rows": [{"date": "01-01-24", "description": "ATM"}]}))

        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
