"""Tests for the screening CLI runner."""

import json

import pandas as pd
import pytest

from screening_src.config import Config
from screening_src.renderer import NO_RECOMMENDATIONS_MESSAGE
from screening_src.runner import EXIT_INVALID_INPUT, EXIT_OK, load_profile_rows, main


class TestSingleProfile:
    """Test evaluating one profile from CLI arguments."""

    def test_text_output(self, capsys):
        code = main([
            "--age", "67", "--sex", "male", "--smoking-status", "current",
            "--cigarettes-per-day", "20", "--years-smoked", "30",
        ])
        out = capsys.readouterr().out
        assert code == EXIT_OK
        assert out.startswith("Recommended screenings:")
        assert "Abdominal Aortic Aneurysm (Grade B)" in out
        assert "Lung Cancer (Grade B)" in out

    def test_no_recommendations(self, capsys):
        code = main(["--age", "10", "--sex", "male"])
        assert code == EXIT_OK
        assert capsys.readouterr().out.strip() == NO_RECOMMENDATIONS_MESSAGE

    def test_json_output(self, capsys):
        code = main([
            "--age", "42", "--sex", "female",
            "--condition", "family-history-crc", "--json",
        ])
        payload = json.loads(capsys.readouterr().out)
        assert code == EXIT_OK
        assert payload["count"] == len(payload["recommendations"])
        names = [rec["name"] for rec in payload["recommendations"]]
        assert "Colorectal Cancer (family history)" in names
        assert "Colorectal Cancer" not in names

    def test_pregnant_flag(self, capsys):
        main(["--age", "30", "--sex", "female", "--pregnant", "--json"])
        payload = json.loads(capsys.readouterr().out)
        names = [rec["name"] for rec in payload["recommendations"]]
        assert "Syphilis" in names
        assert "Cervical Cancer" not in names

    def test_missing_sex(self, capsys):
        code = main(["--age", "30"])
        assert code == EXIT_INVALID_INPUT
        assert "Sex is required" in capsys.readouterr().err

    def test_negative_age(self, capsys):
        code = main(["--age=-5", "--sex", "male"])
        assert code == EXIT_INVALID_INPUT
        assert "negative" in capsys.readouterr().err

    def test_list_rules(self, capsys):
        code = main(["--list-rules"])
        out = capsys.readouterr().out
        assert code == EXIT_OK
        assert "1. Abdominal Aortic Aneurysm [aaa]" in out
        assert "17. Tobacco Use [tobacco_use]" in out


class TestBatch:
    """Test evaluating profiles from a CSV file."""

    @pytest.fixture
    def profiles_csv(self, tmp_path):
        df = pd.DataFrame([
            {"age": "10", "sex": "male", "pregnant": "", "smoking_status": "",
             "cigarettes_per_day": "", "years_smoked": "", "years_since_quit": "",
             "conditions": ""},
            {"age": "60", "sex": "male", "pregnant": "no", "smoking_status": "former",
             "cigarettes_per_day": "20", "years_smoked": "20", "years_since_quit": "10",
             "conditions": "tb-risk;hiv-risk"},
        ])
        path = tmp_path / "profiles.csv"
        df.to_csv(path, index=False)
        return path

    def test_load_rows(self, profiles_csv):
        rows = load_profile_rows(profiles_csv)
        assert len(rows) == 2
        assert rows[0]["conditions"] == []
        assert rows[0]["cigarettes_per_day"] == ""
        assert rows[1]["conditions"] == ["tb-risk", "hiv-risk"]

    def test_json_batch(self, profiles_csv, capsys):
        code = main(["--csv", str(profiles_csv), "--json"])
        payload = json.loads(capsys.readouterr().out)
        assert code == EXIT_OK
        assert payload["results"]["0"] == []
        names = [rec["name"] for rec in payload["results"]["1"]]
        assert "Lung Cancer" in names
        assert "Latent Tuberculosis Infection" in names
        assert "Hepatitis B" in names

    def test_text_batch(self, profiles_csv, capsys):
        code = main(["--csv", str(profiles_csv)])
        out = capsys.readouterr().out
        assert code == EXIT_OK
        assert "PROFILE 0" in out
        assert NO_RECOMMENDATIONS_MESSAGE in out
        assert "PROFILE 1" in out

    def test_invalid_row_reported(self, tmp_path, capsys):
        path = tmp_path / "bad.csv"
        pd.DataFrame([
            {"age": "30", "sex": "female"},
            {"age": "30", "sex": "unknown"},
        ]).to_csv(path, index=False)

        code = main(["--csv", str(path), "--json"])
        captured = capsys.readouterr()
        payload = json.loads(captured.out)
        assert code == EXIT_INVALID_INPUT
        assert list(payload["results"].keys()) == ["0"]
        assert "row 1" in captured.err

    def test_empty_file(self, tmp_path, capsys):
        path = tmp_path / "empty.csv"
        path.write_text("")

        code = main(["--csv", str(path)])
        assert code == EXIT_INVALID_INPUT
        assert "Error:" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        code = main(["--csv", str(tmp_path / "absent.csv")])
        assert code == EXIT_INVALID_INPUT
        assert "Error:" in capsys.readouterr().err


class TestOutputFormat:
    """Test the configured default output format."""

    @pytest.fixture
    def json_by_default(self, monkeypatch):
        monkeypatch.setattr(Config, "OUTPUT_FORMAT", "json")

    def test_configured_json_default(self, json_by_default, capsys):
        main(["--age", "30", "--sex", "male"])
        payload = json.loads(capsys.readouterr().out)
        assert "recommendations" in payload

    def test_no_json_prints_text(self, json_by_default, capsys):
        code = main(["--age", "10", "--sex", "male", "--no-json"])
        assert code == EXIT_OK
        assert capsys.readouterr().out.strip() == NO_RECOMMENDATIONS_MESSAGE
