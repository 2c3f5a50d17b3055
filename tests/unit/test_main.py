import base64
import json
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest

from docfin.main import main


@pytest.fixture(autouse=True)
def _offline(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setenv("LLM_PROVIDER", "none")
    with patch("docfin.main.Log.configure"):
        yield


class TestMain:
    def test_prints_analysis_json(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "ledger.csv"
        path.write_text("Penjualan produk Rp 5,000,000 tanggal 15 Jan\n", encoding="utf-8")

        assert main([str(path)]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert payload["summary"]["totalIncome"] == 5000000
        assert payload["transactions"][0]["category"] == "Penjualan"

    def test_accepts_data_uri(self, capsys: pytest.CaptureFixture[str]) -> None:
        encoded = base64.b64encode(b"Biaya sewa kantor Rp 2,000,000\n").decode()

        assert main([f"data:text/csv;base64,{encoded}"]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert payload["summary"]["totalExpense"] == 2000000

    def test_summary_flag(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "ledger.csv"
        path.write_text("a,b\n", encoding="utf-8")

        assert main([str(path), "--summary"]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert set(payload) == {"summary", "keyPoints", "recommendations"}

    def test_unsupported_type_exits_with_2(self, tmp_path: Path) -> None:
        path = tmp_path / "archive.bin"
        path.write_bytes(b"PK\x03\x04")
        assert main([str(path), "--mime-type", "application/zip"]) == 2

    def test_missing_file_exits_with_1(self, tmp_path: Path) -> None:
        assert main([str(tmp_path / "missing.pdf")]) == 1
