"""Tests for the schedule CLI."""

import httpx
import pytest
from openpyxl import load_workbook

from amortization import cli


class TestLocalMode:
    def test_straight_line(self, capsys):
        code = cli.main(["--price", "1200", "--rate", "0", "--term", "12"])
        out = capsys.readouterr().out
        assert code == 0
        assert "$100.00" in out
        assert "Periods:             12" in out

    def test_limit_rows(self, capsys):
        cli.main(["--price", "250000", "--down", "50000", "--rate", "6", "--term", "360", "--limit", "5"])
        out = capsys.readouterr().out
        assert "$1,199.10" in out
        assert "... 355 more rows" in out

    def test_sorted_desc(self, capsys):
        cli.main(["--price", "1200", "--rate", "0", "--term", "12", "--sort", "period", "--desc"])
        out = capsys.readouterr().out
        table = out.split("Schedule")[1]
        assert table.index("  12 ") < table.index("  1 ")

    def test_writes_xlsx(self, tmp_path, capsys):
        target = tmp_path / "schedule.xlsx"
        code = cli.main([
            "--price", "1200", "--rate", "0", "--term", "12",
            "--start-date", "2026-01-01", "--xlsx", str(target),
        ])
        assert code == 0
        ws = load_workbook(target).active
        assert ws["A1"].value == "Month (Date)"
        assert ws.max_row == 13

    def test_engine_error(self, capsys):
        code = cli.main(["--price", "100000", "--rate", "12", "--payment", "500"])
        assert code == cli.EXIT_ERROR
        assert "too low to cover interest" in capsys.readouterr().err

    def test_limits_can_be_skipped(self, capsys):
        code = cli.main(["--price", "1300", "--rate", "0", "--term", "1300", "--no-limits", "--limit", "1"])
        assert code == 0
        assert "Periods:             1300" in capsys.readouterr().out

    def test_term_and_payment_exclusive(self):
        with pytest.raises(SystemExit):
            cli.main(["--price", "1000", "--rate", "5", "--term", "12", "--payment", "100"])


class TestRemoteMode:
    ARGS = ["--price", "1200", "--rate", "0", "--term", "12", "--api-url", "http://api.test"]

    def test_connect_error(self, monkeypatch, capsys):
        def boom(*args, **kwargs):
            raise httpx.ConnectError("refused")

        monkeypatch.setattr(cli.httpx, "post", boom)
        assert cli.main(self.ARGS) == cli.EXIT_ERROR
        assert "Could not connect" in capsys.readouterr().err

    def test_api_error(self, monkeypatch, capsys):
        monkeypatch.setattr(
            cli.httpx, "post",
            lambda *a, **kw: httpx.Response(400, json={"detail": "Payment or term must be provided."}),
        )
        assert cli.main(self.ARGS) == cli.EXIT_ERROR
        assert "must be provided" in capsys.readouterr().err

    def test_prints_response(self, monkeypatch, capsys):
        captured = {}
        row = {
            "period": 1, "label": "1", "due_date": None,
            "beginning_balance": "1200.00", "payment": "1200.00", "interest": "0.00",
            "total_interest_paid": "0.00", "principal": "1200.00", "ending_balance": "0.00",
        }

        def fake_post(url, json, params, timeout):
            captured.update(url=url, json=json, params=params)
            return httpx.Response(200, json={
                "term_type": "Month", "periods_per_year": 12, "periodic_payment": "1200.00",
                "number_of_periods": 1, "total_interest": "0.00", "total_principal": "1200.00",
                "total_paid": "1200.00", "rows": [row],
            })

        monkeypatch.setattr(cli.httpx, "post", fake_post)
        assert cli.main(self.ARGS) == 0
        assert captured["url"] == "http://api.test/api/v1/schedule"
        assert captured["json"]["purchasePrice"] == 1200.0
        assert captured["json"]["term"] == 12
        assert "paymentFrequency" not in captured["json"]
        assert "$1,200.00" in capsys.readouterr().out
