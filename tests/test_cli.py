"""Tests for the creatorpay command line."""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

import pytest

from creatorpay.cli import (
    EXIT_OK,
    EXIT_REJECTED,
    EXIT_STORAGE,
    build_parser,
    format_creators_table,
    format_json,
    main,
)
from creatorpay.config import get_settings
from creatorpay.domain.errors import PersistenceError
from creatorpay.domain.models import CreatorRecord
from creatorpay.store.repository import SqliteRepository

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Run each command from an empty directory with fresh settings."""
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def db(tmp_path: Path) -> str:
    return str(tmp_path / "state.db")


def _run_json(capsys: pytest.CaptureFixture[str], argv: list[str]):
    code = main([*argv, "--format", "json"])
    out = capsys.readouterr().out
    return code, json.loads(out)


def _add_creator(capsys, db: str, *extra: str) -> dict:
    code, payload = _run_json(
        capsys,
        ["creators", "add", "--name", "Jane", "--views", "100000", *extra, "--db", db],
    )
    assert code == EXIT_OK
    return payload


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class TestBuildParser:
    def test_estimate_defaults(self) -> None:
        args = build_parser().parse_args(["estimate"])
        assert args.command == "estimate"
        assert args.output_format == "table"
        assert args.views == ""
        assert args.campaign is None
        assert args.rev_share is None
        assert args.breakdown is False

    def test_creators_update_takes_id(self) -> None:
        args = build_parser().parse_args(["creators", "update", "abc", "--name", "X"])
        assert args.action == "update"
        assert args.record_id == "abc"

    def test_invalid_campaign_rejected(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["estimate", "--campaign", "banner"])

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


class TestFormatters:
    def test_empty_creators_table(self) -> None:
        assert format_creators_table([]) == "No creators saved."

    def test_creators_table_row(self) -> None:
        record = CreatorRecord(id="rec-1", name="Jane", metrics={"views": "100000"})
        table = format_creators_table([record])
        assert "rec-1" in table
        assert "Jane" in table
        assert "$1,759" in table
        assert "15%" in table

    def test_format_json_keeps_unicode(self) -> None:
        assert format_json({"text": "👀"}) == '{\n  "text": "👀"\n}'


# ---------------------------------------------------------------------------
# estimate
# ---------------------------------------------------------------------------


class TestEstimateCommand:
    def test_table_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["estimate", "--views", "100000"]) == EXIT_OK
        out = capsys.readouterr().out
        assert "Payout per video" in out
        assert "$1,759" in out
        assert "$17.59" in out
        assert "You are likely underpaid" in out

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        code, payload = _run_json(
            capsys, ["estimate", "--views", "100000", "--campaign", "mention"]
        )
        assert code == EXIT_OK
        assert payload["campaign_type"] == "mention"
        assert Decimal(payload["funnel"]["payout"]) == Decimal("168.9135")
        assert payload["funnel"]["profile_clicks"] is None
        assert payload["share_text"].startswith("I should be making ~$169 per post")
        assert "breakdown" not in payload

    def test_json_breakdown(self, capsys: pytest.CaptureFixture[str]) -> None:
        _, payload = _run_json(capsys, ["estimate", "--views", "100000", "--breakdown"])
        labels = [row["label"] for row in payload["breakdown"]]
        assert labels[0] == "People who interacted"
        assert labels[-1] == "Your fair share (15%)"

    def test_revenue_share_clamped(self, capsys: pytest.CaptureFixture[str]) -> None:
        _, payload = _run_json(capsys, ["estimate", "--views", "100000", "--rev-share", "99"])
        assert Decimal(payload["revenue_share_percent"]) == Decimal("30")
        assert payload["tier"] == "growth_mode"

    def test_garbage_metrics_do_not_fail(self, capsys: pytest.CaptureFixture[str]) -> None:
        code, payload = _run_json(capsys, ["estimate", "--views", "abc", "--likes", "-5"])
        assert code == EXIT_OK
        assert Decimal(payload["funnel"]["payout"]) == 0
        assert payload["funnel"]["cpm"] is None

    def test_extreme_exponent_metrics_do_not_fail(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code, payload = _run_json(
            capsys, ["estimate", "--views", "1e9999999", "--proposed-cpm", "1e-1000026"]
        )
        assert code == EXIT_OK
        assert Decimal(payload["funnel"]["payout"]) == 0
        assert payload["reverse"] is None

    def test_reverse_and_offer_check(self, capsys: pytest.CaptureFixture[str]) -> None:
        main([
            "estimate", "--views", "100000",
            "--proposed-cpm", "20", "--current-offer", "2000",
        ])
        out = capsys.readouterr().out
        assert "Implied payout" in out
        assert "$2,000" in out
        assert "You are fairly paid" in out

    def test_estimate_does_not_touch_database(self, db: str) -> None:
        assert main(["estimate", "--views", "10", "--db", db]) == EXIT_OK
        assert not Path(db).exists()

    def test_breakdown_table(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["estimate", "--views", "100000", "--breakdown"])
        out = capsys.readouterr().out
        assert "Based on your content driving app installs" in out
        assert "Expected paying customers: 146" in out


# ---------------------------------------------------------------------------
# creators
# ---------------------------------------------------------------------------


class TestCreatorsCommand:
    def test_add_then_list(self, capsys: pytest.CaptureFixture[str], db: str) -> None:
        created = _add_creator(capsys, db, "--package", "pack3")
        assert created["name"] == "Jane"
        assert created["payment_package"] == "pack3"

        code, listed = _run_json(capsys, ["creators", "list", "--db", db])
        assert code == EXIT_OK
        assert [r["id"] for r in listed] == [created["id"]]

    def test_add_table_output(self, capsys: pytest.CaptureFixture[str], db: str) -> None:
        assert main(["creators", "add", "--name", "Jane", "--db", db]) == EXIT_OK
        assert capsys.readouterr().out.startswith("Saved Jane (")

    def test_blank_name_rejected(self, capsys: pytest.CaptureFixture[str], db: str) -> None:
        code = main(["creators", "add", "--name", "  ", "--db", db])
        captured = capsys.readouterr()
        assert code == EXIT_REJECTED
        assert "name must not be empty" in captured.err

        main(["creators", "list", "--db", db])
        assert "No creators saved." in capsys.readouterr().out

    def test_update_replaces_record(self, capsys: pytest.CaptureFixture[str], db: str) -> None:
        created = _add_creator(capsys, db, "--email", "jane@example.com")

        code, updated = _run_json(
            capsys,
            ["creators", "update", created["id"], "--name", "Janet", "--views", "5000",
             "--db", db],
        )

        assert code == EXIT_OK
        assert updated["id"] == created["id"]
        assert updated["name"] == "Janet"
        assert updated["email"] is None

    def test_update_unknown_id(self, capsys: pytest.CaptureFixture[str], db: str) -> None:
        code = main(["creators", "update", "nope", "--name", "X", "--db", db])
        assert code == EXIT_REJECTED
        assert "nope" in capsys.readouterr().err

    def test_delete(self, capsys: pytest.CaptureFixture[str], db: str) -> None:
        created = _add_creator(capsys, db)
        assert main(["creators", "delete", created["id"], "--db", db]) == EXIT_OK
        capsys.readouterr()

        _, listed = _run_json(capsys, ["creators", "list", "--db", db])
        assert listed == []

    def test_delete_missing_is_ok(self, db: str) -> None:
        assert main(["creators", "delete", "missing", "--db", db]) == EXIT_OK

    def test_show(self, capsys: pytest.CaptureFixture[str], db: str) -> None:
        created = _add_creator(capsys, db, "--tiktok", "https://www.tiktok.com/@jane")

        assert main(["creators", "show", created["id"], "--db", db]) == EXIT_OK
        out = capsys.readouterr().out
        assert out.startswith(f"Jane ({created['id']})")
        assert "TikTok: https://www.tiktok.com/@jane" in out
        assert "$1,759" in out

    def test_show_json(self, capsys: pytest.CaptureFixture[str], db: str) -> None:
        created = _add_creator(capsys, db)
        _, payload = _run_json(capsys, ["creators", "show", created["id"], "--db", db])
        assert payload["record"]["id"] == created["id"]
        assert Decimal(payload["estimate"]["funnel"]["payout"]) == Decimal("1759.11345")

    def test_show_unknown(self, capsys: pytest.CaptureFixture[str], db: str) -> None:
        assert main(["creators", "show", "missing", "--db", db]) == EXIT_REJECTED
        assert "no creator with id 'missing'" in capsys.readouterr().err

    def test_storage_failure_exit_code(
        self,
        capsys: pytest.CaptureFixture[str],
        db: str,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        def fail(self, items):
            raise PersistenceError(self.key, "disk I/O error")

        monkeypatch.setattr(SqliteRepository, "save_all", fail)

        code = main(["creators", "add", "--name", "Jane", "--db", db])

        assert code == EXIT_STORAGE
        assert "Failed to persist 'creators'" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# offer
# ---------------------------------------------------------------------------


class TestOfferCommand:
    def test_offer_for_saved_creator(self, capsys: pytest.CaptureFixture[str], db: str) -> None:
        created = _add_creator(capsys, db, "--package", "pack3")

        assert main(["offer", created["id"], "--db", db]) == EXIT_OK
        out = capsys.readouterr().out
        assert out.startswith("Hi Jane,")
        assert "100,000 views" in out
        assert "Package: 3-video pack (3 x $1,759)" in out
        assert "Total: $5,277" in out

    def test_offer_json(self, capsys: pytest.CaptureFixture[str], db: str) -> None:
        created = _add_creator(capsys, db)
        _, payload = _run_json(capsys, ["offer", created["id"], "--db", db])
        assert payload["record_id"] == created["id"]
        assert "$1,759 per video" in payload["offer"]

    def test_offer_unknown_id(self, capsys: pytest.CaptureFixture[str], db: str) -> None:
        assert main(["offer", "missing", "--db", db]) == EXIT_REJECTED


# ---------------------------------------------------------------------------
# leads
# ---------------------------------------------------------------------------


class TestLeadsCommand:
    def test_capture_and_list(self, capsys: pytest.CaptureFixture[str], db: str) -> None:
        assert main(["leads", "add", "fan@example.com", "--views", "100000", "--db", db]) == 0
        assert capsys.readouterr().out.strip() == "Captured fan@example.com at $1,759"

        _, leads = _run_json(capsys, ["leads", "list", "--db", db])
        assert len(leads) == 1
        assert leads[0]["email"] == "fan@example.com"
        assert leads[0]["payout"] == 1759
        assert isinstance(leads[0]["timestamp"], int)

    def test_empty_list(self, capsys: pytest.CaptureFixture[str], db: str) -> None:
        main(["leads", "list", "--db", db])
        assert capsys.readouterr().out.strip() == "No leads captured."

    def test_blank_email_rejected(self, capsys: pytest.CaptureFixture[str], db: str) -> None:
        assert main(["leads", "add", " ", "--db", db]) == EXIT_REJECTED
        assert "email must not be empty" in capsys.readouterr().err
