"""Tests for the command-line entrypoint."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from souqrank.config import SortOrder, settings
from souqrank.engine.ranking import RankingInput, calculate_listing_rank
from souqrank.main import main, parse_args, result_to_dict, score_file


class TestParseArgs:
    def test_search_defaults(self) -> None:
        args = parse_args(["search"])
        assert args.command == "search"
        assert args.sort == SortOrder.NEWEST.value
        assert args.condition == []
        assert args.limit == settings.SEARCH_RESULT_LIMIT
        assert args.min_price == settings.SEARCH_DEFAULT_MIN_PRICE

    def test_search_filters(self) -> None:
        args = parse_args(
            [
                "search",
                "--query", "iphone",
                "--condition", "new",
                "--condition", "good",
                "--sort", "price-low",
                "--max-price", "2500",
            ]
        )
        assert args.query == "iphone"
        assert args.condition == ["new", "good"]
        assert args.sort == "price-low"
        assert args.max_price == 2500.0

    def test_unknown_sort_rejected(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["search", "--sort", "cheapest"])

    def test_score_requires_file(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["score"])


def _write_listing(tmp_path: Path, **fields) -> Path:
    payload = {
        "seller_trust_score": 80,
        "seller_verified": True,
        "title": "iPhone 12 128GB clean",
        "price": 1000,
        "median_price": 1000,
        "published_at": "2026-03-01T10:00:00Z",
    }
    payload.update(fields)
    path = tmp_path / "listing.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_score_file_matches_engine(tmp_path: Path) -> None:
    path = _write_listing(tmp_path)
    result = score_file(path)

    assert result.badges.verified_seller is True
    assert result.badges.fair_price is True
    assert result.components.trust == pytest.approx(0.9)


def test_score_file_rejects_missing_price(tmp_path: Path) -> None:
    path = _write_listing(tmp_path)
    payload = json.loads(path.read_text(encoding="utf-8"))
    del payload["price"]
    path.write_text(json.dumps(payload), encoding="utf-8")

    with pytest.raises(ValueError):
        score_file(path)


def test_score_command_prints_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = _write_listing(tmp_path)

    assert main(["score", "--file", str(path)]) == 0

    printed = json.loads(capsys.readouterr().out)
    assert set(printed) == {"score", "badges", "components"}
    assert printed["badges"]["fair_price"] is True
    assert set(printed["components"]) == {
        "trust", "quality", "recency", "price_fair", "engagement", "featured_bonus",
    }


def test_score_command_reports_invalid_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "listing.json"
    path.write_text("{\"price\": \"cheap\"", encoding="utf-8")

    assert main(["score", "--file", str(path)]) == 1
    assert capsys.readouterr().out == ""


def test_score_command_reports_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["score", "--file", str(tmp_path / "absent.json")]) == 1
    assert capsys.readouterr().out == ""


def test_result_to_dict(now) -> None:
    result = calculate_listing_rank(RankingInput(price=500, featured=True), now=now)
    as_dict = result_to_dict(result)

    assert as_dict["score"] == result.score
    assert as_dict["components"]["featured_bonus"] == 0.15
    assert as_dict["badges"] == {"verified_seller": False, "fair_price": False, "hot_deal": False}
    assert result_to_dict(None) is None
