"""End-to-end tests for the click commands against a temporary data dir."""

import json
import logging

import pytest
from click.testing import CliRunner

from supply_orders.infrastructure.cli.main import cli
from supply_orders.infrastructure.persistence.json_draft_repository import DRAFT_KEY
from supply_orders.infrastructure.persistence.json_order_repository import ORDERS_KEY


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("SUPPLY_ORDERS_DATA_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    package_logger = logging.getLogger("supply_orders")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def runner():
    return CliRunner()


def _stored_orders(data_dir):
    return json.loads((data_dir / f"{ORDERS_KEY}.json").read_text(encoding="utf-8"))


class TestSubmitCommand:

    def test_submit_persists_order(self, runner, data_dir):
        result = runner.invoke(
            cli,
            [
                "order", "submit",
                "--branch", "2번 지점",
                "--date", "2025-06-01",
                "--item", "야채:무:3",
                "--item", "other:종이컵:2박스",
                "--note", "오전 배송",
            ],
        )
        assert result.exit_code == 0, result.output
        assert "submitted" in result.output

        (stored,) = _stored_orders(data_dir)
        assert stored["branch"] == "2번 지점"
        assert stored["date"] == "2025-06-01"
        assert [(i["product"], i["quantity"], i["unit"]) for i in stored["items"]] == [
            ("무", "3", "박스"),
            ("종이컵", "2박스", ""),
        ]

    def test_rejected_submit_reports_row(self, runner, data_dir):
        result = runner.invoke(
            cli,
            ["order", "submit", "--branch", "1번 지점", "--item", "야채:무:3", "--item", "소스::1"],
        )
        assert result.exit_code == 1
        assert "품명이 선택되지 않은 품목이 있습니다." in result.output
        assert "(row 2)" in result.output
        assert not (data_dir / f"{ORDERS_KEY}.json").exists()

    def test_empty_order_rejected(self, runner, data_dir):
        result = runner.invoke(cli, ["order", "submit", "--branch", "1번 지점"])
        assert result.exit_code == 1
        assert "주문목록에 품목을 추가해주세요." in result.output

    def test_bad_item_format(self, runner, data_dir):
        result = runner.invoke(cli, ["order", "submit", "--branch", "1번 지점", "--item", "무3"])
        assert result.exit_code == 2
        assert "Category:Product:Quantity" in result.output


class TestWizard:

    def test_abandon_saves_draft_then_resume_and_submit(self, runner, data_dir):
        # branch, date, add a row, then quit and confirm leaving
        answers = "1번 지점\n2025-06-01\nadd\n야채\n오이\n\nquit\ny\n"
        result = runner.invoke(cli, ["order", "new"], input=answers)
        assert result.exit_code == 0, result.output
        assert "Draft saved." in result.output

        saved = json.loads((data_dir / f"{DRAFT_KEY}.json").read_text(encoding="utf-8"))
        assert saved["branch"] == "1번 지점"
        assert saved["items"][0]["product"] == "오이"

        # resume, keep branch/date, submit -> asked for the missing quantity
        answers = "y\n\n\nsubmit\n5\nsubmit\ny\n"
        result = runner.invoke(cli, ["order", "new"], input=answers)
        assert result.exit_code == 0, result.output
        assert "수량 입력이 누락 되었습니다" in result.output
        assert "주문이 정상적으로 접수되었습니다." in result.output

        (stored,) = _stored_orders(data_dir)
        assert stored["items"][0]["quantity"] == "5"
        assert not (data_dir / f"{DRAFT_KEY}.json").exists()

    def test_submit_after_removing_flagged_row(self, runner, data_dir):
        # the quantity check flags row 1, the row is removed, then submit again
        answers = (
            "1번 지점\n2025-06-01\n"
            "add\n야채\n무\n\n"
            "submit\n\n"
            "remove\n1\n"
            "submit\n"
            "quit\ny\n"
        )
        result = runner.invoke(cli, ["order", "new"], input=answers)
        assert result.exit_code == 0, result.output
        assert "주문목록에 품목을 추가해주세요." in result.output
        assert "Draft saved." in result.output

        saved = json.loads((data_dir / f"{DRAFT_KEY}.json").read_text(encoding="utf-8"))
        assert saved["branch"] == "1번 지점"
        assert saved["items"] == []


class TestDraftAndHistoryCommands:

    def test_draft_show_and_discard(self, runner, data_dir):
        assert "No saved draft." in runner.invoke(cli, ["draft", "show"]).output
        (data_dir / f"{DRAFT_KEY}.json").write_text(
            json.dumps({"branch": "3번 지점", "date": "2025-06-01", "items": [], "note": ""}),
            encoding="utf-8",
        )
        assert "3번 지점" in runner.invoke(cli, ["draft", "show"]).output
        assert "discarded" in runner.invoke(cli, ["draft", "discard"]).output
        assert not (data_dir / f"{DRAFT_KEY}.json").exists()

    def test_history_groups_and_flags_supplementary(self, runner, data_dir):
        for item in ("야채:무:1", "야채:무:2"):
            runner.invoke(cli, ["order", "submit", "--branch", "10번 지점", "--item", item])
        runner.invoke(cli, ["order", "submit", "--branch", "2번 지점", "--item", "양념:간마늘:1"])

        result = runner.invoke(cli, ["history"])
        assert result.exit_code == 0, result.output
        out = result.output
        assert out.index("2번 지점") < out.index("10번 지점")
        assert out.count("(추가발주)") == 1
        assert "무 2 박스" in out

    def test_history_empty(self, runner, data_dir):
        result = runner.invoke(cli, ["history", "--branch", "1번 지점"])
        assert "No orders found." in result.output

    def test_catalog(self, runner, data_dir):
        result = runner.invoke(cli, ["catalog"])
        assert result.exit_code == 0
        assert "잡화(기타)" in result.output
        assert "14번 지점" in result.output
