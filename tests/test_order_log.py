"""
Unit tests for order logging.

Tests row building in OrderLogService and the Google Sheets client with a
mocked discovery service.
"""

from datetime import datetime, timedelta, timezone

import pytest
from unittest.mock import MagicMock, patch

from core.exceptions import ConfigurationError, OrderLogError
from core.sheets_client import DEFAULT_LOG_RANGE, SHEETS_SCOPES, GoogleSheetsOrderLog
from models.customization import Customization
from services.order_log_service import OrderLogService, format_timestamp
from fakes import RecordingOrderLog


class TestFormatTimestamp:
    """Test the log timestamp format."""

    def test_milliseconds_and_z_suffix(self):
        moment = datetime(2025, 1, 2, 3, 4, 5, 678901, tzinfo=timezone.utc)
        assert format_timestamp(moment) == "2025-01-02T03:04:05.678Z"

    def test_converted_to_utc(self):
        moment = datetime(2025, 1, 2, 5, 0, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(moment) == "2025-01-02T03:00:00.000Z"


class TestOrderLogService:
    """Test row construction and appending."""

    def test_log_customization_row(self, order_log, order_log_service):
        customization = Customization.from_payload({
            "pen": "P1",
            "trinkets": [{"id": "T1", "name": "Star"}, {"id": "T2", "name": "Moon"}],
        })

        row = order_log_service.log_customization(customization)

        assert row == ["2025-03-14T15:09:26.535Z", "P1", "Star, Moon"]
        assert order_log.rows == [row]

    def test_unnamed_trinkets_logged_by_id(self, order_log, order_log_service):
        customization = Customization.from_payload({"pen": "P1", "trinkets": ["T1", {"id": "T2"}]})

        row = order_log_service.log_customization(customization)

        assert row[2] == "T1, T2"

    def test_empty_trinkets_logged_as_empty_cell(self, order_log_service):
        row = order_log_service.log_customization(
            Customization.from_payload({"pen": "P1", "trinkets": []})
        )
        assert row[1:] == ["P1", ""]

    def test_cells_written_verbatim(self, order_log, order_log_service):
        customization = Customization.from_payload({
            "pen": "<P1>",
            "trinkets": [
                {"id": "T1", "name": "<Heart>"},
                {"id": "T2", "name": " Moon "},
                {"id": "T3", "name": "Salt & Pepper"},
            ],
        })

        row = order_log_service.log_customization(customization)

        assert row[1:] == ["<P1>", "<Heart>,  Moon , Salt & Pepper"]
        assert order_log.rows == [row]

    def test_numeric_pen_written_as_text(self, order_log_service):
        row = order_log_service.log_order(7, ["T1"])
        assert row[1:] == ["7", "T1"]

    def test_log_order_accepts_unvalidated_payload(self, order_log, order_log_service):
        row = order_log_service.log_order("P9", [{"name": "Star"}, {"id": "T7"}, "T8"])

        assert row[1:] == ["P9", "Star, T7, T8"]
        assert len(order_log.rows) == 1

    def test_log_order_without_trinkets_fails_on_iteration(self, order_log, order_log_service):
        with pytest.raises(TypeError):
            order_log_service.log_order("P1", None)

        assert order_log.rows == []

    def test_append_failure_propagates(self):
        service = OrderLogService(RecordingOrderLog(fail=True))

        with pytest.raises(OrderLogError):
            service.log_order("P1", [])


class TestGoogleSheetsOrderLog:
    """Test the Sheets API wrapper."""

    def _service(self):
        service = MagicMock()
        append = service.spreadsheets.return_value.values.return_value.append
        append.return_value.execute.return_value = {
            "updates": {"updatedRange": "InventoryLog!A5:C5"}
        }
        return service, append

    def test_append_row_request(self):
        service, append = self._service()
        order_log = GoogleSheetsOrderLog(service, "sheet-123")

        response = order_log.append_row(["2025-01-01T00:00:00.000Z", "P1", "Star"])

        append.assert_called_once_with(
            spreadsheetId="sheet-123",
            range=DEFAULT_LOG_RANGE,
            valueInputOption="RAW",
            body={"values": [["2025-01-01T00:00:00.000Z", "P1", "Star"]]},
        )
        assert response["updates"]["updatedRange"] == "InventoryLog!A5:C5"

    def test_api_error_wrapped(self):
        service, append = self._service()
        append.return_value.execute.side_effect = RuntimeError("quota exceeded")
        order_log = GoogleSheetsOrderLog(service, "sheet-123")

        with pytest.raises(OrderLogError) as exc_info:
            order_log.append_row(["a", "b", "c"])

        assert "quota exceeded" in exc_info.value.message
        assert isinstance(exc_info.value.cause, RuntimeError)

    @patch("core.sheets_client.build")
    @patch("core.sheets_client.service_account.Credentials.from_service_account_info")
    def test_from_config(self, mock_from_info, mock_build):
        order_log = GoogleSheetsOrderLog.from_config({
            "SHEET_ID": "sheet-123",
            "SERVICE_EMAIL": "logger@pen-shop.iam.gserviceaccount.com",
            "SERVICE_KEY": "line1\\nline2",
            "SHEET_LOG_RANGE": "Orders!A1",
        })

        info = mock_from_info.call_args[0][0]
        assert info["client_email"] == "logger@pen-shop.iam.gserviceaccount.com"
        assert info["private_key"] == "line1\nline2"
        assert mock_from_info.call_args[1]["scopes"] == SHEETS_SCOPES

        mock_build.assert_called_once_with(
            "sheets", "v4", credentials=mock_from_info.return_value, cache_discovery=False
        )
        assert order_log.spreadsheet_id == "sheet-123"
        assert order_log.log_range == "Orders!A1"

    def test_from_config_missing_settings(self):
        with pytest.raises(ConfigurationError) as exc_info:
            GoogleSheetsOrderLog.from_config({"SHEET_ID": "sheet-123"})

        assert exc_info.value.missing == ["SERVICE_EMAIL", "SERVICE_KEY"]
