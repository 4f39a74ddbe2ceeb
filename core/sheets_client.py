"""
Google Sheets order log client.

Appends finalized orders as rows to a spreadsheet range. The log is
write-only from this service's point of view: nothing is ever read back.

Usage:
    order_log = GoogleSheetsOrderLog.from_config(app.config)
    order_log.append_row(["2025-01-01T12:00:00.000Z", "P1", "Star, Moon"])
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from google.oauth2 import service_account
from googleapiclient.discovery import build

from .credentials import require_settings, service_account_info
from .exceptions import OrderLogError
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
DEFAULT_LOG_RANGE = "InventoryLog!A1"


class GoogleSheetsOrderLog:
    """
    Row appender for the inventory log spreadsheet.

    Attributes:
        spreadsheet_id: Target spreadsheet
        log_range: A1 range rows are appended after
    """

    def __init__(
        self,
        service,
        spreadsheet_id: str,
        log_range: str = DEFAULT_LOG_RANGE
    ):
        """
        Initialize the order log.

        Args:
            service: Sheets v4 resource from googleapiclient.discovery.build
            spreadsheet_id: ID of the target spreadsheet
            log_range: Range to append to (default "InventoryLog!A1")
        """
        self._service = service
        self.spreadsheet_id = spreadsheet_id
        self.log_range = log_range

    @classmethod
    def from_config(cls, config: Mapping) -> "GoogleSheetsOrderLog":
        """
        Build the client from SHEET_ID / SERVICE_EMAIL / SERVICE_KEY.

        Raises:
            ConfigurationError: If any of those settings is missing
        """
        settings = require_settings(config, "SHEET_ID", "SERVICE_EMAIL", "SERVICE_KEY")

        creds = service_account.Credentials.from_service_account_info(
            service_account_info(settings["SERVICE_EMAIL"], settings["SERVICE_KEY"]),
            scopes=SHEETS_SCOPES,
        )
        service = build("sheets", "v4", credentials=creds, cache_discovery=False)

        log_range = config.get("SHEET_LOG_RANGE") or DEFAULT_LOG_RANGE
        logger.info(f"Sheets order log targeting {log_range}")
        return cls(service, settings["SHEET_ID"], log_range)

    def append_row(self, values: List[Any]) -> Optional[dict]:
        """
        Append one row of cell values.

        Values are written RAW (no formula or date parsing by Sheets).

        Args:
            values: Ordered cell values

        Returns:
            The API's append response

        Raises:
            OrderLogError: If the API call fails for any reason
        """
        try:
            response = self._service.spreadsheets().values().append(
                spreadsheetId=self.spreadsheet_id,
                range=self.log_range,
                valueInputOption="RAW",
                body={"values": [list(values)]},
            ).execute()
        except Exception as e:
            raise OrderLogError(f"Failed to append order log row: {e}", e) from e

        updated = (response or {}).get("updates", {}).get("updatedRange")
        logger.debug(f"Appended order log row at {updated}")
        return response
