from __future__ import annotations

import logging
from typing import Optional

import requests

from repertoire_sheets.config import GOOGLE_SHEETS_EXPORT_URL, configured_timeout
from repertoire_sheets.errors import SheetFetchError
from repertoire_sheets.loader import decode_payload

logger = logging.getLogger(__name__)


def export_url(spreadsheet_id: str, gid: str) -> str:
    return GOOGLE_SHEETS_EXPORT_URL.format(spreadsheet_id=spreadsheet_id.strip(), gid=str(gid).strip())


class GoogleSheetsClient:
    """
    Fetch the CSV export of one tab of a published Google Sheet.

    Instances are callables taking a gid, so they can be handed straight to
    pipeline.load_csv_sheets() as its fetch function.
    """

    def __init__(
        self,
        spreadsheet_id: str,
        *,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.spreadsheet_id = spreadsheet_id
        self.session = session or requests.Session()
        self.timeout = configured_timeout() if timeout is None else timeout

    def fetch_csv(self, gid: str) -> str:
        url = export_url(self.spreadsheet_id, gid)
        logger.debug("GET %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as exc:
            raise SheetFetchError(str(gid), str(exc)) from exc

        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise SheetFetchError(str(gid), f"HTTP {response.status_code}") from exc
        return decode_payload(response.content)

    def __call__(self, gid: str) -> str:
        return self.fetch_csv(gid)
