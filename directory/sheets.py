"""Read-only client for the Google Sheets contact directory.

Sheets hold one contact per row: name, rank, e-mail, WhatsApp number and
college. The first row is a header.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional
from urllib.parse import quote

import requests
from django.conf import settings as django_settings

from core.utils import normalize_college_name

logger = logging.getLogger(__name__)

SHEETS_VALUES_URL = "https://sheets.googleapis.com/v4/spreadsheets/{sheet_id}/values/{range}"


class DirectoryError(Exception):
    """Raised when the spreadsheet cannot be read."""
    pass


@dataclass(frozen=True)
class DirectoryContact:
    name: str
    rank: str
    email: str
    whatsapp_number: str
    college: str

    def as_dict(self) -> Dict[str, str]:
        return {
            "name": self.name,
            "rank": self.rank,
            "email": self.email,
            "whatsapp_number": self.whatsapp_number,
            "college": self.college,
        }


def parse_rows(rows: Iterable[Iterable]) -> List[DirectoryContact]:
    """Turn raw sheet rows into contacts, skipping the header and short rows."""
    contacts: List[DirectoryContact] = []
    for index, row in enumerate(rows):
        if index == 0:
            continue
        cells = [str(cell).strip() for cell in (row or [])]
        if len([c for c in cells[:5] if c]) < 5:
            continue
        name, rank, email, number, college = cells[:5]
        contacts.append(
            DirectoryContact(
                name=name,
                rank=rank,
                email=email.lower(),
                whatsapp_number=number,
                college=college,
            )
        )
    return contacts


def fetch_sheet_values(sheet_id: str, cell_range: str, settings=django_settings) -> List[List[str]]:
    api_key = getattr(settings, "GOOGLE_SHEETS_API_KEY", "")
    if not api_key:
        raise DirectoryError("GOOGLE_SHEETS_API_KEY not configured")
    if not sheet_id:
        raise DirectoryError("Spreadsheet id not configured")
    timeout = getattr(settings, "DIRECTORY_HTTP_TIMEOUT", 15)

    url = SHEETS_VALUES_URL.format(sheet_id=sheet_id, range=quote(cell_range, safe="!:"))
    try:
        resp = requests.get(url, params={"key": api_key}, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except requests.RequestException as exc:
        logger.error("Google Sheets request failed for %s: %s", cell_range, exc)
        raise DirectoryError(f"Google Sheets request failed: {exc}") from exc
    except ValueError as exc:
        logger.error("Invalid Google Sheets response: %s", exc)
        raise DirectoryError(f"Invalid Google Sheets response: {exc}") from exc

    values = data.get("values") or []
    logger.info("Fetched %s rows from sheet range %s", len(values), cell_range)
    return values


def fetch_ano_contacts(settings=django_settings) -> List[DirectoryContact]:
    rows = fetch_sheet_values(
        getattr(settings, "GOOGLE_SHEETS_ID", ""),
        getattr(settings, "GOOGLE_SHEETS_RANGE", "Sheet1!A:E"),
        settings=settings,
    )
    return parse_rows(rows)


def fetch_cadet_contacts(settings=django_settings) -> List[DirectoryContact]:
    """Cadet contacts; uses the ANO sheet when no cadet sheet is configured."""
    sheet_id = getattr(settings, "CADET_GOOGLE_SHEETS_ID", "")
    if not sheet_id:
        logger.warning("CADET_GOOGLE_SHEETS_ID not configured; using the ANO sheet")
        return fetch_ano_contacts(settings=settings)
    rows = fetch_sheet_values(
        sheet_id,
        getattr(settings, "CADET_GOOGLE_SHEETS_RANGE", "Sheet1!A:E"),
        settings=settings,
    )
    return parse_rows(rows)


def fetch_cadet_roster(settings=django_settings) -> List[DirectoryContact]:
    """Cadets an ANO can nominate, read from the roster range."""
    sheet_id = getattr(settings, "CADET_ROSTER_SHEET_ID", "") or getattr(
        settings, "GOOGLE_SHEETS_ID", ""
    )
    rows = fetch_sheet_values(
        sheet_id,
        getattr(settings, "CADET_ROSTER_RANGE", "Sheet2!A:E"),
        settings=settings,
    )
    return parse_rows(rows)


def contacts_for_colleges(contacts: Iterable[DirectoryContact], college_names: Iterable[str]) -> List[DirectoryContact]:
    """Contacts whose college exactly matches one of ``college_names``.

    Matching ignores case and surrounding whitespace.
    """
    wanted = {normalize_college_name(n) for n in college_names} - {""}
    matched = [c for c in contacts if normalize_college_name(c.college) in wanted]
    if wanted and not matched:
        logger.warning("No directory contacts matched colleges: %s", sorted(wanted))
    return matched


def roster_for_college(contacts: Iterable[DirectoryContact], college_name: str) -> List[DirectoryContact]:
    """Loose match used for the cadet roster: either name may contain the other."""
    target = normalize_college_name(college_name)
    if not target:
        return []
    matched = []
    for c in contacts:
        name = normalize_college_name(c.college)
        if name and (target in name or name in target):
            matched.append(c)
    return matched


def validate_sheets_config(settings=django_settings) -> List[str]:
    """Names of the missing Google Sheets settings (empty when usable)."""
    missing = []
    if not getattr(settings, "GOOGLE_SHEETS_API_KEY", ""):
        missing.append("GOOGLE_SHEETS_API_KEY")
    if not getattr(settings, "GOOGLE_SHEETS_ID", ""):
        missing.append("GOOGLE_SHEETS_ID")
    return missing


def test_connection(settings=django_settings) -> Dict[str, object]:
    """Check configuration, then try to read the ANO sheet."""
    missing = validate_sheets_config(settings=settings)
    if missing:
        return {
            "success": False,
            "message": "Missing configuration: " + ", ".join(missing),
            "contacts": [],
        }
    try:
        contacts = fetch_ano_contacts(settings=settings)
    except DirectoryError as exc:
        return {"success": False, "message": str(exc), "contacts": []}
    return {
        "success": True,
        "message": f"Successfully connected to Google Sheets. Found {len(contacts)} ANO contacts.",
        "contacts": contacts,
    }


test_connection.__test__ = False  # not a pytest test
