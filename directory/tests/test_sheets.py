from unittest.mock import Mock, patch

import pytest
import requests

from directory.sheets import (
    DirectoryContact,
    DirectoryError,
    contacts_for_colleges,
    fetch_ano_contacts,
    fetch_cadet_contacts,
    fetch_cadet_roster,
    parse_rows,
    roster_for_college,
    test_connection as check_connection,
)

HEADER = ["Name", "Rank", "Email", "WhatsApp", "College"]


def sheet_response(values):
    resp = Mock()
    resp.raise_for_status.return_value = None
    resp.json.return_value = {"range": "Sheet1!A1:E3", "values": values}
    return resp


@pytest.fixture
def sheets_settings(settings):
    settings.GOOGLE_SHEETS_API_KEY = "api-key"
    settings.GOOGLE_SHEETS_ID = "ano-sheet"
    settings.GOOGLE_SHEETS_RANGE = "Sheet1!A:E"
    settings.CADET_GOOGLE_SHEETS_ID = ""
    settings.CADET_ROSTER_SHEET_ID = ""
    settings.CADET_ROSTER_RANGE = "Sheet2!A:E"
    return settings


def test_parse_rows_skips_header_and_incomplete_rows():
    rows = [
        HEADER,
        ["Asha Verma", "Captain", " Asha@College.EDU ", "+91 98765 43210", "Govt College"],
        ["Missing College", "Major", "m@x.com", "+911234567890"],
        ["", "Major", "blank@x.com", "+911234567890", "Arts College"],
        [],
    ]
    contacts = parse_rows(rows)
    assert contacts == [
        DirectoryContact(
            name="Asha Verma",
            rank="Captain",
            email="asha@college.edu",
            whatsapp_number="+91 98765 43210",
            college="Govt College",
        )
    ]


def test_contacts_for_colleges_is_exact_but_case_insensitive():
    contacts = [
        DirectoryContact("A", "Major", "a@x.com", "+91", "Govt College "),
        DirectoryContact("B", "Major", "b@x.com", "+91", "Govt College Ropar"),
        DirectoryContact("C", "Major", "c@x.com", "+91", "ARTS COLLEGE"),
    ]
    matched = contacts_for_colleges(contacts, ["govt college", "Arts College"])
    assert [c.name for c in matched] == ["A", "C"]
    assert contacts_for_colleges(contacts, []) == []


def test_roster_match_is_loose():
    contacts = [
        DirectoryContact("A", "CDT", "a@x.com", "+91", "Govt College Ropar"),
        DirectoryContact("B", "CDT", "b@x.com", "+91", "Ropar"),
        DirectoryContact("C", "CDT", "c@x.com", "+91", "Arts College"),
    ]
    assert [c.name for c in roster_for_college(contacts, "govt college")] == ["A"]
    assert [c.name for c in roster_for_college(contacts, "Govt College Ropar")] == ["A", "B"]
    assert roster_for_college(contacts, " ") == []


@patch("directory.sheets.requests.get")
def test_fetch_ano_contacts_calls_values_api(mock_get, sheets_settings):
    mock_get.return_value = sheet_response(
        [HEADER, ["Asha", "Captain", "asha@x.com", "+919876543210", "Govt College"]]
    )

    contacts = fetch_ano_contacts(settings=sheets_settings)

    assert [c.email for c in contacts] == ["asha@x.com"]
    url = mock_get.call_args.args[0]
    assert url == "https://sheets.googleapis.com/v4/spreadsheets/ano-sheet/values/Sheet1!A:E"
    assert mock_get.call_args.kwargs["params"] == {"key": "api-key"}
    assert mock_get.call_args.kwargs["timeout"] == sheets_settings.DIRECTORY_HTTP_TIMEOUT


@patch("directory.sheets.requests.get")
def test_cadet_contacts_fall_back_to_ano_sheet(mock_get, sheets_settings):
    mock_get.return_value = sheet_response([HEADER])
    fetch_cadet_contacts(settings=sheets_settings)
    assert "/ano-sheet/" in mock_get.call_args.args[0]

    sheets_settings.CADET_GOOGLE_SHEETS_ID = "cadet-sheet"
    fetch_cadet_contacts(settings=sheets_settings)
    assert "/cadet-sheet/" in mock_get.call_args.args[0]


@patch("directory.sheets.requests.get")
def test_roster_reads_second_range(mock_get, sheets_settings):
    mock_get.return_value = sheet_response([HEADER])
    fetch_cadet_roster(settings=sheets_settings)
    assert mock_get.call_args.args[0].endswith("/ano-sheet/values/Sheet2!A:E")


@patch("directory.sheets.requests.get")
def test_http_failure_raises_directory_error(mock_get, sheets_settings):
    mock_get.side_effect = requests.ConnectionError("boom")
    with pytest.raises(DirectoryError):
        fetch_ano_contacts(settings=sheets_settings)


def test_missing_key_raises(sheets_settings):
    sheets_settings.GOOGLE_SHEETS_API_KEY = ""
    with pytest.raises(DirectoryError):
        fetch_ano_contacts(settings=sheets_settings)


@patch("directory.sheets.requests.get")
def test_connection_reports_contact_count(mock_get, sheets_settings):
    mock_get.return_value = sheet_response(
        [
            HEADER,
            ["A", "Major", "a@x.com", "+911", "Govt College"],
            ["B", "Captain", "b@x.com", "+912", "Arts College"],
        ]
    )
    result = check_connection(settings=sheets_settings)
    assert result["success"] is True
    assert result["message"] == "Successfully connected to Google Sheets. Found 2 ANO contacts."
    assert len(result["contacts"]) == 2


def test_connection_lists_missing_settings(sheets_settings):
    sheets_settings.GOOGLE_SHEETS_ID = ""
    result = check_connection(settings=sheets_settings)
    assert result["success"] is False
    assert "GOOGLE_SHEETS_ID" in result["message"]
