from unittest.mock import Mock, patch

import pytest
import requests

from directory.whatsapp import (
    MessagingError,
    format_phone_number,
    send_whatsapp_message,
    validate_twilio_config,
)


@pytest.fixture
def twilio_settings(settings):
    settings.TWILIO_ACCOUNT_SID = "AC123"
    settings.TWILIO_AUTH_TOKEN = "token"
    settings.TWILIO_WHATSAPP_NUMBER = "+1 415 523 8886"
    settings.WHATSAPP_COUNTRY_CODE = "+91"
    return settings


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("+91 98765 43210", "+919876543210"),
        ("98765-43210", "+919876543210"),
        ("919876543210", "+919876543210"),
        ("(0172) 2345678", "+9101722345678"),
        ("", ""),
    ],
)
def test_format_phone_number(raw, expected, twilio_settings):
    assert format_phone_number(raw, settings=twilio_settings) == expected


def test_validate_twilio_config(twilio_settings):
    assert validate_twilio_config(settings=twilio_settings) == []
    twilio_settings.TWILIO_AUTH_TOKEN = ""
    assert validate_twilio_config(settings=twilio_settings) == ["TWILIO_AUTH_TOKEN"]


@patch("directory.whatsapp.requests.post")
def test_send_posts_to_twilio(mock_post, twilio_settings):
    resp = Mock()
    resp.raise_for_status.return_value = None
    resp.json.return_value = {"sid": "SM42", "status": "queued"}
    mock_post.return_value = resp

    result = send_whatsapp_message("98765 43210", "Hello", settings=twilio_settings)

    assert result.success is True
    assert result.message_id == "SM42"
    url = mock_post.call_args.args[0]
    assert url == "https://api.twilio.com/2010-04-01/Accounts/AC123/Messages.json"
    assert mock_post.call_args.kwargs["data"] == {
        "From": "whatsapp:+14155238886",
        "To": "whatsapp:+919876543210",
        "Body": "Hello",
    }
    assert mock_post.call_args.kwargs["auth"] == ("AC123", "token")


@patch("directory.whatsapp.requests.post")
def test_twilio_error_returned_not_raised(mock_post, twilio_settings):
    error_response = Mock(status_code=400)
    error_response.json.return_value = {"code": 21211, "message": "Invalid 'To' Phone Number"}
    resp = Mock()
    resp.raise_for_status.side_effect = requests.HTTPError(response=error_response)
    mock_post.return_value = resp

    result = send_whatsapp_message("+91 1", "Hello", settings=twilio_settings)

    assert result.success is False
    assert result.error == "Invalid 'To' Phone Number"


@patch("directory.whatsapp.requests.post")
def test_network_error_returned(mock_post, twilio_settings):
    mock_post.side_effect = requests.Timeout("timed out")
    result = send_whatsapp_message("+919876543210", "Hello", settings=twilio_settings)
    assert result.success is False
    assert "timed out" in result.error


@patch("directory.whatsapp.requests.post")
def test_missing_number_skipped(mock_post, twilio_settings):
    result = send_whatsapp_message("  ", "Hello", settings=twilio_settings)
    assert result.success is False
    mock_post.assert_not_called()


def test_missing_config_raises(twilio_settings):
    twilio_settings.TWILIO_ACCOUNT_SID = ""
    with pytest.raises(MessagingError):
        send_whatsapp_message("+919876543210", "Hello", settings=twilio_settings)
