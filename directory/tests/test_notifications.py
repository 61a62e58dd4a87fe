import datetime
from unittest.mock import patch

from django.test import override_settings

from camps.models import CampNotification, InstituteSelectedCadet, InstituteSelection
from camps.tests.base import CampTestCase
from directory import messages
from directory.models import MessageDelivery
from directory.notifications import (
    notify_cadet_selection,
    notify_institute_selection,
    send_camp_notification,
)
from directory.sheets import DirectoryContact, DirectoryError
from directory.whatsapp import DeliveryResult

CONFIGURED = dict(
    GOOGLE_SHEETS_API_KEY="key",
    GOOGLE_SHEETS_ID="sheet",
    TWILIO_ACCOUNT_SID="AC1",
    TWILIO_AUTH_TOKEN="token",
    TWILIO_WHATSAPP_NUMBER="+14155238886",
)

ANOS = [
    DirectoryContact("Asha", "Captain", "asha@x.com", "+919800000001", "Govt College"),
    DirectoryContact("Ravi", "Major", "ravi@x.com", "+919800000002", "arts college"),
    DirectoryContact("Zed", "Major", "zed@x.com", "+919800000003", "Unrelated College"),
]
CADETS = [
    DirectoryContact("Cadet A", "CDT", "ca@x.com", "+919800000011", "Govt College"),
]


@override_settings(**CONFIGURED)
class CampNotificationTests(CampTestCase):
    @patch("directory.notifications.send_whatsapp_message")
    @patch("directory.notifications.fetch_ano_contacts", return_value=ANOS)
    def test_anos_of_allotted_colleges_messaged(self, _, mock_send):
        mock_send.return_value = DeliveryResult(success=True, message_id="SM1")

        summary = send_camp_notification(self.camp, sender_name="Clerk")

        self.assertEqual((summary.sent, summary.failed), (2, 0))
        self.assertTrue(summary.success)
        numbers = sorted(call.args[0] for call in mock_send.call_args_list)
        self.assertEqual(numbers, ["+919800000001", "+919800000002"])
        body = mock_send.call_args_list[0].args[1]
        self.assertIn("*Camp:* Annual Training Camp", body)
        self.assertIn("*Sent by:* Clerk", body)
        self.assertEqual(
            MessageDelivery.objects.filter(
                camp=self.camp, kind=MessageDelivery.Kind.CAMP_NOTIFICATION, success=True
            ).count(),
            2,
        )

    @patch("directory.notifications.send_whatsapp_message")
    @patch("directory.notifications.fetch_cadet_contacts", return_value=CADETS)
    @patch("directory.notifications.fetch_ano_contacts", return_value=ANOS)
    def test_cadets_messaged_when_requested(self, _, __, mock_send):
        mock_send.return_value = DeliveryResult(success=False, error="Invalid number")
        self.camp.send_to = CampNotification.SendTo.CADETS
        self.camp.save()

        summary = send_camp_notification(self.camp)

        self.assertEqual((summary.sent, summary.failed), (0, 3))
        self.assertFalse(summary.success)
        cadet_log = MessageDelivery.objects.get(audience=MessageDelivery.Audience.CADET)
        self.assertEqual(cadet_log.error, "Invalid number")

    @patch("directory.notifications.fetch_ano_contacts", side_effect=DirectoryError("down"))
    def test_directory_failure_reported(self, _):
        summary = send_camp_notification(self.camp)
        self.assertEqual(summary.total, 0)
        self.assertIn("down", summary.error)

    @override_settings(TWILIO_ACCOUNT_SID="")
    @patch("directory.notifications.fetch_ano_contacts")
    def test_unconfigured_messaging_skips_everything(self, mock_fetch):
        summary = send_camp_notification(self.camp)
        self.assertIn("TWILIO_ACCOUNT_SID", summary.error)
        mock_fetch.assert_not_called()
        self.assertFalse(MessageDelivery.objects.exists())

    @patch("directory.notifications.fetch_ano_contacts", return_value=ANOS[2:])
    def test_no_matching_contacts(self, _):
        summary = send_camp_notification(self.camp)
        self.assertEqual(summary.total, 0)
        self.assertEqual(summary.error, "No directory contacts matched the allotted colleges.")


@override_settings(**CONFIGURED)
class SelectionNotificationTests(CampTestCase):
    @patch("directory.notifications.send_whatsapp_message")
    def test_cadet_selection_message(self, mock_send):
        mock_send.return_value = DeliveryResult(success=True, message_id="SM9")
        submitted = self.submit(count=1).cadets.get()

        result = notify_cadet_selection(submitted, "reserve")

        self.assertTrue(result.success)
        body = mock_send.call_args.args[1]
        self.assertIn("*RESERVE LIST*", body)
        self.assertIn("College: Govt College", body)
        delivery = MessageDelivery.objects.get()
        self.assertEqual(delivery.kind, MessageDelivery.Kind.SELECTION)
        self.assertEqual(delivery.provider_message_id, "SM9")

    @override_settings(TWILIO_AUTH_TOKEN="")
    def test_unconfigured_selection_logged_as_failure(self):
        submitted = self.submit(count=1).cadets.get()
        result = notify_cadet_selection(submitted, "selected")
        self.assertFalse(result.success)
        self.assertIn("TWILIO_AUTH_TOKEN", MessageDelivery.objects.get().error)

    @patch("directory.notifications.send_whatsapp_message")
    def test_institute_selection_messages_each_cadet(self, mock_send):
        mock_send.return_value = DeliveryResult(success=True, message_id="SM")
        selection = InstituteSelection.objects.create(unit=self.unit, total_selected=2)
        for n in (1, 2):
            InstituteSelectedCadet.objects.create(
                selection=selection,
                camp=self.camp,
                camp_title=self.camp.title,
                college_name="Govt College",
                name=f"Cadet {n}",
                rank="CDT",
                email=f"c{n}@x.com",
                whatsapp_number=f"+9190000000{n}",
            )

        summary = notify_institute_selection(selection)

        self.assertEqual(summary.sent, 2)
        self.assertIn("INSTITUTE LEVEL", mock_send.call_args.args[1])
        self.assertEqual(
            MessageDelivery.objects.filter(kind=MessageDelivery.Kind.INSTITUTE_SELECTION).count(), 2
        )

    @override_settings(TIME_ZONE="Asia/Kolkata")
    @patch("directory.notifications.send_whatsapp_message")
    def test_institute_message_uses_local_selection_date(self, mock_send):
        mock_send.return_value = DeliveryResult(success=True, message_id="SM")
        late_evening_utc = datetime.datetime(2030, 6, 30, 20, 0, tzinfo=datetime.timezone.utc)
        selection = InstituteSelection.objects.create(
            unit=self.unit, total_selected=1, selection_date=late_evening_utc
        )
        InstituteSelectedCadet.objects.create(
            selection=selection,
            camp=self.camp,
            camp_title=self.camp.title,
            college_name="Govt College",
            name="Cadet 1",
            rank="CDT",
            email="c1@x.com",
            whatsapp_number="+919000000001",
        )

        notify_institute_selection(selection)

        self.assertIn("Selection Date: 01/07/2030", mock_send.call_args.args[1])


class MessageBodyTests(CampTestCase):
    def test_ano_message_uses_long_date(self):
        body = messages.camp_notification_for_ano(ANOS[0], self.camp, "Clerk")
        self.assertIn("Dear Captain Asha,", body)
        self.assertIn("*Reporting Date:* Saturday, 1 June 2030", body)
        self.assertIn("*Reporting Time:* 08:30", body)

    def test_cadet_message(self):
        body = messages.camp_notification_for_cadet(CADETS[0], self.camp)
        self.assertIn("allotted vacancy of *Annual Training Camp*", body)
