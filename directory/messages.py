"""WhatsApp message bodies."""

from django.conf import settings
from django.utils import timezone


def _long_date(value):
    # e.g. "Monday, 5 August 2024"
    return f"{value:%A}, {value.day} {value:%B %Y}"


def _short_time(value):
    return value.strftime("%H:%M") if hasattr(value, "strftime") else str(value)


def camp_notification_for_ano(contact, camp, sender_name):
    lines = [
        "*NCC CAMP NOTIFICATION*",
        "",
        f"Dear {contact.rank} {contact.name},",
        "",
        "You have received a new camp notification. Kindly log in to your account and nominate the cadets:",
        "",
        f"*Camp:* {camp.title}",
    ]
    if camp.description:
        lines.append(f"*Description:* {camp.description}")
    lines += [
        f"*Venue:* {camp.venue}",
        f"*Reporting Date:* {_long_date(camp.reporting_date)}",
        f"*Reporting Time:* {_short_time(camp.reporting_time)}",
        "",
        f"*Sent by:* {sender_name}",
        "",
        "Please check your NCC ERP portal for complete details and vacancy information.",
        "",
        f"Portal: {getattr(settings, 'PORTAL_URL', '')}",
        "",
        "Best Regards,",
        "NCC ERP System",
    ]
    return "\n".join(lines)


def camp_notification_for_cadet(contact, camp):
    return "\n".join(
        [
            "*NCC CAMP NOTIFICATION*",
            "",
            f"Dear {contact.rank} {contact.name},",
            "",
            f"Your college has been allotted vacancy of *{camp.title}*",
            "",
            "The reporting time and date is:",
            f"*Date:* {_long_date(camp.reporting_date)}",
            f"*Time:* {_short_time(camp.reporting_time)}",
            "",
            "Kindly contact your college ANO for further details.",
            "",
            "Best Regards,",
            "NCC ERP System",
        ]
    )


def selection_message(cadet, camp_title, college_name, decision):
    """Message for a cadet marked ``selected`` or ``reserve``."""
    if decision == "selected":
        return "\n".join(
            [
                "*CONGRATULATIONS!*",
                "",
                f"Dear {cadet.rank} {cadet.name},",
                "",
                "You have been *SELECTED* for the next level of NCC Camp selection!",
                "",
                "*Selection Details:*",
                f"Camp: {camp_title}",
                f"College: {college_name}",
                "Status: *SELECTED FOR NEXT LEVEL*",
                "",
                "Prepare for the next level of selection and await further "
                "instructions from your unit.",
                "",
                "*National Cadet Corps*",
                "*Selection Committee*",
            ]
        )
    return "\n".join(
        [
            "*NCC Camp Selection Update*",
            "",
            f"Dear {cadet.rank} {cadet.name},",
            "",
            "You have been placed in the *RESERVE LIST* for the NCC Camp selection.",
            "",
            "*Selection Details:*",
            f"Camp: {camp_title}",
            f"College: {college_name}",
            "Status: *RESERVE CANDIDATE*",
            "",
            "You may be called if selected candidates are unavailable. "
            "Keep yourself prepared and continue your training.",
            "",
            "*National Cadet Corps*",
            "*Selection Committee*",
        ]
    )


def institute_selection_message(cadet, selection_date=None):
    selection_date = selection_date or timezone.localdate()
    return "\n".join(
        [
            "*CONGRATULATIONS!*",
            "",
            f"Dear {cadet.rank} {cadet.name},",
            "",
            "You have been *SELECTED for INSTITUTE LEVEL* participation!",
            "",
            "*Selection Details:*",
            f"Camp: {cadet.camp_title}",
            f"From: {cadet.college_name}",
            "Level: *INSTITUTE LEVEL*",
            f"Selection Date: {selection_date:%d/%m/%Y}",
            "",
            "Await further instructions from your commanding officer and "
            "prepare for institute level training and activities.",
            "",
            "*National Cadet Corps*",
            "*Institute Level Selection*",
        ]
    )
