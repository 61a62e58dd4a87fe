import csv
import re

from django.http import HttpResponse
from django.utils import timezone

FINALIZED_HEADERS = [
    "Camp Title",
    "College",
    "Cadet Name",
    "Rank",
    "Email",
    "WhatsApp",
    "Status",
    "Finalized Date",
]

INSTITUTE_HEADERS = ["Rank", "Name", "Email", "WhatsApp", "College", "Camp"]


def _safe_filename(value):
    return re.sub(r"[^\w\-]+", "_", value).strip("_") or "export"


def _csv_response(filename):
    response = HttpResponse(content_type="text/csv")
    response["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response, csv.writer(response, quoting=csv.QUOTE_ALL)


def finalized_selection_rows(selections):
    for selection in selections:
        finalized_on = timezone.localtime(selection.finalized_at).strftime("%Y-%m-%d")
        for cadet in selection.cadets.all():
            yield [
                selection.camp_title,
                selection.college_name,
                cadet.name,
                cadet.rank,
                cadet.email,
                cadet.whatsapp_number,
                cadet.get_status_display(),
                finalized_on,
            ]


def finalized_selections_csv(selections, camp_title=None):
    """CSV of every cadet in ``selections``; named after the camp when filtered."""
    if camp_title:
        filename = f"{_safe_filename(camp_title)}_Finalized_Selections.csv"
    else:
        filename = f"Finalized_Selections_{timezone.localdate():%Y-%m-%d}.csv"
    response, writer = _csv_response(filename)
    writer.writerow(FINALIZED_HEADERS)
    writer.writerows(finalized_selection_rows(selections))
    return response


def institute_selection_csv(selection):
    selection_day = timezone.localtime(selection.selection_date).strftime("%Y-%m-%d")
    response, writer = _csv_response(f"institute-selection-{selection_day}.csv")
    writer.writerow(INSTITUTE_HEADERS)
    for cadet in selection.cadets.all():
        writer.writerow(
            [
                cadet.rank,
                cadet.name,
                cadet.email,
                cadet.whatsapp_number,
                cadet.college_name,
                cadet.camp_title,
            ]
        )
    return response
