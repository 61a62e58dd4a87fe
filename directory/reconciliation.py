"""Compare colleges in the database with colleges named in the ANO sheet.

Notifications are routed by college name, so a college spelled differently
in the sheet silently receives nothing. This report makes that visible.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from django.db.models import Count

from core.models import College
from core.utils import normalize_college_name

from .sheets import DirectoryContact, fetch_ano_contacts

logger = logging.getLogger(__name__)


@dataclass
class CollegeMatch:
    sheet_college: str
    college: str
    ano_name: str
    sheet_email: str


@dataclass
class UnmatchedCollege:
    college: str
    ano_count: int


@dataclass
class ReconciliationReport:
    matched: List[CollegeMatch] = field(default_factory=list)
    unmatched_contacts: List[DirectoryContact] = field(default_factory=list)
    unmatched_colleges: List[UnmatchedCollege] = field(default_factory=list)

    @property
    def is_clean(self):
        return not self.unmatched_contacts and not self.unmatched_colleges


def reconcile_colleges(contacts: Optional[List[DirectoryContact]] = None) -> ReconciliationReport:
    """Match sheet contacts to colleges that have ANOs assigned.

    ``contacts`` defaults to a fresh fetch of the ANO sheet and may raise
    ``DirectoryError``.
    """
    if contacts is None:
        contacts = fetch_ano_contacts()

    colleges = (
        College.objects.annotate(ano_count=Count("anos"))
        .filter(ano_count__gt=0)
        .prefetch_related("anos")
        .order_by("name")
    )
    by_name = {normalize_college_name(c.name): c for c in colleges}

    report = ReconciliationReport()
    seen = set()
    for contact in contacts:
        college = by_name.get(normalize_college_name(contact.college))
        if college is None:
            report.unmatched_contacts.append(contact)
            continue
        seen.add(college.pk)
        ano = college.anos.all()[0]
        report.matched.append(
            CollegeMatch(
                sheet_college=contact.college,
                college=college.name,
                ano_name=ano.get_full_name() or ano.username,
                sheet_email=contact.email,
            )
        )

    report.unmatched_colleges = [
        UnmatchedCollege(college=c.name, ano_count=c.ano_count)
        for c in colleges
        if c.pk not in seen
    ]
    logger.info(
        "Reconciliation: %s matched, %s unmatched contacts, %s unmatched colleges",
        len(report.matched),
        len(report.unmatched_contacts),
        len(report.unmatched_colleges),
    )
    return report
