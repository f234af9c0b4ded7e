"""Candidate row record and sync result types."""

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Optional, Sequence

SENT_STATUS = "Sent"

# First data row in the sheet; row 1 holds the headers.
FIRST_DATA_ROW = 2

# Rows shorter than this are treated as malformed and skipped.
MIN_CELLS = 3


@dataclass(frozen=True)
class CandidateRow:
    """One spreadsheet row (columns A-I) bound to named fields."""
    row_number: int
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    job_title: str = ""
    company: str = ""
    linkedin_url: str = ""
    industry: str = ""
    company_size: str = ""
    status: str = ""

    # Column order A..I. Reordering the sheet means editing this tuple only.
    COLUMNS = (
        "first_name",
        "last_name",
        "email",
        "job_title",
        "company",
        "linkedin_url",
        "industry",
        "company_size",
        "status",
    )

    @classmethod
    def from_cells(cls, cells: Sequence[Any], row_number: int) -> "CandidateRow":
        """Build a row from raw cell values; absent cells become ''."""
        values = {}
        for index, name in enumerate(cls.COLUMNS):
            raw = cells[index] if index < len(cells) else None
            values[name] = "" if raw is None else str(raw).strip()
        return cls(row_number=row_number, **values)

    @property
    def is_sent(self) -> bool:
        return self.status == SENT_STATUS

    @property
    def is_complete(self) -> bool:
        """Email, company and job title are all present."""
        return bool(self.email and self.company and self.job_title)

    @property
    def is_eligible(self) -> bool:
        return self.is_complete and not self.is_sent

    def to_hubspot_properties(self) -> dict:
        """Map the row onto HubSpot contact property names."""
        return {
            "email": self.email,
            "firstname": self.first_name,
            "lastname": self.last_name,
            "jobtitle": self.job_title,
            "company": self.company,
            "hs_linkedin_url": self.linkedin_url,
            "industry": self.industry,
            "company_size": self.company_size,
        }


# Guard against COLUMNS drifting away from the declared fields.
assert set(CandidateRow.COLUMNS) == {
    f.name for f in fields(CandidateRow) if f.name != "row_number"
}


def row_number_for_index(index: int) -> int:
    """Sheet row number for a 0-based index into the A2:I values."""
    return index + FIRST_DATA_ROW


@dataclass
class PushResult:
    """Outcome of a single contact push to HubSpot."""
    success: bool
    duplicate: bool = False
    status_code: Optional[int] = None
    error: Optional[str] = None


# RowOutcome.status values
SKIPPED_SHORT = "skipped_short"
INELIGIBLE = "ineligible"
ALREADY_SENT = "already_sent"
PUSHED = "pushed"
DUPLICATE = "duplicate"
PUSH_FAILED = "push_failed"
MARK_FAILED = "mark_failed"


@dataclass
class RowOutcome:
    row_number: int
    status: str
    error: Optional[str] = None


@dataclass
class CycleReport:
    """Summary of one sync cycle."""
    started_at: datetime = field(default_factory=datetime.now)
    outcomes: list[RowOutcome] = field(default_factory=list)
    aborted: Optional[str] = None  # "credentials_missing" | "read_failed"
    error: Optional[str] = None

    def count(self, status: str) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

    @property
    def marked(self) -> int:
        """Rows set to Sent this cycle."""
        return self.count(PUSHED) + self.count(DUPLICATE)

    @property
    def failed(self) -> int:
        return self.count(PUSH_FAILED) + self.count(MARK_FAILED)

    def summary(self) -> dict:
        return {
            "rows": len(self.outcomes),
            "pushed": self.count(PUSHED),
            "duplicates": self.count(DUPLICATE),
            "already_sent": self.count(ALREADY_SENT),
            "ineligible": self.count(INELIGIBLE),
            "skipped": self.count(SKIPPED_SHORT),
            "failed": self.failed,
            "aborted": self.aborted,
        }
