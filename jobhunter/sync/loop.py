"""Polling loop: sheet rows -> HubSpot contacts -> status cell."""

import asyncio
from typing import Any, Callable, Optional, Sequence

import httpx
import structlog

from jobhunter.clients.hubspot import create_contact
from jobhunter.clients.sheets import CredentialsNotFoundError, SheetsClient
from jobhunter.core.config import Settings
from jobhunter.core.models import (
    ALREADY_SENT,
    DUPLICATE,
    INELIGIBLE,
    MARK_FAILED,
    MIN_CELLS,
    PUSH_FAILED,
    PUSHED,
    SENT_STATUS,
    SKIPPED_SHORT,
    CandidateRow,
    CycleReport,
    RowOutcome,
    row_number_for_index,
)

log = structlog.get_logger()

SheetsFactory = Callable[[Settings], SheetsClient]


def default_sheets_factory(settings: Settings) -> SheetsClient:
    return SheetsClient.from_credentials_file(
        settings.credentials_path,
        settings.google_sheets.spreadsheet_id,
        settings.google_sheets.sheet_name,
    )


def parse_rows(values: Sequence[Sequence[Any]]) -> list[tuple[int, Optional[CandidateRow]]]:
    """Pair every sheet row number with its parsed row.

    Rows with fewer than MIN_CELLS cells map to None.
    """
    parsed = []
    for index, cells in enumerate(values):
        row_number = row_number_for_index(index)
        if len(cells) < MIN_CELLS:
            parsed.append((row_number, None))
            continue
        parsed.append((row_number, CandidateRow.from_cells(cells, row_number)))
    return parsed


def summarize_rows(values: Sequence[Sequence[Any]]) -> dict:
    """Count rows by state without touching HubSpot or the sheet."""
    stats = {"total": 0, "eligible": 0, "sent": 0, "incomplete": 0, "skipped": 0}
    for _, row in parse_rows(values):
        stats["total"] += 1
        if row is None:
            stats["skipped"] += 1
        elif row.is_sent:
            stats["sent"] += 1
        elif row.is_eligible:
            stats["eligible"] += 1
        else:
            stats["incomplete"] += 1
    return stats


async def _in_executor(func, *args):
    """Run a blocking Google API call off the event loop."""
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(None, lambda: func(*args))


async def process_row(
    row: CandidateRow,
    sheets: SheetsClient,
    settings: Settings,
    client: Optional[httpx.AsyncClient] = None,
) -> RowOutcome:
    """Push one row to HubSpot and mark it Sent on success."""
    if row.is_sent:
        return RowOutcome(row.row_number, ALREADY_SENT)
    if not row.is_complete:
        return RowOutcome(row.row_number, INELIGIBLE)

    log.info(
        "candidate_found",
        row=row.row_number,
        name=f"{row.first_name} {row.last_name}".strip(),
        company=row.company,
    )

    result = await create_contact(
        row.to_hubspot_properties(),
        settings.hubspot.token,
        base_url=settings.hubspot.base_url,
        client=client,
    )
    if not result.success:
        return RowOutcome(row.row_number, PUSH_FAILED, error=result.error)

    try:
        await _in_executor(sheets.update_status, row.row_number, SENT_STATUS)
    except Exception as e:
        log.error("row_mark_failed", row=row.row_number, error=str(e))
        return RowOutcome(row.row_number, MARK_FAILED, error=str(e))

    log.info("row_marked_sent", row=row.row_number, email=row.email, duplicate=result.duplicate)
    return RowOutcome(row.row_number, DUPLICATE if result.duplicate else PUSHED)


async def run_sync_cycle(
    settings: Settings,
    sheets_factory: SheetsFactory = default_sheets_factory,
) -> CycleReport:
    """Run one pass over the sheet.

    1. Open the sheet (skip the cycle if the key file is missing)
    2. Read A2:I
    3. Push each eligible row, in order, and mark it Sent

    Returns a CycleReport; read and per-row failures are recorded there.
    """
    report = CycleReport()
    log.info("sync_cycle_started", time=report.started_at.isoformat())

    try:
        sheets = sheets_factory(settings)
    except CredentialsNotFoundError as e:
        log.warning("credentials_not_found", path=str(e))
        report.aborted = "credentials_missing"
        report.error = str(e)
        return report

    try:
        values = await _in_executor(sheets.get_rows)
    except Exception as e:
        log.error("sheet_read_failed", error=str(e), range=sheets.read_range)
        report.aborted = "read_failed"
        report.error = str(e)
        return report

    async with httpx.AsyncClient(timeout=60.0) as client:
        for row_number, row in parse_rows(values):
            if row is None:
                report.outcomes.append(RowOutcome(row_number, SKIPPED_SHORT))
                continue
            outcome = await process_row(row, sheets, settings, client)
            report.outcomes.append(outcome)

    log.info("sync_cycle_completed", **report.summary())
    return report


async def wait_for_stop(stop_event: asyncio.Event, timeout: float) -> bool:
    """Sleep up to timeout seconds; return True as soon as stop is requested."""
    try:
        await asyncio.wait_for(stop_event.wait(), timeout=timeout)
        return True
    except asyncio.TimeoutError:
        return False


async def run_forever(
    settings: Settings,
    stop_event: Optional[asyncio.Event] = None,
    sheets_factory: SheetsFactory = default_sheets_factory,
) -> int:
    """Run sync cycles until stop_event is set or the task is cancelled.

    The first cycle starts immediately. A failing cycle is logged and never
    ends the loop. Returns the number of cycles run.
    """
    if stop_event is None:
        stop_event = asyncio.Event()

    interval = settings.sync.interval_seconds
    cycles = 0
    log.info("sync_service_started", interval_seconds=interval)

    try:
        while not stop_event.is_set():
            try:
                await run_sync_cycle(settings, sheets_factory)
            except Exception as e:
                log.error("sync_cycle_failed", error=str(e))
            cycles += 1

            if await wait_for_stop(stop_event, interval):
                break
    finally:
        log.info("sync_service_stopped", cycles=cycles)

    return cycles
