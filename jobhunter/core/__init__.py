"""Core infrastructure: CLI, config, row models."""

from jobhunter.core.config import (
    Settings,
    GoogleSheetsConfig,
    HubSpotConfig,
    SyncConfig,
    ServerConfig,
    load_settings,
)
from jobhunter.core.models import (
    SENT_STATUS,
    CandidateRow,
    PushResult,
    RowOutcome,
    CycleReport,
)
