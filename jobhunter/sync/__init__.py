"""Sheet-to-CRM sync loop."""

from jobhunter.sync.loop import run_sync_cycle, run_forever
