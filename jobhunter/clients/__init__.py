"""External API clients: Google Sheets, HubSpot."""

from jobhunter.clients.hubspot import create_contact
from jobhunter.clients.sheets import CredentialsNotFoundError, SheetsClient
