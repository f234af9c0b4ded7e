"""Job Hunter: Google Sheets candidates to HubSpot contacts."""
