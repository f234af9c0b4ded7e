#!/usr/bin/env python
"""Entry point for the Job Hunter service."""

# Load .env file before anything else
from dotenv import load_dotenv
load_dotenv()

from jobhunter.core.cli import main

if __name__ == "__main__":
    main()
