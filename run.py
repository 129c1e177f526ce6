#!/usr/bin/env python3
"""
Piggy Bank Entry Point

Starts the FastAPI server with a fresh, empty piggy bank.
"""

import sys

from piggy_bank.api import run_server, startup_banner
from piggy_bank.config import get_config


if __name__ == "__main__":
    for line in startup_banner(get_config()):
        print(line)
    print()

    try:
        run_server()
    except KeyboardInterrupt:
        print("\n👋 Shutting down Piggy Bank...")
    except Exception as e:
        print(f"❌ Error starting server: {e}")
        sys.exit(1)
