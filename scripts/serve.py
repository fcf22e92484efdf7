#!/usr/bin/env python3
"""Run the news API."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv
import uvicorn


def main():
    load_dotenv()

    from newsagg.config.settings import Settings
    settings = Settings()

    print("\n" + "=" * 50)
    print("UK NEWS AGGREGATOR")
    print("=" * 50)
    print(f"Serving on http://localhost:{settings.port}")
    print("Press Ctrl+C to stop\n")

    uvicorn.run("newsagg.api.app:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
