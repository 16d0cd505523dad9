"""
Development server launcher.

Reads .env, defaults to human-readable console logs and starts uvicorn
with auto-reload on the project root.

Usage:
    python scripts/run_dev.py [--port 8000]
"""

import argparse
import os
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv(project_root / ".env")
os.environ.setdefault("LOG_FORMAT", "console")

import uvicorn


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the API with auto-reload")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args()

    print(f"Athlete Training API on http://{args.host}:{args.port}/api (docs at /docs)")
    uvicorn.run("app.main:app", host=args.host, port=args.port, reload=True, reload_dirs=[str(project_root / "app")],
                log_level="info")


if __name__ == "__main__":
    main()
