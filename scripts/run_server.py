"""Entrypoint for launching the defect map FastAPI server."""
from __future__ import annotations

import uvicorn

from defectmap.logging_config import setup_logging


def main() -> None:
    setup_logging()
    uvicorn.run("defectmap.server.app:app", host="0.0.0.0", port=8000, reload=False)


if __name__ == "__main__":
    main()
