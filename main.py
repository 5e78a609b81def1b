"""Entry point for running the NiceGUI defect map editor."""

from defectmap.app import run
from defectmap.logging_config import setup_logging


if __name__ in {"__main__", "__mp_main__"}:
    setup_logging()
    run(reload=False, host="0.0.0.0", port=8080, title="Defect Map")
