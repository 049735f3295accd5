"""Single-file entry point for the GeoChart demo.

Runs ``streamlit_app/Home.py``, the interactive choropleth page over the
bundled demo regions, when started with ``streamlit run streamlit_app.py``.
"""
from __future__ import annotations

from pathlib import Path
import runpy

HOME_PATH = Path(__file__).parent / "streamlit_app" / "Home.py"

if not HOME_PATH.exists():
    raise FileNotFoundError(
        "Expected demo entry point at streamlit_app/Home.py; "
        "please ensure the repository structure is intact."
    )

runpy.run_path(HOME_PATH, run_name="__main__")
