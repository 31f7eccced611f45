"""Streamlit party builder.

Usage:
    Run the application with:
        streamlit run src/party_optimizer/ui/app.py

    Or programmatically:
        from party_optimizer.ui import run_app
        run_app()
"""

from __future__ import annotations


def run_app() -> None:
    """Run the Streamlit application.

    Note: This launches a subprocess running streamlit.
    """
    import subprocess
    import sys
    from pathlib import Path

    app_path = Path(__file__).parent / "app.py"
    subprocess.run([sys.executable, "-m", "streamlit", "run", str(app_path)], check=False)


__all__ = [
    "run_app",
]
