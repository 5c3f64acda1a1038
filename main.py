# main.py
"""
Main entry point for the meems-events demo.
"""
import os
import sys

# Make `import src.*` work when launched from anywhere
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from src.core.safe_main import run_app  # noqa: E402

if __name__ == '__main__':
    raise SystemExit(run_app())
