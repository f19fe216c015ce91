"""
Run the live filter demo from a source checkout.

Usage:
    python scripts/live_filters.py 0
    python scripts/live_filters.py 2 --config config/parameters.yaml
"""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from webcam_filters.app import run

if __name__ == "__main__":
    run()
