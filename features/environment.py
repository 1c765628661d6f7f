"""
Behave environment configuration

Resets per-scenario state so selectors and matches never leak between
scenarios.
"""

import sys
import os

# Add project root to Python path so the anchoring package is importable
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)


def before_scenario(context, scenario):
    """Run before each scenario"""
    for name in ("document", "selector", "match", "position", "stored_hash"):
        if hasattr(context, name):
            delattr(context, name)
