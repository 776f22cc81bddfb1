"""
runtime - Configuration and CLI
===============================

Run:
    python -m marketplace_messages operations
    python -m marketplace_messages schema 0173-1#01-AAO742#002
    python -m marketplace_messages generate callForProposal --user did:peer:buyer ...

The CLI lives in runtime.runner and is imported on demand.
"""

from .config import Config, load_config

__all__ = ["Config", "load_config"]
