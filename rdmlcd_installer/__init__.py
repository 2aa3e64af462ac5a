"""RaspDacMini LCD plugin installer.

Core design goals:
- One linear, idempotent install plan; safe to re-run after any failure
- Exclusive runs guarded by a lock file
- Prebuilt compositor when available, on-device build otherwise
- Centralized logging and a single end-of-install sentinel
"""

__all__ = []
