"""
Udyami Core Services

This package contains the client-side service layer of the marketplace:
- shared: key-value storage, record types, structured logging
- local_store: record storage on top of a key-value store
- api_client: HTTP adapter for the backend API
- persistence: hybrid remote/local coordinator with per-call fallback
- notifier: in-process notification engine (job matching, reminders)
"""
