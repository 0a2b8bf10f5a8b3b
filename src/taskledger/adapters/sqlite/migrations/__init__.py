"""Schema migrations for the SQLite ledger."""
