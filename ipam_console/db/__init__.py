"""SQLite storage for the console."""
