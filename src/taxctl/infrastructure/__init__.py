"""Infrastructure layer — SQLite persistence and the workspace state owner."""
