"""HTTP endpoints for PocketNotes resources."""
