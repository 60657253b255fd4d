"""HTTP API for the whiteboard duel."""
