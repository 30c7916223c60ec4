"""Host adapters that paint frames and feed key events to a session."""
