"""Host integrations for the line engine."""
