"""Appointment request parser: free-form text or images to structured appointment intents."""
