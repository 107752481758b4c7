"""Mockstage: device mockup compositor with keyframed layer animation."""
