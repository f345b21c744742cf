"""Weekly briefing engine for the narrative campaign game."""
