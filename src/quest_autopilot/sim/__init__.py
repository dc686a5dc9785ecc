"""In-memory stand-ins for the game systems the passive loop talks to."""
