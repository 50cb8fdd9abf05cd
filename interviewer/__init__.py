"""Mock interviewer backend: relays interview turns to a Gemini model."""

__version__ = "1.0.0"
