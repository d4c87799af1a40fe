"""HTTP relay for prompt-based text processing on top of the Groq API."""

__version__ = "0.1.0"
