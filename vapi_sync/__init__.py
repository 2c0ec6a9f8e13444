"""Local assistant and phone number records mirrored to the Vapi platform."""

__version__ = "0.1.0"
