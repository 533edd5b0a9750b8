"""Student Companion backend: mood check-ins, chat companion, travel booking."""

__version__ = "0.1.0"
