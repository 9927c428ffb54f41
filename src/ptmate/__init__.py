"""ptmate: personal-training studio management."""

__version__ = "0.1.0"
