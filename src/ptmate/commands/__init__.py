"""CLI commands for ptmate."""

from .assess import assess
from .clients import clients
from .dashboard import dashboard
from .init import init
from .measure import measure
from .serve import serve
from .sessions import sessions
from .trainers import trainers

__all__ = [
    "assess",
    "clients",
    "dashboard",
    "init",
    "measure",
    "serve",
    "sessions",
    "trainers",
]
