"""Consultation agents for the Parfum Consultant."""

from .consultant import ParfumConsultant

__all__ = [
    "ParfumConsultant",
]
