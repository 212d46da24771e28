"""
Campus maintenance portal.

Role-based complaint tracking: students file complaints, administrators
triage and assign them, maintenance staff resolve them, and everyone
involved talks through a per-complaint chat thread.
"""

__version__ = "1.0.0"
