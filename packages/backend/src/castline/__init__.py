"""Castline — podcast catalogue backend.

Accounts authenticate with a signed token, hosts publish podcasts and
episodes, listeners browse them. Every request passes through the auth
guard and every podcast/episode mutation through the entity validator.
"""

__version__ = "0.1.0"
