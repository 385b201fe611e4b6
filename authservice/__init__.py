"""
Auth service: user registration, login, and role-gated routes.
"""

__version__ = "0.1.0"
