"""
Account service: registration, email verification and login.
"""

__version__ = "1.0.0"
