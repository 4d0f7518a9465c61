"""
Parent auth service.

Phone number certification by SMS, parent sign-up and password login.
"""

__version__ = "1.0.0"
