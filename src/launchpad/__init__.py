"""
Serverless Launchpad hypermedia API.

HAL/HAL-FORMS resources for user accounts, sessions and API keys,
plus the client-side template runtime that consumes them.
"""

__version__ = "0.1.0"
