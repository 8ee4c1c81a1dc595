"""
Customer support dispatcher - intent routing and grounded streaming replies
"""

__version__ = "1.0.0"
