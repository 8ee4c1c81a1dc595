"""
Application constants

Wire-level markers and fixed vocabularies shared by the router,
the grounding aggregator and the streamer.
"""

import re
from typing import Dict

# ============================================================================
# Stream markers
# ============================================================================

# First line of every dispatch response body. Clients strip it before
# treating the rest of the body as assistant text.
STATUS_PREFIX = "__STATUS__:"

# Separator placed between agent instructions and retrieved record data
GROUNDING_HEADER = "\n\n--- Data from tools ---\n"


# ============================================================================
# Entity references
# ============================================================================

ORDER_ID_PATTERN = re.compile(r"\bORD-\d+", re.IGNORECASE)
INVOICE_ID_PATTERN = re.compile(r"\bINV-\d+", re.IGNORECASE)


# ============================================================================
# FAQ knowledge base
# ============================================================================

_PASSWORD_ANSWER = (
    "To reset your password, go to Settings > Account > Change Password. "
    "You can also click \"Forgot Password\" on the login page to receive a reset link via email."
)

# Insertion order is the lookup order: the first key found in the text wins
FAQ_ANSWERS: Dict[str, str] = {
    "password": _PASSWORD_ANSWER,
    "reset": _PASSWORD_ANSWER,
    "account": (
        "For account-related issues, go to Settings > Account. If your account is locked, "
        "use the \"Forgot Password\" link on the login page or contact us at support@example.com."
    ),
    "shipping": "Standard shipping takes 5-7 business days. Express shipping takes 2-3 business days.",
    "returns": "You can return items within 30 days of delivery. Items must be in original condition with tags attached.",
    "refund": "Refunds are processed within 5-10 business days after we receive your returned item.",
    "payment": "We accept Visa, MasterCard, American Express, PayPal, and Apple Pay.",
    "contact": "Email us at support@example.com or call 1-800-SUPPORT (Mon-Fri 9am-6pm EST).",
    "cancel": (
        "To cancel an order, contact us within 24 hours of placing it. "
        "After that, you may need to return the item once delivered."
    ),
    "exchange": "You can exchange items within 30 days of delivery. Visit your order page and select \"Exchange Item\".",
}

FAQ_FALLBACK = "Sorry, I don't have an answer for that. Let me connect you with a human agent."
