# app/core/limiter.py
"""
Shared rate limiter for the public, token-authenticated endpoints: the print
station kiosk and the faculty response page. Kept in its own module so that
routers and app.main can import it without a cycle.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

# Kiosks and faculty browsers are keyed by client IP
limiter = Limiter(key_func=get_remote_address)

KIOSK_CONFIG_LIMIT = "30/minute"
# A registration desk scans continuously during peak check-in
PRINT_LIMIT = "120/minute"
RESPOND_VIEW_LIMIT = "30/minute"
RESPOND_SUBMIT_LIMIT = "10/minute"
