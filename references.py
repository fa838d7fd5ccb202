"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC - Software Development and Security
Authors: Beby Alexis, Kevin Wong, David White Jr
Date: October 2025

Description:
Human-readable order references, e.g. ORD-7KQ2M9XA-20251019.
"""

import secrets
import string
from datetime import date

REFERENCE_ALPHABET = string.ascii_uppercase + string.digits


def generate_order_reference(prefix="ORD", length=8, today=None):
    # 36**8 is roughly 2.8e12 combinations per day; the unique index on
    # Order.reference catches the rare collision and the caller retries.
    token = "".join(secrets.choice(REFERENCE_ALPHABET) for _ in range(length))
    today = today or date.today()
    return f"{prefix}-{token}-{today:%Y%m%d}"
