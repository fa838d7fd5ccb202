"""
Project: Smart Restaurant Management System (SRMS)
School: UMGC - Software Development and Security
Authors: Beby Alexis, Kevin Wong , David White Jr
Date: October 2025

Description:
Order reference format and randomness tests.
"""

import re
from datetime import date

from references import generate_order_reference


def test_reference_shape():
    ref = generate_order_reference(today=date(2025, 10, 19))
    assert re.fullmatch(r"ORD-[A-Z0-9]{8}-20251019", ref)


def test_prefix_and_length_are_configurable():
    ref = generate_order_reference(prefix="SRMS", length=10, today=date(2026, 1, 2))
    assert re.fullmatch(r"SRMS-[A-Z0-9]{10}-20260102", ref)


def test_defaults_to_today():
    assert generate_order_reference().endswith(date.today().strftime("-%Y%m%d"))


def test_references_are_distinct():
    refs = {generate_order_reference() for _ in range(2000)}
    assert len(refs) == 2000
