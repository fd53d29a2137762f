"""
Enquiry Validator - contact detail format checks
"""

import re

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
PHONE_PATTERN = re.compile(r'^\d{10,}$', re.ASCII)
NON_DIGITS = re.compile(r'\D', re.ASCII)

def is_valid_email(value: str) -> bool:
    """True if value looks like local@domain.tld"""
    if not isinstance(value, str):
        return False
    return EMAIL_PATTERN.fullmatch(value) is not None

def normalize_phone(value: str) -> str:
    """Strip everything except digits"""
    return NON_DIGITS.sub('', value)

def is_valid_phone(value: str) -> bool:
    """True if the number holds at least 10 digits once formatting is removed"""
    if not isinstance(value, str):
        return False
    return PHONE_PATTERN.fullmatch(normalize_phone(value)) is not None
