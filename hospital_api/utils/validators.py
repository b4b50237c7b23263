# hospital_api/utils/validators.py

import re
from datetime import time
from typing import Tuple

PHONE_PATTERN = re.compile(r'^\+(\d{1,3})(\d+)$')
CLEANUP_PATTERN = re.compile(r'[\s\-\(\)\.]')
IDENTITY_PATTERN = re.compile(r'^\d{6,20}$')

# country code -> (national number length, allowed leading digits)
COUNTRY_RULES = {
    '90': (10, '5'),        # Turkey: mobile numbers start with 5
    '91': (10, '6789'),     # India
    '1': (10, None),        # US/Canada
    '44': (10, None),       # UK
    '49': (11, None),       # Germany
}

COUNTRY_NAMES = {
    '90': 'Turkish', '91': 'Indian', '1': 'US/Canada', '44': 'UK', '49': 'German'
}

# longest first so "+90..." is not read as an unknown three-digit code
KNOWN_CODES = sorted(COUNTRY_RULES, key=len, reverse=True)


def validate_phone_with_feedback(phone: str) -> Tuple[bool, str, str]:
    """
    Validate a phone number with a country code.
    Returns: (is_valid, formatted_phone, error_message)
    """
    cleaned = CLEANUP_PATTERN.sub('', phone)

    if not cleaned.startswith('+'):
        return False, phone, "Phone must include country code starting with +. Example: +90-5321234567"

    match = PHONE_PATTERN.match(cleaned)
    if not match:
        return False, phone, "Invalid format. Use: +[country code][number]"

    digits = cleaned[1:]
    country_code = next((code for code in KNOWN_CODES if digits.startswith(code)), match.group(1))
    number = digits[len(country_code):]
    num_len = len(number)

    if country_code in COUNTRY_RULES:
        expected_len, valid_starts = COUNTRY_RULES[country_code]

        if num_len != expected_len:
            country = COUNTRY_NAMES.get(country_code, f"+{country_code}")
            return False, phone, f"{country} numbers need {expected_len} digits. You provided {num_len}."

        if valid_starts and number[0] not in valid_starts:
            country = COUNTRY_NAMES[country_code]
            return False, phone, f"{country} mobile numbers must start with one of: {', '.join(valid_starts)}."

        return True, f"+{country_code}-{number}", ""

    if 7 <= num_len <= 15:
        return True, f"+{country_code}-{number}", ""

    if num_len < 7:
        return False, phone, "Phone number too short. Need at least 7 digits after country code."
    return False, phone, "Phone number too long. Maximum 15 digits."


def validate_national_identity(value: str) -> bool:
    """National identity numbers are digits only"""
    return bool(IDENTITY_PATTERN.match(value.strip()))


def validate_local_time(value: time) -> time:
    """Clinic hours are wall-clock times; offsets cannot be compared with stored schedules"""
    if value is not None and value.tzinfo is not None:
        raise ValueError("Time must not carry a UTC offset; use the clinic's local time")
    return value
