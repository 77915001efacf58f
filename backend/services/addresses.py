from typing import Any, Dict, Optional

import pycountry
from unidecode import unidecode

from schemas import Customer, MailingAddress

ADDRESS_FIELDS = ("address1", "address2", "city", "country", "province", "zip")
NAME_FIELDS = ("first_name", "last_name")


def _fold(value: Any) -> str:
    if value is None:
        return ""
    text = unidecode(str(value))
    return " ".join(text.split()).lower()


def _country_code(value: Any) -> str:
    folded = _fold(value)
    if not folded:
        return ""
    try:
        country = pycountry.countries.lookup(folded)
    except LookupError:
        return folded
    return country.alpha_2.lower()


def normalize_address(
    address: Optional[MailingAddress],
    customer: Optional[Customer],
) -> Optional[Dict[str, str]]:
    """Comparable form of a shipping address.

    The name always comes from the customer record, not the address itself, so two
    orders of the same customer only differ on the postal fields. Missing and blank
    values compare equal; text is transliterated to ASCII, trimmed, whitespace
    collapsed and lower-cased. Countries become their ISO alpha-2 code when known.
    """
    if address is None:
        return None
    normalized = {
        "first_name": _fold(customer.first_name if customer else None),
        "last_name": _fold(customer.last_name if customer else None),
    }
    for name in ADDRESS_FIELDS:
        value = getattr(address, name)
        normalized[name] = _country_code(value) if name == "country" else _fold(value)
    return normalized


def addresses_match(
    first: Optional[Dict[str, str]],
    second: Optional[Dict[str, str]],
) -> bool:
    if not first or not second:
        return False
    return all(
        first.get(name) == second.get(name) for name in NAME_FIELDS + ADDRESS_FIELDS
    )
