from schemas import Customer, MailingAddress
from services.addresses import addresses_match, normalize_address

CUSTOMER = Customer(id="gid://shopify/Customer/1", first_name="Zoë", last_name="Rivera")


def _address(**overrides) -> MailingAddress:
    fields = {
        "address1": "12 Pine St",
        "address2": None,
        "city": "Denver",
        "country": "United States",
        "province": "Colorado",
        "zip": "80202",
    }
    fields.update(overrides)
    return MailingAddress(**fields)


def test_missing_address_normalizes_to_none():
    assert normalize_address(None, CUSTOMER) is None


def test_name_comes_from_customer():
    normalized = normalize_address(_address(), CUSTOMER)
    assert normalized["first_name"] == "zoe"
    assert normalized["last_name"] == "rivera"


def test_missing_customer_gives_blank_name():
    normalized = normalize_address(_address(), None)
    assert normalized["first_name"] == ""
    assert normalized["last_name"] == ""


def test_case_and_whitespace_are_ignored():
    first = normalize_address(_address(address1="  12 PINE   St "), CUSTOMER)
    second = normalize_address(_address(), CUSTOMER)
    assert addresses_match(first, second)


def test_blank_and_missing_fields_are_equal():
    first = normalize_address(_address(address2=""), CUSTOMER)
    second = normalize_address(_address(address2=None), CUSTOMER)
    assert addresses_match(first, second)


def test_country_name_and_code_are_equal():
    first = normalize_address(_address(country="US"), CUSTOMER)
    second = normalize_address(_address(country="united states"), CUSTOMER)
    assert first["country"] == "us"
    assert addresses_match(first, second)


def test_unknown_country_is_kept_as_text():
    normalized = normalize_address(_address(country="Atlantis"), CUSTOMER)
    assert normalized["country"] == "atlantis"


def test_accents_are_transliterated():
    first = normalize_address(_address(city="Montréal"), CUSTOMER)
    second = normalize_address(_address(city="MONTREAL"), CUSTOMER)
    assert addresses_match(first, second)


def test_different_zip_does_not_match():
    first = normalize_address(_address(zip="80202"), CUSTOMER)
    second = normalize_address(_address(zip="80203"), CUSTOMER)
    assert not addresses_match(first, second)


def test_none_never_matches():
    normalized = normalize_address(_address(), CUSTOMER)
    assert not addresses_match(None, normalized)
    assert not addresses_match(normalized, None)
    assert not addresses_match(None, None)
