import pytest

from barberbook.shared.validators import (
    slugify,
    to_whatsapp_number,
    validate_br_phone,
    validate_email,
    validate_hex_color,
    validate_time,
)


def test_br_phone_is_normalized_to_digits():
    assert validate_br_phone("+55 (11) 98765-4321") == "11987654321"
    assert validate_br_phone("(11) 3456-7890") == "1134567890"


def test_br_phone_rejects_short_numbers():
    with pytest.raises(ValueError):
        validate_br_phone("98765-4321")


def test_whatsapp_number_gets_country_code():
    assert to_whatsapp_number("(11) 98765-4321") == "5511987654321"
    assert to_whatsapp_number("5511987654321") == "5511987654321"
    assert to_whatsapp_number(None) is None


def test_email_is_lowercased():
    assert validate_email("  Joao@Example.COM ") == "joao@example.com"
    with pytest.raises(ValueError):
        validate_email("not-an-email")


def test_time_format():
    assert validate_time("09:30:00") == "09:30"
    with pytest.raises(ValueError):
        validate_time("9:30")
    with pytest.raises(ValueError):
        validate_time("24:00")


def test_hex_color():
    assert validate_hex_color("#1A2b3C") == "#1A2b3C"
    with pytest.raises(ValueError):
        validate_hex_color("red")


def test_slugify_strips_accents():
    assert slugify("Barbearia do João") == "barbearia-do-joao"
    assert slugify("  Corte & Estilo!! ") == "corte-estilo"
    assert slugify("!!!") == "barbearia"
