import pytest

from utils.helpers import (
    format_datetime,
    generate_password_hash,
    parse_limit,
    validate_email,
    validate_phone,
    verify_password,
)


def test_password_hash_roundtrip():
    hashed = generate_password_hash('admin123')
    assert hashed != generate_password_hash('admin123')
    assert verify_password('admin123', hashed)
    assert not verify_password('admin124', hashed)
    assert not verify_password('admin123', 'not-hex')
    assert not verify_password('admin123', 'abcd')


@pytest.mark.parametrize('phone, ok', [
    ('13800000000', True),
    ('+8613800000000', True),
    ('1234567', True),
    ('123456', False),
    ('138 0000 0000', False),
    ('', False),
])
def test_validate_phone(phone, ok):
    assert validate_phone(phone) is ok


@pytest.mark.parametrize('email, ok', [
    ('host@example.com', True),
    ('host.name+tag@example.co', True),
    ('host@', False),
    ('', False),
])
def test_validate_email(email, ok):
    assert validate_email(email) is ok


@pytest.mark.parametrize('value, expected', [(None, 50), ('', 50), ('10', 10), ('0', 0), ('-1', None), ('x', None)])
def test_parse_limit(value, expected):
    assert parse_limit(value, 50) == expected


def test_format_datetime():
    assert format_datetime('2024-05-01T08:30:00.123456') == '2024-05-01 08:30:00'
    assert format_datetime(None) == ''
