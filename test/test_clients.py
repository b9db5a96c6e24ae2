"""
Tests unitaires de la validation des coordonnées client (clients.py).
"""

import pytest

from facturation.models.constants import ErrorKind
from facturation.models.messages import MessageCode
from facturation.models.schemas import ClientIdentity
from facturation.services.clients import validate_client, validate_email, validate_siret, validate_vat_number


def _client(**overrides):
    data = dict(
        name="Atelier Dupont-Lefèvre",
        email="contact@dupont.fr",
        street="12, rue de l'Église",
        city="Saint-Étienne",
        postal_code="42000",
        country="France",
    )
    data.update(overrides)
    return ClientIdentity(**data)


@pytest.mark.parametrize("siret, valid", [("73282932000074", True), ("7328293200007", False), ("7328293200007A", False)])
def test_siret(siret, valid):
    assert validate_siret(siret).is_valid is valid


@pytest.mark.parametrize("vat, valid", [("FR40303265045", True), ("FR4030326504", False), ("DE123456789", False)])
def test_vat_number(vat, valid):
    assert validate_vat_number(vat).is_valid is valid


def test_email():
    assert validate_email("Jean.Martin+devis@exemple.co").is_valid
    assert validate_email("jean@").error_for("email").code == MessageCode.EMAIL
    assert validate_email("", required=True).error_for("email").kind == ErrorKind.REQUIRED_FIELD


def test_valid_new_client():
    assert validate_client(_client(siret="73282932000074", vat_number="FR40303265045")).is_valid


@pytest.mark.parametrize("postal_code", ["00100", "99000", "7500", "2A004"])
def test_invalid_postal_codes(postal_code):
    result = validate_client(_client(postal_code=postal_code))
    assert result.error_for("postal_code").code == MessageCode.POSTAL_CODE


def test_new_client_requires_identity_fields():
    result = validate_client(ClientIdentity())
    assert set(result.errors) == {"name", "email", "street", "city", "postal_code", "country"}
    assert all(e.kind == ErrorKind.REQUIRED_FIELD for e in result.errors.values())


def test_existing_client_only_checks_filled_fields():
    assert validate_client(ClientIdentity(), is_new_client=False).is_valid
    result = validate_client(ClientIdentity(siret="123"), is_new_client=False)
    assert list(result.errors) == ["siret"]
