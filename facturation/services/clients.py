"""
Validation des coordonnées client : identité, adresse française, SIRET et TVA intracommunautaire.
"""

import logging
from typing import Optional

from facturation.models.constants import (
    CITY_PATTERN,
    CLIENT_NAME_PATTERN,
    COUNTRY_PATTERN,
    EMAIL_PATTERN,
    POSTAL_CODE_PATTERN,
    SIRET_PATTERN,
    STREET_PATTERN,
    VAT_PATTERN,
    ErrorKind,
)
from facturation.models.messages import MessageCode
from facturation.models.schemas import ClientIdentity, ValidationResult

logger = logging.getLogger(__name__)


def _check(result: ValidationResult, field: str, value: Optional[str], pattern, code: MessageCode, required: bool):
    if not value:
        if required:
            result.add(field, ErrorKind.REQUIRED_FIELD, MessageCode.REQUIRED_FIELD)
    elif not pattern.fullmatch(value):
        result.add(field, ErrorKind.PATTERN_MISMATCH, code)
    return result


def validate_siret(siret: Optional[str], required: bool = False) -> ValidationResult:
    """SIRET : 14 chiffres, sans espaces."""
    return _check(ValidationResult(), "siret", siret, SIRET_PATTERN, MessageCode.SIRET, required)


def validate_vat_number(vat_number: Optional[str], required: bool = False) -> ValidationResult:
    """Numéro de TVA intracommunautaire français : FR suivi de 11 chiffres."""
    return _check(ValidationResult(), "vat_number", vat_number, VAT_PATTERN, MessageCode.VAT_NUMBER, required)


def validate_email(email: Optional[str], required: bool = True) -> ValidationResult:
    return _check(ValidationResult(), "email", email, EMAIL_PATTERN, MessageCode.EMAIL, required)


def validate_client(client: ClientIdentity, is_new_client: bool = True) -> ValidationResult:
    """
    Les champs d'identité et d'adresse ne sont obligatoires que pour un nouveau client ;
    un client existant sélectionné dans la liste n'est contrôlé que sur les valeurs saisies.
    """
    result = ValidationResult()
    _check(result, "name", client.name, CLIENT_NAME_PATTERN, MessageCode.CLIENT_NAME, is_new_client)
    result.merge(validate_email(client.email, required=is_new_client))
    _check(result, "street", client.street, STREET_PATTERN, MessageCode.STREET, is_new_client)
    _check(result, "city", client.city, CITY_PATTERN, MessageCode.CITY, is_new_client)
    _check(result, "postal_code", client.postal_code, POSTAL_CODE_PATTERN, MessageCode.POSTAL_CODE, is_new_client)
    _check(result, "country", client.country, COUNTRY_PATTERN, MessageCode.COUNTRY, is_new_client)
    result.merge(validate_siret(client.siret))
    result.merge(validate_vat_number(client.vat_number))

    if not result.is_valid:
        logger.debug("Client %r invalide : %s", client.name, sorted(result.errors))
    return result
