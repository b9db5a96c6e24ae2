"""
Validation des champs d'entête d'un document : dates, numérotation, notes,
conditions générales, remise globale et champs personnalisés.
"""

import logging
import unicodedata
from typing import Iterable, Optional

from facturation.models.constants import (
    CUSTOM_FIELD_NAME_PATTERN,
    CUSTOM_FIELD_VALUE_PATTERN,
    FOOTER_NOTES_MAX_LENGTH,
    INVOICE_NUMBER_PATTERN,
    INVOICE_PREFIX_PATTERN,
    NOTES_PATTERN,
    PURCHASE_ORDER_PATTERN,
    TERMS_AND_CONDITIONS_LINK_TITLE_PATTERN,
    TERMS_AND_CONDITIONS_MAX_LENGTH,
    URL_MAX_LENGTH,
    URL_PATTERN,
    DiscountType,
    DocumentKind,
    ErrorKind,
)
from facturation.models.messages import MessageCode
from facturation.models.schemas import (
    CustomField,
    DateInput,
    DateValidationResult,
    DocumentHeader,
    ValidationResult,
)
from facturation.services.normalization import is_nan, parse_iso_date

logger = logging.getLogger(__name__)


def validate_dates(
    issue_date: DateInput,
    due_date: DateInput,
    execution_date: DateInput = None,
    *,
    due_required_code: MessageCode = MessageCode.DUE_DATE_REQUIRED,
    due_order_code: MessageCode = MessageCode.DUE_DATE_AFTER_ISSUE_DATE,
) -> DateValidationResult:
    """
    Contrôle la présence des dates d'émission et d'échéance, et leur ordre :
    échéance >= émission, et exécution >= émission si elle est renseignée.
    Une date illisible est traitée comme absente.
    """
    result = DateValidationResult()
    issue = parse_iso_date(issue_date)
    due = parse_iso_date(due_date)
    execution = parse_iso_date(execution_date)

    if issue is None:
        result.add("issue_date", ErrorKind.REQUIRED_FIELD, MessageCode.ISSUE_DATE_REQUIRED)

    if due is None:
        result.add("due_date", ErrorKind.REQUIRED_FIELD, due_required_code)
    elif issue is not None and due < issue:
        result.add("due_date", ErrorKind.ORDERING_VIOLATION, due_order_code)

    if issue is not None and execution is not None and execution < issue:
        result.add(
            "execution_date",
            ErrorKind.ORDERING_VIOLATION,
            MessageCode.EXECUTION_DATE_AFTER_ISSUE_DATE,
        )
    return result


def validate_quote_dates(issue_date: DateInput, valid_until: DateInput) -> DateValidationResult:
    """Variante devis : la date de validité joue le rôle de l'échéance."""
    return validate_dates(
        issue_date,
        valid_until,
        due_required_code=MessageCode.VALID_UNTIL_REQUIRED,
        due_order_code=MessageCode.VALID_UNTIL_AFTER_ISSUE_DATE,
    )


def _check_pattern(
    result: ValidationResult,
    field: str,
    value: Optional[str],
    pattern,
    code: MessageCode,
    *,
    required: bool = False,
    max_length: Optional[int] = None,
) -> ValidationResult:
    if not value:
        if required:
            result.add(field, ErrorKind.REQUIRED_FIELD, MessageCode.REQUIRED_FIELD)
        return result
    if max_length is not None and len(value) > max_length:
        result.add(field, ErrorKind.PATTERN_MISMATCH, code)
    elif pattern is not None and not pattern.fullmatch(value):
        result.add(field, ErrorKind.PATTERN_MISMATCH, code)
    return result


def validate_prefix(prefix: Optional[str], required: bool = True) -> ValidationResult:
    return _check_pattern(
        ValidationResult(), "prefix", prefix, INVOICE_PREFIX_PATTERN, MessageCode.INVOICE_PREFIX,
        required=required, max_length=10,
    )


def validate_number(number: Optional[str], required: bool = True) -> ValidationResult:
    return _check_pattern(
        ValidationResult(), "number", number, INVOICE_NUMBER_PATTERN, MessageCode.INVOICE_NUMBER,
        required=required, max_length=20,
    )


def validate_purchase_order_number(value: Optional[str], required: bool = False) -> ValidationResult:
    return _check_pattern(
        ValidationResult(), "purchase_order_number", value, PURCHASE_ORDER_PATTERN,
        MessageCode.PURCHASE_ORDER, required=required, max_length=50,
    )


def validate_header_notes(value: Optional[str], required: bool = False) -> ValidationResult:
    return _check_pattern(
        ValidationResult(), "header_notes", value, NOTES_PATTERN, MessageCode.HEADER_NOTES,
        required=required, max_length=1000,
    )


# Catégories Unicode admises dans les notes de pied : lettres, chiffres, ponctuation, symboles, séparateurs
_FOOTER_CATEGORIES = ("L", "N", "P", "S", "Z")
_FOOTER_EXTRA_CHARS = "\t\n\r"


def _is_footer_text(value: str) -> bool:
    return all(
        c in _FOOTER_EXTRA_CHARS or unicodedata.category(c)[0] in _FOOTER_CATEGORIES
        for c in value
    )


def validate_footer_notes(value: Optional[str], required: bool = False) -> ValidationResult:
    result = ValidationResult()
    if not value:
        if required:
            result.add("footer_notes", ErrorKind.REQUIRED_FIELD, MessageCode.REQUIRED_FIELD)
        return result
    if len(value) > FOOTER_NOTES_MAX_LENGTH or not _is_footer_text(value):
        result.add("footer_notes", ErrorKind.PATTERN_MISMATCH, MessageCode.FOOTER_NOTES)
    return result


def validate_terms_and_conditions(
    terms_and_conditions: Optional[str] = None,
    link_title: Optional[str] = None,
    link: Optional[str] = None,
) -> ValidationResult:
    """Conditions générales : texte libre plafonné, titre et URL du lien facultatifs."""
    result = ValidationResult()
    if terms_and_conditions and len(terms_and_conditions) > TERMS_AND_CONDITIONS_MAX_LENGTH:
        result.add(
            "terms_and_conditions",
            ErrorKind.PATTERN_MISMATCH,
            MessageCode.TERMS_AND_CONDITIONS,
        )
    _check_pattern(
        result, "terms_and_conditions_link_title", link_title,
        TERMS_AND_CONDITIONS_LINK_TITLE_PATTERN, MessageCode.TERMS_AND_CONDITIONS_LINK_TITLE,
        max_length=100,
    )
    _check_pattern(
        result, "terms_and_conditions_link", link, URL_PATTERN, MessageCode.TERMS_AND_CONDITIONS_LINK,
        max_length=URL_MAX_LENGTH,
    )
    return result


def validate_custom_fields(fields: Iterable[CustomField]) -> ValidationResult:
    """
    Le nom d'un champ personnalisé : 2 à 50 lettres, espaces, tirets ou apostrophes.
    Sa valeur : motif générique, 500 caractères max. Un nom ou une valeur vide est ignoré.
    """
    result = ValidationResult()
    for index, field in enumerate(fields):
        _check_pattern(
            result, f"custom_fields[{index}].key", field.key,
            CUSTOM_FIELD_NAME_PATTERN, MessageCode.CUSTOM_FIELD_NAME,
        )
        _check_pattern(
            result, f"custom_fields[{index}].value", field.value,
            CUSTOM_FIELD_VALUE_PATTERN, MessageCode.CUSTOM_FIELD_VALUE,
        )
    return result


def validate_discount(
    value: Optional[float],
    discount_type: DiscountType = DiscountType.PERCENTAGE,
    field: str = "discount",
) -> ValidationResult:
    """Remise globale du document : positive ou nulle, et au plus 100 en pourcentage."""
    result = ValidationResult()
    if value is None:
        return result
    if is_nan(value) or value < 0:
        code = (
            MessageCode.DISCOUNT_PERCENTAGE
            if discount_type == DiscountType.PERCENTAGE
            else MessageCode.DISCOUNT_FIXED
        )
        result.add(field, ErrorKind.RANGE_ERROR, code)
    elif discount_type == DiscountType.PERCENTAGE and value > 100:
        result.add(field, ErrorKind.RANGE_ERROR, MessageCode.DISCOUNT_PERCENTAGE)
    return result


def validate_document_header(header: DocumentHeader) -> ValidationResult:
    """Exécute tous les contrôles d'entête et fusionne les erreurs."""
    if header.kind == DocumentKind.QUOTE:
        dates = validate_quote_dates(header.issue_date, header.due_date)
    else:
        dates = validate_dates(header.issue_date, header.due_date, header.execution_date)

    result = ValidationResult()
    result.merge(validate_prefix(header.prefix))
    result.merge(validate_number(header.number))
    result.merge(dates)
    result.merge(validate_purchase_order_number(header.purchase_order_number))
    result.merge(validate_header_notes(header.header_notes))
    result.merge(validate_footer_notes(header.footer_notes))
    result.merge(
        validate_terms_and_conditions(
            header.terms_and_conditions,
            header.terms_and_conditions_link_title,
            header.terms_and_conditions_link,
        )
    )
    result.merge(validate_custom_fields(header.custom_fields))
    if header.discount is not None:
        result.merge(validate_discount(header.discount.value, header.discount.type))

    if not result.is_valid:
        logger.debug("Entête %s %s%s invalide : %s", header.kind.value, header.prefix, header.number, sorted(result.errors))
    return result
