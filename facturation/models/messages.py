"""
Table de localisation des messages d'erreur de saisie.
Les validateurs ne renvoient que des codes ; le texte est résolu ici selon la langue.
"""

from enum import Enum

LANGUE_PAR_DEFAUT = "fr"


class MessageCode(str, Enum):
    REQUIRED_FIELD = "required_field"
    ITEM_DESCRIPTION = "item_description"
    ITEM_QUANTITY = "item_quantity"
    ITEM_UNIT_PRICE = "item_unit_price"
    ITEM_VAT_RATE = "item_vat_rate"
    ITEM_VAT_EXEMPTION_REQUIRED = "item_vat_exemption_required"
    ITEM_UNIT = "item_unit"
    ITEM_DISCOUNT = "item_discount"
    DISCOUNT_PERCENTAGE = "discount_percentage"
    DISCOUNT_FIXED = "discount_fixed"
    ISSUE_DATE_REQUIRED = "issue_date_required"
    DUE_DATE_REQUIRED = "due_date_required"
    DUE_DATE_AFTER_ISSUE_DATE = "due_date_after_issue_date"
    VALID_UNTIL_REQUIRED = "valid_until_required"
    VALID_UNTIL_AFTER_ISSUE_DATE = "valid_until_after_issue_date"
    EXECUTION_DATE_AFTER_ISSUE_DATE = "execution_date_after_issue_date"
    INVOICE_PREFIX = "invoice_prefix"
    INVOICE_NUMBER = "invoice_number"
    PURCHASE_ORDER = "purchase_order"
    HEADER_NOTES = "header_notes"
    FOOTER_NOTES = "footer_notes"
    TERMS_AND_CONDITIONS = "terms_and_conditions"
    TERMS_AND_CONDITIONS_LINK_TITLE = "terms_and_conditions_link_title"
    TERMS_AND_CONDITIONS_LINK = "terms_and_conditions_link"
    CUSTOM_FIELD_NAME = "custom_field_name"
    CUSTOM_FIELD_VALUE = "custom_field_value"
    EMAIL = "email"
    SIRET = "siret"
    VAT_NUMBER = "vat_number"
    CLIENT_NAME = "client_name"
    STREET = "street"
    CITY = "city"
    POSTAL_CODE = "postal_code"
    COUNTRY = "country"


MESSAGES: dict[str, dict[MessageCode, str]] = {
    "fr": {
        MessageCode.REQUIRED_FIELD: "Ce champ est requis",
        MessageCode.ITEM_DESCRIPTION: "La description de l'article doit contenir entre 1 et 200 caractères",
        MessageCode.ITEM_QUANTITY: "La quantité doit être un nombre strictement positif",
        MessageCode.ITEM_UNIT_PRICE: "Le prix unitaire doit être un nombre strictement positif",
        MessageCode.ITEM_VAT_RATE: "Le taux de TVA doit être un pourcentage valide (entre 0 et 100)",
        MessageCode.ITEM_VAT_EXEMPTION_REQUIRED: (
            "Une mention d'exemption de TVA est requise lorsque le taux de TVA est à 0%"
        ),
        MessageCode.ITEM_UNIT: "L'unité doit contenir entre 1 et 20 caractères",
        MessageCode.ITEM_DISCOUNT: "La remise doit être un nombre positif ou nul",
        MessageCode.DISCOUNT_PERCENTAGE: "Le pourcentage de remise doit être compris entre 0 et 100",
        MessageCode.DISCOUNT_FIXED: "Le montant de la remise doit être un nombre positif ou nul",
        MessageCode.ISSUE_DATE_REQUIRED: "La date d'émission est requise",
        MessageCode.DUE_DATE_REQUIRED: "La date d'échéance est requise",
        MessageCode.DUE_DATE_AFTER_ISSUE_DATE: (
            "La date d'échéance doit être postérieure ou égale à la date d'émission"
        ),
        MessageCode.VALID_UNTIL_REQUIRED: "La date de validité est requise",
        MessageCode.VALID_UNTIL_AFTER_ISSUE_DATE: (
            "La date de validité doit être postérieure ou égale à la date d'émission"
        ),
        MessageCode.EXECUTION_DATE_AFTER_ISSUE_DATE: (
            "La date d'exécution doit être postérieure ou égale à la date d'émission"
        ),
        MessageCode.INVOICE_PREFIX: (
            "Le préfixe doit contenir entre 1 et 10 caractères (lettres, chiffres, tirets ou underscores)"
        ),
        MessageCode.INVOICE_NUMBER: (
            "Le numéro doit contenir entre 1 et 20 caractères (lettres, chiffres, tirets ou underscores)"
        ),
        MessageCode.PURCHASE_ORDER: (
            "Le numéro de commande ne doit pas dépasser 50 caractères (lettres, chiffres, tirets ou underscores)"
        ),
        MessageCode.HEADER_NOTES: (
            "Les notes d'entête ne doivent pas dépasser 1000 caractères et contenir uniquement des caractères valides"
        ),
        MessageCode.FOOTER_NOTES: (
            "Les notes de pied ne doivent pas dépasser 2000 caractères et contenir uniquement des caractères valides"
        ),
        MessageCode.TERMS_AND_CONDITIONS: "Les conditions générales ne doivent pas dépasser 2000 caractères",
        MessageCode.TERMS_AND_CONDITIONS_LINK_TITLE: (
            "Le titre du lien doit contenir entre 1 et 100 caractères et ne peut contenir que des lettres, "
            "chiffres, espaces et certains caractères spéciaux"
        ),
        MessageCode.TERMS_AND_CONDITIONS_LINK: (
            "Veuillez fournir une URL valide pour le lien des conditions générales"
        ),
        MessageCode.CUSTOM_FIELD_NAME: (
            "Le nom du champ doit contenir entre 2 et 50 caractères (lettres, espaces, tirets ou apostrophes)"
        ),
        MessageCode.CUSTOM_FIELD_VALUE: (
            "La valeur contient des caractères non autorisés ou dépasse 500 caractères"
        ),
        MessageCode.EMAIL: "Adresse email invalide",
        MessageCode.SIRET: "Le SIRET doit contenir 14 chiffres",
        MessageCode.VAT_NUMBER: "Le numéro de TVA doit être au format FR suivi de 11 chiffres",
        MessageCode.CLIENT_NAME: "Le nom doit contenir entre 2 et 50 caractères",
        MessageCode.STREET: "L'adresse doit contenir entre 3 et 100 caractères",
        MessageCode.CITY: "La ville doit contenir entre 2 et 50 caractères",
        MessageCode.POSTAL_CODE: "Le code postal doit être un code postal français valide (5 chiffres)",
        MessageCode.COUNTRY: "Le pays doit contenir entre 2 et 50 caractères",
    },
    "en": {
        MessageCode.REQUIRED_FIELD: "This field is required",
        MessageCode.ITEM_DESCRIPTION: "The item description must contain between 1 and 200 characters",
        MessageCode.ITEM_QUANTITY: "The quantity must be a strictly positive number",
        MessageCode.ITEM_UNIT_PRICE: "The unit price must be a strictly positive number",
        MessageCode.ITEM_VAT_RATE: "The VAT rate must be a valid percentage (between 0 and 100)",
        MessageCode.ITEM_VAT_EXEMPTION_REQUIRED: "A VAT exemption mention is required when the VAT rate is 0%",
        MessageCode.ITEM_UNIT: "The unit must contain between 1 and 20 characters",
        MessageCode.ITEM_DISCOUNT: "The discount must be a positive number or zero",
        MessageCode.DISCOUNT_PERCENTAGE: "The discount percentage must be between 0 and 100",
        MessageCode.DISCOUNT_FIXED: "The discount amount must be a positive number or zero",
        MessageCode.ISSUE_DATE_REQUIRED: "The issue date is required",
        MessageCode.DUE_DATE_REQUIRED: "The due date is required",
        MessageCode.DUE_DATE_AFTER_ISSUE_DATE: "The due date must be on or after the issue date",
        MessageCode.VALID_UNTIL_REQUIRED: "The validity date is required",
        MessageCode.VALID_UNTIL_AFTER_ISSUE_DATE: "The validity date must be on or after the issue date",
        MessageCode.EXECUTION_DATE_AFTER_ISSUE_DATE: "The execution date must be on or after the issue date",
        MessageCode.INVOICE_PREFIX: (
            "The prefix must contain between 1 and 10 characters (letters, digits, dashes or underscores)"
        ),
        MessageCode.INVOICE_NUMBER: (
            "The number must contain between 1 and 20 characters (letters, digits, dashes or underscores)"
        ),
        MessageCode.PURCHASE_ORDER: (
            "The purchase order number must not exceed 50 characters (letters, digits, dashes or underscores)"
        ),
        MessageCode.HEADER_NOTES: "Header notes must not exceed 1000 characters and contain only valid characters",
        MessageCode.FOOTER_NOTES: "Footer notes must not exceed 2000 characters and contain only valid characters",
        MessageCode.TERMS_AND_CONDITIONS: "Terms and conditions must not exceed 2000 characters",
        MessageCode.TERMS_AND_CONDITIONS_LINK_TITLE: (
            "The link title must contain between 1 and 100 letters, digits, spaces or common punctuation"
        ),
        MessageCode.TERMS_AND_CONDITIONS_LINK: "Please provide a valid URL for the terms and conditions link",
        MessageCode.CUSTOM_FIELD_NAME: (
            "The field name must be 2 to 50 characters long (letters, spaces, hyphens or apostrophes)"
        ),
        MessageCode.CUSTOM_FIELD_VALUE: "The value contains forbidden characters or exceeds 500 characters",
        MessageCode.EMAIL: "Invalid email address",
        MessageCode.SIRET: "The SIRET must contain 14 digits",
        MessageCode.VAT_NUMBER: "The VAT number must be FR followed by 11 digits",
        MessageCode.CLIENT_NAME: "The name must contain between 2 and 50 characters",
        MessageCode.STREET: "The address must contain between 3 and 100 characters",
        MessageCode.CITY: "The city must contain between 2 and 50 characters",
        MessageCode.POSTAL_CODE: "The postal code must be a valid French postal code (5 digits)",
        MessageCode.COUNTRY: "The country must contain between 2 and 50 characters",
    },
}


def get_message(code: MessageCode, langue: str = LANGUE_PAR_DEFAUT) -> str:
    """Retourne le texte du message ; repli sur le français si la langue est inconnue."""
    table = MESSAGES.get(langue, MESSAGES[LANGUE_PAR_DEFAUT])
    return table.get(code, MESSAGES[LANGUE_PAR_DEFAUT][code])
