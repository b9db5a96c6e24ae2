import re
from enum import Enum

MONTANT_TOLERANCE = 0.005

TAUX_TVA_PROPOSES = [20.0, 10.0, 5.5, 2.1, 0.0]

NUMERO_LONGUEUR = 6

# Jeux de caractères repris des formulaires de facturation
_LETTRES = "A-Za-zÀ-ÖØ-öø-ÿ"

ITEM_DESCRIPTION_PATTERN = re.compile(rf"[{_LETTRES}0-9\s.,;:!?@#$%&*()\[\]\-_+='\"/\\]{{1,200}}")
UNIT_PATTERN = re.compile(rf"[{_LETTRES}0-9\s./\-²³]{{1,20}}")

INVOICE_PREFIX_PATTERN = re.compile(r"[A-Za-z0-9\-_]{1,10}")
INVOICE_NUMBER_PATTERN = re.compile(r"[A-Za-z0-9\-_]{1,20}")
PURCHASE_ORDER_PATTERN = re.compile(r"[A-Za-z0-9\-_]{0,50}")

NOTES_PATTERN = re.compile(rf"[{_LETTRES}0-9\s.,;:!?@#$%&*()\[\]\-_+='\"\\]{{0,1000}}")
FOOTER_NOTES_MAX_LENGTH = 2000
TERMS_AND_CONDITIONS_MAX_LENGTH = 2000
URL_MAX_LENGTH = 2048

TERMS_AND_CONDITIONS_LINK_TITLE_PATTERN = re.compile(rf"[{_LETTRES}0-9\s.,;:!?@#$%&*()\[\]\-_+='\"]{{1,100}}")
URL_PATTERN = re.compile(
    r"(https?://)?"
    r"(([a-z\d](?:[a-z\d-]*[a-z\d])?\.)+[a-z]{2,}|((\d{1,3}\.){3}\d{1,3}))"
    r"(:\d+)?(/[-a-z\d%_.~+]*)*(\?[;&a-z\d%_.~+=-]*)?(#[-a-z\d_]*)?",
    re.IGNORECASE,
)

CUSTOM_FIELD_NAME_PATTERN = re.compile(rf"[{_LETTRES}\s\-']{{2,50}}")
CUSTOM_FIELD_VALUE_PATTERN = re.compile(
    rf"[{_LETTRES}0-9\s.,;:!?@#$%&*()\[\]\-_+='\"/\\€£¥₽¢₩₴₦₱₸₺₼₾₿]{{1,500}}"
)

EMAIL_PATTERN = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE)
SIRET_PATTERN = re.compile(r"[0-9]{14}")
VAT_PATTERN = re.compile(r"FR[0-9]{11}")
CLIENT_NAME_PATTERN = re.compile(rf"[{_LETTRES}\s\-']{{2,50}}")
STREET_PATTERN = re.compile(rf"[{_LETTRES}0-9\s,'\-.]{{3,100}}")
CITY_PATTERN = re.compile(rf"[{_LETTRES}\s'\-.]{{2,50}}")
POSTAL_CODE_PATTERN = re.compile(r"(0[1-9]|[1-8]\d|9[0-8])\d{3}")
COUNTRY_PATTERN = re.compile(rf"[{_LETTRES}\s'\-.]{{2,50}}")


class DiscountType(str, Enum):
    """Type de remise : pourcentage du montant ou montant fixe en euros."""

    PERCENTAGE = "PERCENTAGE"
    FIXED = "FIXED"


class DocumentKind(str, Enum):
    INVOICE = "INVOICE"
    QUOTE = "QUOTE"


class ErrorKind(str, Enum):
    """Nature d'une erreur de saisie, indépendante de la langue du message."""

    REQUIRED_FIELD = "RequiredField"
    PATTERN_MISMATCH = "PatternMismatch"
    RANGE_ERROR = "RangeError"
    ORDERING_VIOLATION = "OrderingViolation"
    MISSING_EXEMPTION_MENTION = "MissingExemptionMention"


class TotalsMismatchError(ValueError):
    """Erreur levée lorsque les totaux soumis ne correspondent pas au recalcul des lignes."""

    def __init__(self, message: str, field: str, submitted: float, expected: float):
        self.field = field
        self.submitted = submitted
        self.expected = expected
        super().__init__(message)
