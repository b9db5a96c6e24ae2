"""
Schémas Pydantic des documents commerciaux (factures, devis) et des résultats de calcul/validation.
Les champs sont sérialisés en camelCase pour correspondre au schéma de persistance.
"""

from datetime import date, datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

from facturation.models.constants import DiscountType, DocumentKind, ErrorKind
from facturation.models.messages import LANGUE_PAR_DEFAUT, MessageCode, get_message
from facturation.services.normalization import parse_amount_input

DateInput = Union[date, datetime, str, None]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Discount(CamelModel):
    """Remise appliquée à une ligne ou au document. L'absence de remise est représentée par None."""

    value: float = Field(..., description="Valeur de la remise (pourcentage ou montant en euros)")
    type: DiscountType = Field(DiscountType.PERCENTAGE, description="Type de remise")

    @field_validator("value", mode="before")
    @classmethod
    def parse_value(cls, value):
        return parse_amount_input(value)


class LineItem(CamelModel):
    """
    Une ligne d'article telle que saisie dans le formulaire.
    Aucune contrainte numérique ici : les valeurs invalides sont signalées par les validateurs.
    Les montants saisis en texte ("1 234,50 €") sont convertis avant validation.
    """

    description: str = ""
    quantity: Optional[float] = None
    unit_price: Optional[float] = None
    vat_rate: Optional[float] = None
    unit: str = ""
    discount: Optional[Discount] = None
    vat_exemption_text: Optional[str] = None

    @field_validator("quantity", "unit_price", "vat_rate", mode="before")
    @classmethod
    def parse_amounts(cls, value):
        return parse_amount_input(value)


class LineTotals(CamelModel):
    line_total: float = 0.0
    discount_amount: float = 0.0
    line_total_after_discount: float = 0.0


class VatRateTotal(CamelModel):
    """Ventilation de la TVA pour un taux donné."""

    rate: float
    base_amount: float = Field(..., description="Base HT du taux, après remises")
    amount: float = Field(..., description="Montant de TVA du taux")


class DocumentTotals(CamelModel):
    """Récapitulatif HT/TVA/TTC d'un document, recalculé à chaque modification."""

    total_ht: float = Field(0.0, alias="totalHT")
    discount_amount: float = 0.0
    final_total_ht: float = Field(0.0, alias="finalTotalHT")
    vat_rates: list[VatRateTotal] = Field(default_factory=list)
    total_vat: float = Field(0.0, alias="totalVAT")
    total_ttc: float = Field(0.0, alias="totalTTC")
    final_total_ttc: float = Field(0.0, alias="finalTotalTTC")

    @computed_field(alias="itemizeVat")
    @property
    def itemize_vat(self) -> bool:
        """True si plusieurs taux de TVA doivent être détaillés ligne par ligne."""
        return len(self.vat_rates) > 1


class CustomField(CamelModel):
    key: str = ""
    value: str = ""


class DocumentHeader(CamelModel):
    """Champs d'entête d'une facture ou d'un devis (due_date = date de validité pour un devis)."""

    kind: DocumentKind = DocumentKind.INVOICE
    prefix: str = ""
    number: str = ""
    issue_date: DateInput = None
    due_date: DateInput = None
    execution_date: DateInput = None
    purchase_order_number: Optional[str] = None
    header_notes: Optional[str] = None
    footer_notes: Optional[str] = None
    terms_and_conditions: Optional[str] = None
    terms_and_conditions_link_title: Optional[str] = None
    terms_and_conditions_link: Optional[str] = None
    discount: Optional[Discount] = None
    custom_fields: list[CustomField] = Field(default_factory=list)


class ClientIdentity(CamelModel):
    """Coordonnées d'un client (SIRET et numéro de TVA intracommunautaire facultatifs)."""

    name: str = ""
    email: str = ""
    street: str = ""
    city: str = ""
    postal_code: str = ""
    country: str = ""
    siret: Optional[str] = None
    vat_number: Optional[str] = None


class FieldError(CamelModel):
    kind: ErrorKind
    code: MessageCode

    def message(self, langue: str = LANGUE_PAR_DEFAUT) -> str:
        return get_message(self.code, langue)


class ValidationResult(CamelModel):
    """
    Résultat complet d'une validation : validité globale + erreurs par champ.
    Les validateurs ne lèvent jamais d'exception pour une saisie invalide.
    """

    errors: dict[str, FieldError] = Field(default_factory=dict)

    @computed_field(alias="isValid")
    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, field: str, kind: ErrorKind, code: MessageCode) -> None:
        self.errors[field] = FieldError(kind=kind, code=code)

    def error_for(self, field: str) -> Optional[FieldError]:
        return self.errors.get(field)

    def merge(self, other: "ValidationResult", prefix: str = "") -> "ValidationResult":
        """Ajoute les erreurs d'un autre résultat, en préfixant les noms de champs si demandé."""
        for field, error in other.errors.items():
            self.errors[f"{prefix}{field}"] = error
        return self

    def messages(self, langue: str = LANGUE_PAR_DEFAUT) -> dict[str, str]:
        return {field: error.message(langue) for field, error in self.errors.items()}


class DateValidationResult(ValidationResult):
    @property
    def issue_error(self) -> Optional[FieldError]:
        return self.error_for("issue_date")

    @property
    def due_error(self) -> Optional[FieldError]:
        return self.error_for("due_date")

    @property
    def execution_error(self) -> Optional[FieldError]:
        return self.error_for("execution_date")
