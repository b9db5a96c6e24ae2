"""
Routes API de validation et de calcul des documents commerciaux.
Aucun état n'est conservé : chaque appel recalcule tout à partir de la saisie transmise.
"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from facturation.core.config import Settings, get_settings
from facturation.models.constants import DocumentKind, TotalsMismatchError
from facturation.models.schemas import (
    ClientIdentity,
    DateInput,
    Discount,
    DocumentHeader,
    DocumentTotals,
    LineItem,
    LineTotals,
    ValidationResult,
)
from facturation.services.clients import validate_client
from facturation.services.document_fields import validate_dates, validate_document_header, validate_quote_dates
from facturation.services.line_items import compute_item_totals, validate_items, validate_line_item
from facturation.services.normalization import format_amount
from facturation.services.numbering import default_prefix, next_number
from facturation.services.totals import compute_document_totals, verify_submitted_totals

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["facturation"])


class _Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ValidationResponse(_Payload):
    """Réponse des endpoints de validation : validité, erreurs typées et messages localisés."""

    is_valid: bool
    errors: dict[str, str] = Field(default_factory=dict, description="Nature de l'erreur par champ")
    messages: dict[str, str] = Field(default_factory=dict, description="Message localisé par champ")


def _to_response(result: ValidationResult, settings: Settings) -> ValidationResponse:
    return ValidationResponse(
        is_valid=result.is_valid,
        errors={field: error.kind.value for field, error in result.errors.items()},
        messages=result.messages(settings.langue_messages),
    )


class TotalsRequest(_Payload):
    items: list[LineItem] = Field(default_factory=list)
    discount: Optional[Discount] = None


class TotalsResponse(_Payload):
    totals: DocumentTotals
    affichage: dict[str, str] = Field(default_factory=dict, description="Montants formatés pour l'aperçu")


class VerificationRequest(TotalsRequest):
    submitted: DocumentTotals


class DatesRequest(_Payload):
    kind: DocumentKind = DocumentKind.INVOICE
    issue_date: DateInput = None
    due_date: DateInput = None
    execution_date: DateInput = None


class ClientRequest(_Payload):
    client: ClientIdentity
    is_new_client: bool = True


@router.post("/lignes/validation", response_model=ValidationResponse, summary="Valider une ligne d'article")
def validate_line(item: LineItem, settings: Settings = Depends(get_settings)) -> ValidationResponse:
    return _to_response(validate_line_item(item), settings)


@router.post("/lignes/totaux", response_model=LineTotals, summary="Calculer le total d'une ligne")
def line_totals(item: LineItem) -> LineTotals:
    return compute_item_totals(item)


@router.post(
    "/totaux",
    response_model=TotalsResponse,
    summary="Calculer le récapitulatif HT/TVA/TTC",
    description="Calcule toujours les totaux, même si des lignes sont invalides, pour alimenter l'aperçu.",
)
def document_totals(payload: TotalsRequest, settings: Settings = Depends(get_settings)) -> TotalsResponse:
    totals = compute_document_totals(payload.items, payload.discount)
    decimales = settings.decimales_affichage
    affichage = {
        "totalHT": format_amount(totals.total_ht, decimales),
        "discountAmount": format_amount(totals.discount_amount, decimales),
        "finalTotalHT": format_amount(totals.final_total_ht, decimales),
        "totalVAT": format_amount(totals.total_vat, decimales),
        "finalTotalTTC": format_amount(totals.final_total_ttc, decimales),
    }
    for vat in totals.vat_rates:
        affichage[f"TVA {vat.rate:g}%"] = format_amount(vat.amount, decimales)
    return TotalsResponse(totals=totals, affichage=affichage)


@router.post("/totaux/verification", response_model=DocumentTotals, summary="Vérifier des totaux avant enregistrement")
def verify_totals(payload: VerificationRequest) -> DocumentTotals:
    """
    Recalcule les totaux et les compare à ceux soumis par le formulaire.
    Renvoie 422 si un écart dépasse la tolérance d'arrondi.
    """
    try:
        return verify_submitted_totals(payload.submitted, payload.items, payload.discount)
    except TotalsMismatchError as e:
        logger.warning("Totaux soumis incohérents : %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e


@router.post("/dates/validation", response_model=ValidationResponse, summary="Valider les dates d'un document")
def validate_document_dates(payload: DatesRequest, settings: Settings = Depends(get_settings)) -> ValidationResponse:
    if payload.kind == DocumentKind.QUOTE:
        result = validate_quote_dates(payload.issue_date, payload.due_date)
    else:
        result = validate_dates(payload.issue_date, payload.due_date, payload.execution_date)
    return _to_response(result, settings)


@router.post("/entete/validation", response_model=ValidationResponse, summary="Valider l'entête d'un document")
def validate_header(header: DocumentHeader, settings: Settings = Depends(get_settings)) -> ValidationResponse:
    return _to_response(validate_document_header(header), settings)


@router.post("/document/validation", response_model=ValidationResponse, summary="Valider l'entête et toutes les lignes")
def validate_document(
    header: DocumentHeader,
    items: list[LineItem],
    settings: Settings = Depends(get_settings),
) -> ValidationResponse:
    result = validate_document_header(header).merge(validate_items(items))
    return _to_response(result, settings)


@router.post("/clients/validation", response_model=ValidationResponse, summary="Valider les coordonnées d'un client")
def validate_client_identity(payload: ClientRequest, settings: Settings = Depends(get_settings)) -> ValidationResponse:
    return _to_response(validate_client(payload.client, payload.is_new_client), settings)


@router.get("/taux-tva", response_model=list[float], summary="Taux de TVA proposés")
def vat_rate_options(settings: Settings = Depends(get_settings)) -> list[float]:
    return settings.taux_tva_proposes


@router.get("/numerotation/suivant", summary="Proposer le prochain numéro de document")
def suggest_number(
    kind: DocumentKind = DocumentKind.INVOICE,
    existants: list[str] = Query([], description="Numéros déjà attribués pour ce préfixe"),
    prefix: Optional[str] = None,
) -> dict[str, str]:
    return {
        "prefix": prefix or default_prefix(kind, date.today()),
        "number": next_number(existants),
    }
