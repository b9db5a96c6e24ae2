"""
Calcul du récapitulatif HT / TVA / TTC d'un document à partir de ses lignes.

Ordre de calcul :
1. total HT de chaque ligne après sa remise propre ;
2. somme des lignes, puis remise globale du document ;
3. ventilation par taux de TVA, la remise globale étant répartie au prorata des bases ;
4. TTC final = HT final + TVA.
"""

import logging
from typing import Iterable, Optional, Union

from facturation.models.constants import MONTANT_TOLERANCE, DiscountType, TotalsMismatchError
from facturation.models.schemas import Discount, DocumentTotals, LineItem, VatRateTotal
from facturation.services.line_items import apply_discount, compute_item_totals
from facturation.services.normalization import as_number

logger = logging.getLogger(__name__)


def compute_document_totals(
    items: Iterable[LineItem],
    document_discount: Union[Discount, float, None] = None,
    document_discount_type: DiscountType = DiscountType.PERCENTAGE,
) -> DocumentTotals:
    """
    Calcule les totaux d'un document. Ne lève jamais, même sur des lignes non validées,
    pour que l'aperçu reste affichable pendant la saisie.
    """
    if isinstance(document_discount, Discount):
        document_discount_type = document_discount.type
        document_discount = document_discount.value

    # Regroupement par valeur exacte du taux, dans l'ordre d'apparition
    bases: dict[float, float] = {}
    total_ht = 0.0
    for item in items:
        after = compute_item_totals(item).line_total_after_discount
        rate = as_number(item.vat_rate)
        bases[rate] = bases.get(rate, 0.0) + after
        total_ht += after

    discount_amount = apply_discount(total_ht, document_discount, document_discount_type)
    final_total_ht = total_ht - discount_amount

    ratio = 1.0
    if discount_amount and total_ht:
        ratio = final_total_ht / total_ht
    elif discount_amount:
        logger.warning("Remise globale de %.2f sur un total HT nul : pas de répartition", discount_amount)

    vat_rates = []
    undiscounted_vat = 0.0
    for rate, base in bases.items():
        vat_rates.append(
            VatRateTotal(rate=rate, base_amount=base * ratio, amount=base * ratio * rate / 100)
        )
        undiscounted_vat += base * rate / 100
    total_vat = sum(v.amount for v in vat_rates)

    if final_total_ht < 0:
        logger.warning("Total HT final négatif (%.2f) : remise supérieure au total", final_total_ht)

    return DocumentTotals(
        total_ht=total_ht,
        discount_amount=discount_amount,
        final_total_ht=final_total_ht,
        vat_rates=vat_rates,
        total_vat=total_vat,
        total_ttc=total_ht + undiscounted_vat,
        final_total_ttc=final_total_ht + total_vat,
    )


def verify_submitted_totals(
    submitted: DocumentTotals,
    items: Iterable[LineItem],
    document_discount: Optional[Discount] = None,
    tolerance: float = MONTANT_TOLERANCE,
) -> DocumentTotals:
    """
    Vérifie qu'un récapitulatif soumis correspond au recalcul des lignes (tolérance d'arrondi).
    Lève TotalsMismatchError au premier écart ; retourne les totaux recalculés sinon.
    """
    expected = compute_document_totals(items, document_discount)
    for field in ("total_ht", "discount_amount", "final_total_ht", "total_vat", "final_total_ttc"):
        got = getattr(submitted, field)
        want = getattr(expected, field)
        ecart = abs(got - want)
        if ecart > tolerance:
            raise TotalsMismatchError(
                f"{field} soumis = {got:.2f} != recalcul {want:.2f} (écart {ecart:.2f})",
                field,
                got,
                want,
            )
    return expected
