"""
Validation et calcul des lignes d'article d'une facture ou d'un devis.
"""

import logging
from typing import Iterable, Optional

from facturation.models.constants import (
    ITEM_DESCRIPTION_PATTERN,
    UNIT_PATTERN,
    DiscountType,
    ErrorKind,
)
from facturation.models.messages import MessageCode
from facturation.models.schemas import LineItem, LineTotals, ValidationResult
from facturation.services.normalization import as_number, is_nan

logger = logging.getLogger(__name__)


def validate_item(
    description: Optional[str],
    quantity: Optional[float],
    unit_price: Optional[float],
    vat_rate: Optional[float],
    unit: Optional[str],
    discount: Optional[float] = None,
    discount_type: DiscountType = DiscountType.PERCENTAGE,
    vat_exemption_text: Optional[str] = None,
) -> ValidationResult:
    """
    Valide une ligne d'article. Toutes les règles sont évaluées et toutes les erreurs remontées.

    Si le taux de TVA vaut exactement 0, seule la mention d'exemption est contrôlée ;
    sinon le taux est contrôlé sur [0, 100]. Les deux erreurs sont donc exclusives.
    """
    result = ValidationResult()

    if not description:
        result.add("description", ErrorKind.REQUIRED_FIELD, MessageCode.REQUIRED_FIELD)
    elif not ITEM_DESCRIPTION_PATTERN.fullmatch(description):
        result.add("description", ErrorKind.PATTERN_MISMATCH, MessageCode.ITEM_DESCRIPTION)

    if quantity is None:
        result.add("quantity", ErrorKind.REQUIRED_FIELD, MessageCode.REQUIRED_FIELD)
    elif is_nan(quantity) or quantity <= 0:
        result.add("quantity", ErrorKind.RANGE_ERROR, MessageCode.ITEM_QUANTITY)

    if unit_price is None:
        result.add("unit_price", ErrorKind.REQUIRED_FIELD, MessageCode.REQUIRED_FIELD)
    elif is_nan(unit_price) or unit_price <= 0:
        result.add("unit_price", ErrorKind.RANGE_ERROR, MessageCode.ITEM_UNIT_PRICE)

    if vat_rate == 0:
        if not vat_exemption_text or not vat_exemption_text.strip():
            result.add(
                "vat_exemption_text",
                ErrorKind.MISSING_EXEMPTION_MENTION,
                MessageCode.ITEM_VAT_EXEMPTION_REQUIRED,
            )
    elif vat_rate is None or is_nan(vat_rate) or vat_rate < 0 or vat_rate > 100:
        result.add("vat_rate", ErrorKind.RANGE_ERROR, MessageCode.ITEM_VAT_RATE)

    if not unit:
        result.add("unit", ErrorKind.REQUIRED_FIELD, MessageCode.REQUIRED_FIELD)
    elif not UNIT_PATTERN.fullmatch(unit):
        result.add("unit", ErrorKind.PATTERN_MISMATCH, MessageCode.ITEM_UNIT)

    if discount is not None:
        if is_nan(discount) or discount < 0:
            result.add("discount", ErrorKind.RANGE_ERROR, MessageCode.ITEM_DISCOUNT)
        elif discount_type == DiscountType.PERCENTAGE and discount > 100:
            result.add("discount", ErrorKind.RANGE_ERROR, MessageCode.DISCOUNT_PERCENTAGE)

    if not result.is_valid:
        logger.debug("Ligne invalide : %s", sorted(result.errors))
    return result


def validate_line_item(item: LineItem) -> ValidationResult:
    """Valide un enregistrement LineItem (la remise absente n'est pas contrôlée)."""
    return validate_item(
        item.description,
        item.quantity,
        item.unit_price,
        item.vat_rate,
        item.unit,
        discount=item.discount.value if item.discount else None,
        discount_type=item.discount.type if item.discount else DiscountType.PERCENTAGE,
        vat_exemption_text=item.vat_exemption_text,
    )


def validate_items(items: Iterable[LineItem]) -> ValidationResult:
    """Valide toutes les lignes ; les erreurs sont indexées sous la forme items[i].champ."""
    result = ValidationResult()
    for index, item in enumerate(items):
        result.merge(validate_line_item(item), prefix=f"items[{index}].")
    return result


def compute_line_total(
    quantity: Optional[float],
    unit_price: Optional[float],
    discount: Optional[float] = None,
    discount_type: DiscountType = DiscountType.PERCENTAGE,
) -> LineTotals:
    """
    Calcule le total HT d'une ligne avant et après remise.
    Ne lève jamais : une remise fixe supérieure au total donne un montant négatif.
    """
    line_total = as_number(quantity) * as_number(unit_price)
    discount_amount = apply_discount(line_total, discount, discount_type)
    after = line_total - discount_amount
    if after < 0:
        logger.warning(
            "Total de ligne négatif après remise (%.2f - %.2f = %.2f)",
            line_total,
            discount_amount,
            after,
        )
    return LineTotals(
        line_total=line_total,
        discount_amount=discount_amount,
        line_total_after_discount=after,
    )


def compute_item_totals(item: LineItem) -> LineTotals:
    if item.discount is None:
        return compute_line_total(item.quantity, item.unit_price)
    return compute_line_total(
        item.quantity,
        item.unit_price,
        item.discount.value,
        item.discount.type,
    )


def apply_discount(
    amount: float,
    discount: Optional[float],
    discount_type: Optional[DiscountType],
) -> float:
    """Montant de la remise sur `amount` : pourcentage du montant, ou valeur fixe non plafonnée."""
    if discount is None or discount <= 0:
        return 0.0
    if discount_type == DiscountType.PERCENTAGE:
        return amount * discount / 100
    return float(discount)
