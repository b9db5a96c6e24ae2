"""
Aide à la numérotation séquentielle des factures et devis.
L'historique des numéros est fourni par l'appelant (la persistance est hors de ce module).
"""

from datetime import date
from typing import Iterable, Optional

from facturation.models.constants import NUMERO_LONGUEUR, DocumentKind

_PREFIX_LETTERS = {DocumentKind.INVOICE: "F", DocumentKind.QUOTE: "D"}


def default_prefix(kind: DocumentKind = DocumentKind.INVOICE, today: Optional[date] = None) -> str:
    """Préfixe par défaut au format F-AAAAMM- (facture) ou D-AAAAMM- (devis)."""
    today = today or date.today()
    return f"{_PREFIX_LETTERS[kind]}-{today.year}{today.month:02d}-"


def _numeric_value(number: str) -> int:
    try:
        return int(number)
    except (TypeError, ValueError):
        return 0


def next_number(existing_numbers: Iterable[str]) -> str:
    """
    Numéro suivant pour un préfixe : plus grand numéro existant + 1, complété à 6 chiffres.
    Les numéros non numériques comptent pour 0 ; sans historique on commence à 000001.
    """
    highest = max((_numeric_value(n) for n in existing_numbers), default=0)
    return str(highest + 1).zfill(NUMERO_LONGUEUR)
