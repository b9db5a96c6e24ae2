"""
Fonctions utilitaires de normalisation des saisies de formulaire.
Nettoyage des chaînes (espaces, symboles) avant conversion en nombres ou dates.
Ces fonctions ne lèvent jamais.
"""

import math
import re
from datetime import date, datetime
from typing import Any, Optional, Union


def clean_amount_string(value: str) -> str:
    """
    Nettoie une chaîne représentant un montant avant conversion en float.
    Enlève espaces (y compris insécables), symbole euro et séparateurs de milliers, garde le décimal.
    """
    if not value or not isinstance(value, str):
        return value
    s = value.strip()
    s = re.sub(r"[\s\xa0 ]", "", s)
    s = s.replace(",", ".")
    # Garder uniquement chiffres, point décimal et éventuel signe
    s = re.sub(r"[^\d.\-+]", "", s)
    # Plusieurs points : le dernier est le séparateur décimal
    parts = s.split(".")
    if len(parts) > 2:
        s = "".join(parts[:-1]) + "." + parts[-1]
    return s.strip() or "0"


def parse_amount_input(value: Any) -> Any:
    """
    Pré-traitement des champs numériques saisis (quantité, prix, taux, remise).
    Une chaîne vide devient None (champ non renseigné) ; "1 234,50 €" devient 1234.5.
    Une chaîne sans chiffre exploitable est rendue telle quelle : Pydantic la rejettera.
    """
    if not isinstance(value, str):
        return value
    if not value.strip():
        return None
    if not re.search(r"\d", value):
        return value
    try:
        return float(clean_amount_string(value))
    except ValueError:
        return value


def as_number(value: Optional[float]) -> float:
    """None devient 0.0 ; les autres valeurs (NaN compris) sont conservées telles quelles."""
    if value is None:
        return 0.0
    return float(value)


def is_nan(value: Optional[float]) -> bool:
    return value is not None and math.isnan(value)


def parse_iso_date(value: Union[date, datetime, str, None]) -> Optional[date]:
    """
    Convertit une date ISO (YYYY-MM-DD, éventuellement suivie d'une heure) en date.
    Retourne None si la valeur est vide ou illisible.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    s = value.strip()
    try:
        return date.fromisoformat(s)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def format_amount(value: float, decimales: int = 2) -> str:
    """Formate un montant à la française pour l'aperçu : "1 234,50 €"."""
    s = f"{value:,.{decimales}f}"
    return s.replace(",", " ").replace(".", ",") + " €"
