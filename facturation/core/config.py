"""
Configuration de l'application via variables d'environnement.
Utilise Pydantic BaseSettings pour le chargement et la validation.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from facturation.models.constants import TAUX_TVA_PROPOSES


class Settings(BaseSettings):
    """Paramètres de l'application chargés depuis l'environnement (préfixe FACTURATION_)."""

    model_config = SettingsConfigDict(
        env_prefix="FACTURATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    langue_messages: str = "fr"
    """Langue des messages d'erreur renvoyés par l'API (fr, en)."""

    taux_tva_proposes: list[float] = list(TAUX_TVA_PROPOSES)
    """Taux de TVA proposés dans les formulaires de saisie des lignes."""

    decimales_affichage: int = 2
    """Nombre de décimales des montants formatés pour l'aperçu."""

    cors_origins: list[str] = ["*"]
    """Origines autorisées à appeler l'API depuis le navigateur (JSON, ex: '["https://app.exemple.fr"]')."""


def get_settings() -> Settings:
    """Retourne l'instance des settings (singleton implicite via dépendance FastAPI)."""
    return Settings()
