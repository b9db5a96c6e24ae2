"""
Application FastAPI : moteur de calcul et de validation des factures et devis (droit français).
Le service est sans état : chaque requête porte le document complet à contrôler.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from facturation.api.routes import router
from facturation.core.config import Settings, get_settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(
        "Facturation démarrée (langue=%s, taux TVA=%s, origines CORS=%s).",
        settings.langue_messages,
        settings.taux_tva_proposes,
        settings.cors_origins,
    )
    yield


app = FastAPI(
    title="Facturation",
    description="Validation des saisies et calcul des totaux HT/TVA/TTC des factures et devis.",
    version="0.1.0",
    lifespan=lifespan,
)

# Le formulaire de saisie appelle l'API depuis le navigateur ; aucun cookie n'est échangé
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)

app.include_router(router)


@app.get("/health")
def health(settings: Settings = Depends(get_settings)):
    """État du service et langue des messages d'erreur."""
    return {"status": "ok", "version": app.version, "langue": settings.langue_messages}
