"""Helper pour le logging structuré JSON dans les services applicatifs."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional


def log_structured_event(
    action: str,
    *,
    message: Optional[str] = None,
    level: str = "info",
    **fields: Any,
) -> None:
    """Enregistre un événement métier via le logger configuré dans ``extensions``.

    Le formatter JSON est déjà posé sur le root logger par ``app.extensions`` ;
    les champs passés en mots-clés se retrouvent sous la clé ``extra``.
    Un échec de sérialisation ne doit pas interrompre l'opération métier.
    """

    logger = logging.getLogger("app.events")
    log_method = getattr(logger, level.lower(), logger.info)

    payload: Dict[str, Any] = {"action": action}
    payload.update(fields)

    try:
        log_method(message or "Événement métier", extra=payload)
    except Exception:
        logger.debug("Échec du logging structuré", exc_info=True)
