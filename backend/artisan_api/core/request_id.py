from __future__ import annotations

import re
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

"""
Request ID (X-Request-Id).

Rôle (fonctionnel) :
- Associe chaque requête HTTP à un identifiant, repris du header X-Request-Id du client
  s’il est exploitable, sinon généré (UUID4).
- Le rend lisible par les logs (RequestIdFilter) le temps du traitement, puis restaure
  la valeur précédente à la sortie de `request_id_scope`.

Notes :
- Un header trop long ou contenant autre chose que [A-Za-z0-9._:-] est remplacé :
  la valeur est renvoyée telle quelle dans la réponse et dans les lignes de log.
"""

MAX_REQUEST_ID_LENGTH = 128
_SAFE_REQUEST_ID_RE = re.compile(r"[A-Za-z0-9._:-]+")

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    return _request_id.get()


def accept_request_id(incoming: str | None) -> str:
    """Header entrant nettoyé s’il est sûr, sinon un nouvel UUID."""
    rid = (incoming or "").strip()
    if rid and len(rid) <= MAX_REQUEST_ID_LENGTH and _SAFE_REQUEST_ID_RE.fullmatch(rid):
        return rid
    return str(uuid.uuid4())


@contextmanager
def request_id_scope(incoming: str | None = None) -> Iterator[str]:
    """Fixe le request_id pour la durée du bloc et le restaure ensuite."""
    token = _request_id.set(accept_request_id(incoming))
    try:
        yield _request_id.get()
    finally:
        _request_id.reset(token)
