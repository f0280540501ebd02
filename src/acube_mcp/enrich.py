"""
FatturaPA payload helpers.

Invoices come back with `payload` holding the whole FatturaPA document as a
JSON-encoded string. Decoding it lets `strip_empty` reach the many null
fields inside, and the most requested values are lifted to the top level.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Tuple

DOCUMENT_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("invoice_number", "numero"),
    ("invoice_date", "data"),
    ("total_amount", "importo_totale_documento"),
    ("currency", "divisa"),
)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _decode_payload(raw: str) -> Tuple[bool, Any]:
    try:
        return True, json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        return False, None


def _general_document_data(document: Any) -> Optional[Dict[str, Any]]:
    """Return `fattura_elettronica_body[0].dati_generali.dati_generali_documento`."""
    if not isinstance(document, dict):
        return None
    bodies = document.get("fattura_elettronica_body")
    if not isinstance(bodies, list) or not bodies:
        return None
    body = bodies[0]
    if not isinstance(body, dict):
        return None
    general = body.get("dati_generali")
    if not isinstance(general, dict):
        return None
    doc = general.get("dati_generali_documento")
    return doc if isinstance(doc, dict) else None


def enrich_invoice(item: Any) -> Any:
    if not isinstance(item, dict) or not isinstance(item.get("payload"), str):
        return item

    ok, document = _decode_payload(item["payload"])
    if not ok:
        return item

    doc = _general_document_data(document) or {}
    enriched = dict(item)
    enriched["payload"] = document
    for target, source in DOCUMENT_FIELDS:
        enriched[target] = doc.get(source)
    return enriched


def enrich_invoices(data: Any) -> Any:
    """Enrich a single invoice or a list of invoices; anything else passes through."""
    if isinstance(data, list):
        return [enrich_invoice(item) for item in data]
    return enrich_invoice(data)


__all__ = ["DOCUMENT_FIELDS", "enrich_invoice", "enrich_invoices"]
