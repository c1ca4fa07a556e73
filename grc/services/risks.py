"""Risk register — create, update and list risks.

The risk score is a derived field stored on the record. It is computed on
create and recomputed from the effective likelihood and impact whenever an
update supplies either of them. Every create and update appends exactly one
audit entry.
"""

from __future__ import annotations

import uuid
from typing import Any

import structlog

from grc.auth import Caller
from grc.errors import InvalidState, NotFound
from grc.models.base import utcnow
from grc.schemas.enums import AuditAction, AuditEntityType, RiskStatus
from grc.schemas.risk import RiskControlCreate, RiskCreate, RiskUpdate
from grc.services.audit import record_audit
from grc.services.organizations import require_caller, require_membership
from grc.services.scoring import calculate_risk_score, risk_level
from grc.store import DataStore

logger = structlog.get_logger()


def create_risk(store: DataStore, caller: Caller | None, data: RiskCreate) -> str:
    """Register a risk with status "identified" and return its id."""
    membership = require_membership(store, caller, data.organization_id)
    user_id = membership["user_id"]

    risk_id = str(uuid.uuid4())
    score = calculate_risk_score(data.likelihood, data.impact)
    store.risks.insert({
        "id": risk_id,
        "organization_id": data.organization_id,
        "title": data.title,
        "description": data.description,
        "category": data.category,
        "likelihood": data.likelihood,
        "impact": data.impact,
        "risk_score": score,
        "status": RiskStatus.IDENTIFIED.value,
        "owner": data.owner,
        "due_date": data.due_date,
        "created_by": user_id,
        "last_updated": utcnow(),
    })

    record_audit(
        store,
        organization_id=data.organization_id,
        entity_type=AuditEntityType.RISK.value,
        entity_id=risk_id,
        action=AuditAction.CREATED.value,
        user_id=user_id,
    )
    logger.info(
        "risk_created",
        risk_id=risk_id,
        organization_id=data.organization_id,
        risk_score=score,
    )
    return risk_id


def merge_risk_update(risk: dict[str, Any], update: RiskUpdate) -> dict[str, Any]:
    """Build the patch that applying ``update`` to ``risk`` produces.

    Only supplied fields appear. If likelihood or impact is supplied, both
    effective values and the recomputed score are included. The patch always
    carries a fresh ``last_updated``.
    """
    patch: dict[str, Any] = {}
    for field in ("title", "description", "status"):
        value = getattr(update, field)
        if value is not None:
            patch[field] = value

    if update.changes_score:
        likelihood = update.likelihood or risk["likelihood"]
        impact = update.impact or risk["impact"]
        patch["likelihood"] = likelihood
        patch["impact"] = impact
        patch["risk_score"] = calculate_risk_score(likelihood, impact)

    patch["last_updated"] = utcnow()
    return patch


def update_risk(store: DataStore, caller: Caller | None, risk_id: str, update: RiskUpdate) -> str:
    """Apply a partial update to a risk and return its id.

    Status changes are not checked against any workflow; any status may
    follow any other.

    Raises:
        NotFound: The risk does not exist.
    """
    require_caller(caller)
    risk = store.risks.get(risk_id)
    if risk is None:
        raise NotFound("Risk not found")
    membership = require_membership(store, caller, risk["organization_id"])

    patch = merge_risk_update(risk, update)
    store.risks.patch(risk_id, patch)

    record_audit(
        store,
        organization_id=risk["organization_id"],
        entity_type=AuditEntityType.RISK.value,
        entity_id=risk_id,
        action=AuditAction.UPDATED.value,
        user_id=membership["user_id"],
        changes=patch,
    )
    logger.info("risk_updated", risk_id=risk_id, fields=sorted(patch))
    return risk_id


def _with_owner(store: DataStore, risk: dict[str, Any]) -> dict[str, Any]:
    return {
        **risk,
        "owner_name": store.display_name(risk["owner"]),
        "risk_level": risk_level(risk["risk_score"]),
    }


def list_risks(store: DataStore, caller: Caller | None, organization_id: str) -> list[dict[str, Any]]:
    """Risks of an organization, highest score first, with owner names resolved."""
    require_membership(store, caller, organization_id)
    risks = store.risks.find("by_organization", organization_id)
    risks.sort(key=lambda r: (-r["risk_score"], r["title"]))
    return [_with_owner(store, r) for r in risks]


def get_risk(store: DataStore, caller: Caller | None, risk_id: str) -> dict[str, Any]:
    require_caller(caller)
    risk = store.risks.get(risk_id)
    if risk is None:
        raise NotFound("Risk not found")
    require_membership(store, caller, risk["organization_id"])
    return _with_owner(store, risk)


def link_control(
    store: DataStore,
    caller: Caller | None,
    risk_id: str,
    data: RiskControlCreate,
) -> str:
    """Map a control onto a risk with a mitigation level."""
    risk = get_risk(store, caller, risk_id)
    control = store.controls.get(data.control_id)
    if control is None:
        raise NotFound("Control not found")
    if control["organization_id"] != risk["organization_id"]:
        raise InvalidState("Control belongs to a different organization")

    link_id = str(uuid.uuid4())
    store.risk_controls.insert({
        "id": link_id,
        "risk_id": risk_id,
        "control_id": data.control_id,
        "mitigation_level": data.mitigation_level,
    })
    logger.info("risk_control_linked", risk_id=risk_id, control_id=data.control_id)
    return link_id


def list_risk_controls(store: DataStore, caller: Caller | None, risk_id: str) -> list[dict[str, Any]]:
    get_risk(store, caller, risk_id)
    links = []
    for link in store.risk_controls.find("by_risk", risk_id):
        control = store.controls.get(link["control_id"]) or {}
        links.append({**link, "control_title": control.get("title", "Unknown")})
    return links
