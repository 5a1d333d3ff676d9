"""Campañas de dunning (reintentos y comunicaciones tras un cobro fallido)."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from recurly_v2.adapters.http_client import ApiClient
from recurly_v2.requests.dunning import DunningCampaignBulkUpdate
from recurly_v2.resources.base import Resource


class DunningCycle(Resource):
    embedded = True

    type: str | None = None
    applies_to_manual_trial: bool | None = None
    first_communication_interval: int | None = None
    send_immediately_on_hard_decline: bool | None = None
    total_dunning_days: int | None = None
    total_recycling_days: int | None = None
    version: int | None = None
    templates: list[Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class DunningCampaign(Resource):
    collection_path = "dunning_campaigns"
    identifier = "id"
    read_only = frozenset({"default", "dunning_cycles", "deleted_at"})
    has_many = {"dunning_cycles": "DunningCycle"}

    id: str | None = None
    name: str | None = None
    code: str | None = None
    description: str | None = None
    default: bool | None = None
    dunning_cycles: list[DunningCycle] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    def bulk_update(self, plan_codes: list[str], *, client: ApiClient | None = None) -> bool:
        """Asigna esta campaña a todos los planes de `plan_codes`."""

        api = self._resolve_client(client)
        body = DunningCampaignBulkUpdate(plan_codes=list(plan_codes))
        response = api.put(f"{self._require_uri('bulk_update')}/bulk_update", body)
        self.reload(response, client=api)
        return True
