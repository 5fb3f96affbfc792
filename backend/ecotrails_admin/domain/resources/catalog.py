from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping

from ecotrails_admin.domain.resources.errors import MutationValidationError
from ecotrails_admin.domain.resources.filtering import ALL
from ecotrails_admin.domain.resources.records import Record, to_server_payload
from ecotrails_admin.infra.http import item_url as join_item_url
from ecotrails_admin.settings import ApiService, Settings, settings as default_settings

UpdateMode = Literal["fields", "status", "passthrough"]


@dataclass(frozen=True)
class ResourceEndpoint:
    list_url: str
    collection_url: str

    def item_url(self, record_id: Any) -> str:
        return join_item_url(self.collection_url, record_id)

    def status_url(self, record_id: Any) -> str:
        return f"{self.item_url(record_id)}/status"


@dataclass(frozen=True)
class ResourceSpec:
    name: str
    label: str
    service: ApiService
    path: str
    mutation_path: str | None = None
    id_field: str = "id"
    status_field: str = "status"
    filter_keys: tuple[str, ...] = (ALL,)
    wrapper_key: str | None = None
    text_fallback: bool = False
    has_detail: bool = False
    can_create: bool = False
    can_delete: bool = False
    update_mode: UpdateMode | None = None
    create_fields: Mapping[str, str] = field(default_factory=dict)
    update_fields: Mapping[str, str] = field(default_factory=dict)
    update_id_key: str | None = None
    status_key: str | None = None
    required_fields: tuple[str, ...] = ()
    int_fields: tuple[str, ...] = ()
    add_defaults: Mapping[str, Any] = field(default_factory=dict)

    @property
    def can_update(self) -> bool:
        return self.update_mode is not None

    @property
    def can_update_status(self) -> bool:
        return self.status_key is not None

    def endpoint(self, app_settings: Settings | None = None) -> ResourceEndpoint:
        base_url = (app_settings or default_settings).api_base_url(self.service)
        list_url = f"{base_url}/{self.path}"
        collection_url = f"{base_url}/{self.mutation_path}" if self.mutation_path else list_url
        return ResourceEndpoint(list_url=list_url, collection_url=collection_url)

    def validate(self, draft: Mapping[str, Any]) -> Record:
        """Check required fields and coerce numeric ones; returns a cleaned copy of ``draft``."""
        cleaned: Record = dict(draft)
        for name in self.required_fields:
            value = cleaned.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise MutationValidationError(name)
        for name in self.int_fields:
            value = cleaned.get(name)
            if value is None or value == "":
                continue
            try:
                cleaned[name] = int(str(value).strip())
            except ValueError:
                raise MutationValidationError(name, f"{name} must be a whole number.") from None
        return cleaned

    def build_create_payload(self, draft: Mapping[str, Any]) -> dict[str, Any]:
        return to_server_payload(draft, self.create_fields)

    def build_update_payload(self, draft: Mapping[str, Any], record_id: Any) -> dict[str, Any]:
        if self.update_mode == "passthrough":
            return dict(draft)
        if self.update_mode == "status":
            return self.build_status_payload(draft.get(self.status_field))
        payload: dict[str, Any] = {}
        if self.update_id_key:
            payload[self.update_id_key] = record_id
        payload.update(to_server_payload(draft, self.update_fields))
        return payload

    def build_status_payload(self, status: Any) -> dict[str, Any]:
        return {self.status_key or "status": status}


BOOKINGS = ResourceSpec(
    name="bookings",
    label="Booking",
    service="bookings",
    path="admin/bookings",
    filter_keys=(ALL, "Confirmed", "Pending", "Cancelled"),
    has_detail=True,
    update_mode="status",
    status_key="Status",
    required_fields=("status",),
)

ITINERARIES = ResourceSpec(
    name="itineraries",
    label="Itinerary",
    service="itineraries",
    path="admin/itineraries",
    filter_keys=(ALL, "Published", "Draft", "Approved", "Declined"),
    can_create=True,
    can_delete=True,
    update_mode="fields",
    create_fields={
        "name": "Name",
        "durationDays": "DurationDays",
        "status": "Status",
        "description": "Description",
        "itineraryJson": "ItineraryJson",
    },
    update_fields={
        "name": "Name",
        "durationDays": "DurationDays",
        "status": "Status",
        "description": "Description",
    },
    update_id_key="Id",
    required_fields=("name", "durationDays", "status"),
    int_fields=("durationDays",),
    add_defaults={"status": "Draft"},
)

# Full-record updates go to PUT {base}/{id}. The server contract for this
# call is unconfirmed, see DESIGN.md.
ITINERARY_REQUESTS = ResourceSpec(
    name="itinerary_requests",
    label="Itinerary request",
    service="itineraries",
    path="admin/itinerary-requests",
    filter_keys=(ALL, "Pending", "Reviewed"),
    has_detail=True,
    update_mode="passthrough",
    status_key="status",
)

USERS = ResourceSpec(
    name="users",
    label="User",
    service="users",
    path="admin/users",
    filter_keys=(ALL, "Active", "Inactive", "Pending"),
    can_delete=True,
    update_mode="fields",
    update_fields={"role": "role", "status": "status"},
)

PARTNERS = ResourceSpec(
    name="partners",
    label="Partner application",
    service="partners",
    path="admin/partner-applications",
    filter_keys=(ALL, "Pending", "Approved", "Rejected"),
    has_detail=True,
    update_mode="fields",
    update_fields={
        "fullName": "FullName",
        "emailAddress": "EmailAddress",
        "businessName": "BusinessName",
        "typeOfBusiness": "TypeOfBusiness",
        "location": "Location",
        "briefDescription": "BriefDescription",
        "status": "Status",
        "submittedAt": "SubmittedAt",
    },
    update_id_key="Id",
    status_key="Status",
    required_fields=("fullName", "emailAddress"),
)

LOCATIONS = ResourceSpec(
    name="locations",
    label="Location",
    service="users",
    path="locations",
    mutation_path="admin/locations",
    id_field="locationId",
    wrapper_key="locations",
    can_create=True,
    can_delete=True,
    update_mode="fields",
    create_fields={"name": "Name", "description": "Description"},
    update_fields={"name": "Name", "description": "Description"},
    update_id_key="LocationId",
    required_fields=("name",),
    add_defaults={"name": "", "description": ""},
)

FEEDBACK = ResourceSpec(
    name="feedback",
    label="Feedback",
    service="users",
    path="admin/feedback",
    text_fallback=True,
)

RESOURCES: dict[str, ResourceSpec] = {
    resource.name: resource
    for resource in (BOOKINGS, ITINERARIES, ITINERARY_REQUESTS, USERS, PARTNERS, LOCATIONS, FEEDBACK)
}


def get_resource(name: str) -> ResourceSpec:
    try:
        return RESOURCES[name]
    except KeyError:
        raise KeyError(f"unknown resource: {name}") from None
