"""REST collaborators: reference-data directories and contract persistence."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from rentalshop.core.config import Config, get_config
from rentalshop.core.exceptions import NotFoundError, TransportError
from rentalshop.schemas.contracts import ContractResponse, CreateContractRequest, UpdateContractRequest
from rentalshop.schemas.directory import ClientRecord, EventRecord, LocationRecord, ProductRecord

logger = logging.getLogger(__name__)
ModelT = TypeVar("ModelT", bound=BaseModel)


def _error_detail(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason or "unknown error"
    if isinstance(body, dict) and body.get("message"):
        message = body["message"]
        return "; ".join(message) if isinstance(message, list) else str(message)
    return response.reason or "unknown error"


class ApiClient:
    """Thin JSON-over-HTTP client with bearer auth and uniform error mapping."""

    def __init__(
        self,
        config: Config | None = None,
        session: requests.Session | None = None,
        token: str | None = None,
    ) -> None:
        self.config = config or get_config()
        self.base_url = self.config.API_BASE_URL.rstrip("/")
        self.session = session or requests.Session()
        self.token = token if token is not None else self.config.API_TOKEN

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method,
                url,
                json=payload,
                headers=self._headers(),
                timeout=(2, self.config.API_TIMEOUT_SECONDS),
            )
        except requests.exceptions.RequestException as exc:
            logger.error(
                "api.request.unavailable",
                extra={"event": "api.request.unavailable", "path": path, "errors": str(exc)},
            )
            raise TransportError(f"API Error: {exc}") from exc

        if response.status_code == 404:
            raise NotFoundError(f"Resource not found: {path}")
        if not response.ok:
            detail = _error_detail(response)
            logger.warning(
                "api.request.failed",
                extra={"event": "api.request.failed", "path": path, "status_code": response.status_code},
            )
            raise TransportError(f"API Error {response.status_code}: {detail}", status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"API Error {response.status_code}: invalid JSON body") from exc

    def parse(self, model: type[ModelT], body: Any, path: str) -> ModelT:
        """Validate a response body; a shape the client cannot read is a transport failure."""
        try:
            return model.model_validate(body)
        except ValidationError as exc:
            logger.warning(
                "api.response.invalid",
                extra={"event": "api.response.invalid", "path": path, "errors": str(exc)},
            )
            raise TransportError(f"API Error: unexpected response shape from {path}") from exc

    def parse_rows(self, model: type[ModelT], path: str) -> list[ModelT]:
        return [self.parse(model, row, path) for row in self.request("GET", path) or []]


class DirectoryClient(ApiClient):
    """Read-only client, product, event and location directories."""

    def get_clients(self) -> list[ClientRecord]:
        return self.parse_rows(ClientRecord, "/clients")

    def get_products(self) -> list[ProductRecord]:
        return self.parse_rows(ProductRecord, "/products")

    def get_events(self) -> list[EventRecord]:
        return self.parse_rows(EventRecord, "/events")

    def get_locations(self) -> list[LocationRecord]:
        return self.parse_rows(LocationRecord, "/locations")


class ContractApiClient(ApiClient):
    """Persistence collaborator for contracts."""

    def get_by_id(self, contract_id: str) -> ContractResponse:
        path = f"/contracts/{contract_id}"
        return self.parse(ContractResponse, self.request("GET", path), path)

    def create(self, payload: CreateContractRequest) -> ContractResponse:
        body = self.request("POST", "/contracts", payload.to_wire())
        contract = self.parse(ContractResponse, body, "/contracts")
        logger.info("contract.created", extra={"event": "contract.created", "contract_id": contract.id})
        return contract

    def update(self, contract_id: str, payload: UpdateContractRequest) -> ContractResponse:
        body = self.request("PUT", f"/contracts/{contract_id}", payload.to_wire())
        contract = self.parse(ContractResponse, body, f"/contracts/{contract_id}")
        logger.info("contract.updated", extra={"event": "contract.updated", "contract_id": contract.id})
        return contract
