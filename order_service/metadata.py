"""API metadata published through the OpenAPI document."""

from dataclasses import dataclass
from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

PROJECT_DOCS_URL = (
    "https://correo2urledu-my.sharepoint.com/:w:/g/personal/eerivasa_correo_url_edu_gt/"
    "EbARm799M4xOo4DbKAFv4pABR3V4Lk6OwiXuJnIRus3b9w?e=HCB3vB"
)


@dataclass(frozen=True, slots=True)
class ApiMetadata:
    """Static description of the order service API surface."""

    title: str
    description: str
    version: str
    license_name: str
    external_docs_url: str
    external_docs_description: str = ""

    def to_openapi_info(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "version": self.version,
            "license": {"name": self.license_name},
        }

    def to_openapi_external_docs(self) -> dict[str, str]:
        docs = {"url": self.external_docs_url}
        if self.external_docs_description:
            docs["description"] = self.external_docs_description
        return docs


def build_metadata() -> ApiMetadata:
    """Return the order service API metadata. Pure and deterministic."""
    return ApiMetadata(
        title="Order Service",
        description="This is the REST API for Order Service",
        version="v0.0.1",
        license_name="Apache 2.0",
        external_docs_url=PROJECT_DOCS_URL,
        external_docs_description="You can refer to the Project documentation",
    )


def register_metadata(app: FastAPI, metadata: ApiMetadata) -> None:
    """
    Register ``metadata`` with the FastAPI documentation subsystem.

    FastAPI has no application-level ``externalDocs`` setting, so the schema
    generator is replaced with one that adds it to the generated document.
    """
    app.title = metadata.title
    app.description = metadata.description
    app.version = metadata.version
    app.license_info = {"name": metadata.license_name}
    app.openapi_schema = None

    def _openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema
        info = metadata.to_openapi_info()
        schema = get_openapi(title=info["title"], version=info["version"], routes=app.routes)
        schema["info"] = info
        schema["externalDocs"] = metadata.to_openapi_external_docs()
        app.openapi_schema = schema
        return schema

    app.openapi = _openapi  # type: ignore[method-assign]
