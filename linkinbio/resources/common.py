"""
Helpers shared by the /api/link-in-bio resource routers.

Conventions every router follows:
  GET     list rows owned by the caller (owned_select)
  POST    validate Create schema, check parent ownership, insert
  PUT     validate Update schema (Create + id), require_owned, apply sent fields
  DELETE  ?id=..., require_owned, single DELETE → {"message": "<Label> deleted successfully"}

Routes that pick their schema from ?type= take the body as a dict and
validate it themselves; typed_body() keeps those bodies documented in OpenAPI.
"""
from typing import Annotated, Any, Dict, Iterable, List, Optional, Type

from pydantic import BaseModel, WithJsonSchema

from linkinbio.errors import PayloadInvalid

API_PREFIX = "/api/link-in-bio"

_TYPED_BODY_MODELS: Dict[str, Type[BaseModel]] = {}


def require_id(resource_id: Optional[str], label: str) -> str:
    """DELETE needs ?id=; absent or blank is a 400."""
    if not resource_id:
        raise PayloadInvalid(f"{label} ID is required")
    return resource_id


def require_type(value: Optional[str], allowed: Iterable[str]) -> str:
    """Validate a ?type= selector against its closed set of views."""
    allowed = list(allowed)
    if value not in allowed:
        raise PayloadInvalid(
            "Invalid type. Use " + ", ".join(f"'{name}'" for name in allowed)
        )
    return value


def deleted(label: str) -> dict:
    return {"message": f"{label} deleted successfully"}


def require_write_type(value: Optional[str], resource: str, allowed: Iterable[str]) -> str:
    """?type= on a write: "<Resource> type is required (a or b)" when absent or unknown."""
    allowed = list(allowed)
    if value not in allowed:
        raise PayloadInvalid(f"{resource} type is required ({' or '.join(allowed)})")
    return value


def typed_body(*models: Type[BaseModel]) -> Any:
    """
    Body annotation for a ?type=-dispatched write.

    Validation stays with the route (the schema depends on ?type=); the
    OpenAPI document shows the body as oneOf the given schemas, which
    main.py registers as components via typed_body_models().
    """
    for model in models:
        _TYPED_BODY_MODELS[model.__name__] = model
    schema = {"oneOf": [{"$ref": f"#/components/schemas/{model.__name__}"} for model in models]}
    return Annotated[Dict[str, Any], WithJsonSchema(schema)]


def typed_body_models() -> List[Type[BaseModel]]:
    return list(_TYPED_BODY_MODELS.values())
