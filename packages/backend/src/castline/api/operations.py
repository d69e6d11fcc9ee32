"""Operations endpoint — the single entry point for every query and mutation.

    POST /api/v1/operations
    x-jwt: <token>                      (optional)
    {"operation": "getPodcast", "input": {"id": 1}}

Responses are always HTTP 200:

- ``{"data": {"getPodcast": {"ok": ..., "error": ..., ...}}}`` when the
  operation ran. Business failures (not found, not owner, bad input)
  live inside the envelope with ``ok: false``.
- ``{"data": null, "errors": [{"message": "Forbidden resource"}]}`` when
  the auth guard rejected the request. The resolver never ran.
"""

from typing import Any, Optional

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

# Importing the resolver modules registers their operations.
from castline.api import podcasts, users  # noqa: F401
from castline.api.registry import Operation, ResolverContext, registry
from castline.auth.guard import AuthContext, get_auth_context, guard
from castline.db.engine import get_db
from castline.errors import CastlineError, Forbidden
from castline.schemas.common import CoreOutput

logger = structlog.get_logger()

router = APIRouter()


class OperationRequest(BaseModel):
    operation: str = Field(..., min_length=1)
    input: Optional[dict[str, Any]] = None


def _fault(message: str) -> dict:
    return {"data": None, "errors": [{"message": message}]}


def _validation_message(exc: ValidationError) -> str:
    first = exc.errors()[0]
    loc = ".".join(str(part) for part in first["loc"])
    return f"{loc}: {first['msg']}" if loc else first["msg"]


async def execute(
    op: Operation, raw_input: Optional[dict[str, Any]], ctx: ResolverContext
) -> CoreOutput:
    """Run a resolver and fold business errors into its envelope."""
    body = None
    if op.input_model is not None:
        try:
            body = op.input_model.model_validate(raw_input or {})
        except ValidationError as e:
            return op.output_model(ok=False, error=_validation_message(e))

    try:
        return await op.resolver(body, ctx)
    except CastlineError as e:
        await ctx.db.rollback()
        logger.info("operation.failed", operation=op.name, error=e.message, **e.context)
        return op.output_model(ok=False, error=e.message)


@router.post("/operations")
async def run_operation(
    body: OperationRequest,
    auth: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
):
    """Guard, then resolve, one operation."""
    op = registry.get(body.operation)
    if op is None:
        return _fault(f"Unknown operation {body.operation}")

    try:
        guard(op, auth)
    except Forbidden as e:
        return _fault(e.message)

    result = await execute(op, body.input, ResolverContext(db=db, auth=auth))
    return {"data": {op.name: result.model_dump(mode="json", by_alias=True)}}


@router.get("/operations")
async def list_operations():
    """Names and access level of every registered operation."""
    return [
        {
            "name": name,
            "public": registry.get(name).public,
            "requires": registry.get(name).requires,
        }
        for name in registry.names()
    ]
