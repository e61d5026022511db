"""wm_order REST API: hashing, pricing, counter-order synthesis, match validation.

Stateless; every endpoint works on the orders in the request body.
"""

from fastapi import APIRouter, Request

from config.settings import settings
from src.wm_common.response import ApiResponse, success_response
from src.wm_order.application import service as svc
from src.wm_order.application.schemas import (
    MatchRequest,
    OrderJSON,
    PriceRequest,
    ValidateRequest,
)

router = APIRouter(prefix="/orders", tags=["orders"])


def _wrap(data: object, request: Request) -> ApiResponse:
    resp = success_response(data)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/hash")
async def hash_order(body: OrderJSON, request: Request) -> ApiResponse:
    return _wrap(svc.hash_order_json(body).model_dump(), request)


@router.post("/price")
async def price_order(body: PriceRequest, request: Request) -> ApiResponse:
    return _wrap(svc.price_order(body).model_dump(), request)


@router.post("/match")
async def match_order(body: MatchRequest, request: Request) -> ApiResponse:
    return _wrap(svc.match_order(body, settings), request)


@router.post("/validate")
async def validate_pair(body: ValidateRequest, request: Request) -> ApiResponse:
    return _wrap(svc.validate_pair(body, settings).model_dump(), request)
