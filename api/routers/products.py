# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-19
# Description: products router
# -----------------------------------------------------------------------------
import logging
from typing import Any, Dict, Type

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel

from api.dependencies import get_product_service
from api.schemas.products import (
    DescriptionSearchRequest,
    ErrorResponse,
    FeaturesSearchRequest,
    SuccessResponse,
    TagsSearchRequest,
)
from product.errors import ProductNotFoundError, ProductValidationError
from services.ProductService import ProductService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])

ERROR_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _request_body(model: Type[BaseModel]) -> Dict[str, Any]:
    return {
        "requestBody": {
            "content": {"application/json": {"schema": model.model_json_schema()}},
        }
    }


@router.post("", status_code=201, response_model=SuccessResponse, responses=ERROR_RESPONSES)
async def create_product(
        payload: Dict[str, Any] = Body(...),
        svc: ProductService = Depends(get_product_service),
) -> SuccessResponse:
    logger.info("POST /products (start) name=%r", payload.get("name"))
    try:
        created = await svc.create_product(payload)
    except ProductValidationError as e:
        logger.warning("POST /products -> 400 (%d field errors)", len(e.errors))
        raise
    except Exception as e:
        logger.exception("POST /products -> 500: %s", e)
        raise HTTPException(status_code=500, detail="Internal Server Error")

    logger.info("POST /products (done) id='%s'", created.get("id"))
    return SuccessResponse(data=created)


@router.get("", response_model=SuccessResponse, responses=ERROR_RESPONSES)
async def get_products(
        svc: ProductService = Depends(get_product_service),
) -> SuccessResponse:
    logger.info("GET /products (start)")
    try:
        products = await svc.list_products()
    except Exception as e:
        logger.exception("GET /products -> 500: %s", e)
        raise HTTPException(status_code=500, detail="Internal Server Error")

    logger.info("GET /products (done) count=%d", len(products))
    return SuccessResponse(data=products)


@router.get(
    "/{product_id}",
    response_model=SuccessResponse,
    responses={**ERROR_RESPONSES, 404: {"model": ErrorResponse}},
)
async def get_product_by_id(
        product_id: str,
        svc: ProductService = Depends(get_product_service),
) -> SuccessResponse:
    logger.info("GET /products/{product_id} (start) product_id='%s'", product_id)
    try:
        product = await svc.get_product(product_id)
    except ProductValidationError:
        logger.warning("GET /products/{product_id} -> 400 (invalid id) product_id='%s'", product_id)
        raise
    except ProductNotFoundError:
        logger.info("GET /products/{product_id} -> 404 product_id='%s'", product_id)
        raise
    except Exception as e:
        logger.exception("GET /products/{product_id} -> 500 product_id='%s': %s", product_id, e)
        raise HTTPException(status_code=500, detail="Internal Server Error")

    logger.info("GET /products/{product_id} (done) product_id='%s'", product_id)
    return SuccessResponse(data=product)


# -----------------------------------------------------------------------------
# Vector search
# -----------------------------------------------------------------------------
async def _search(route: str, search, body: Dict[str, Any]) -> SuccessResponse:
    logger.info("POST %s (start) top=%r", route, body.get("top"))
    try:
        results = await search(body)
    except ProductValidationError:
        logger.warning("POST %s -> 400", route)
        raise
    except Exception as e:
        logger.exception("POST %s -> 500: %s", route, e)
        raise HTTPException(status_code=500, detail="Internal Server Error")

    logger.info("POST %s (done) results=%d", route, len(results))
    return SuccessResponse(data=results)


@router.post(
    "/search/description",
    response_model=SuccessResponse,
    responses=ERROR_RESPONSES,
    openapi_extra=_request_body(DescriptionSearchRequest),
)
async def search_products_by_description(
        body: Dict[str, Any] = Body(...),
        svc: ProductService = Depends(get_product_service),
) -> SuccessResponse:
    return await _search("/products/search/description", svc.search_by_description, body)


@router.post(
    "/search/tags",
    response_model=SuccessResponse,
    responses=ERROR_RESPONSES,
    openapi_extra=_request_body(TagsSearchRequest),
)
async def search_products_by_tags(
        body: Dict[str, Any] = Body(...),
        svc: ProductService = Depends(get_product_service),
) -> SuccessResponse:
    return await _search("/products/search/tags", svc.search_by_tags, body)


@router.post(
    "/search/features",
    response_model=SuccessResponse,
    responses=ERROR_RESPONSES,
    openapi_extra=_request_body(FeaturesSearchRequest),
)
async def search_products_by_features(
        body: Dict[str, Any] = Body(...),
        svc: ProductService = Depends(get_product_service),
) -> SuccessResponse:
    return await _search("/products/search/features", svc.search_by_features, body)
