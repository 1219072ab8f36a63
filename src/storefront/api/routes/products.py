"""API routes for the product catalog."""

from __future__ import annotations

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from ...data.catalog_repository import get_product, list_products
from ...errors import ProductNotFound
from ...schemas.products import ProductListResponse, ProductModel

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=ProductListResponse)
def get_products(
    category: Optional[str] = Query(default=None),
    search: Optional[str] = Query(default=None, description="Case-insensitive match on name or description."),
) -> ProductListResponse:
    try:
        products = list_products(category=category, search=search)
    except FileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return ProductListResponse(items=[ProductModel(**asdict(p)) for p in products], total=len(products))


@router.get("/{product_id}", response_model=ProductModel)
def get_product_detail(product_id: str) -> ProductModel:
    try:
        product = get_product(product_id)
    except ProductNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except FileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    return ProductModel(**asdict(product))
