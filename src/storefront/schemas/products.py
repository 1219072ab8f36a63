"""Catalog-facing API schemas."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel


class ProductModel(BaseModel):
    product_id: str
    name: str
    unit_price: float
    unit_weight: float = 0.0
    image_ref: str | None = None
    description: str | None = None
    category: str | None = None


class ProductListResponse(BaseModel):
    items: List[ProductModel]
    total: int
