"""Product catalogue endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ..deps import DEGRADED_HEADER, get_document_store, store_errors
from ...data.repository import load_snapshot_or_empty
from ...data.store import PRODUCTS, DocumentStore
from ...schemas.orders import ProductCreate, ProductModel
from ...services import management

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=List[ProductModel], status_code=status.HTTP_200_OK)
def get_products(response: Response, store: DocumentStore = Depends(get_document_store)) -> List[ProductModel]:
    snapshot, error = load_snapshot_or_empty(store, (PRODUCTS,))
    if error:
        response.headers[DEGRADED_HEADER] = "true"
    products = sorted(snapshot.products, key=lambda product: product.name.lower())
    return [ProductModel(id=item.id, name=item.name, price=item.price, sku=item.sku) for item in products]


@router.post("", response_model=ProductModel, status_code=status.HTTP_201_CREATED)
def create_product(payload: ProductCreate, store: DocumentStore = Depends(get_document_store)) -> ProductModel:
    with store_errors():
        product = management.create_product(store, payload)
    return ProductModel(id=product.id, name=product.name, price=product.price, sku=product.sku)
