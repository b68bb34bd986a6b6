"""상품 API"""
from typing import List, Optional

from fastapi import APIRouter, Depends

from shop.api.deps import get_item_service
from shop.api.schemas import AlbumRequest, BookRequest, ItemResponse, MovieRequest, UpdateItemRequest
from shop.models import Album, Book, Movie
from shop.services import ItemService

router = APIRouter(prefix="/api/items", tags=["items"])


def _save(item_service: ItemService, item) -> ItemResponse:
    item_service.save_item(item)
    return ItemResponse.model_validate(item)


@router.post("/books", response_model=ItemResponse)
def create_book(body: BookRequest, item_service: ItemService = Depends(get_item_service)):
    return _save(item_service, Book(**body.model_dump()))


@router.post("/albums", response_model=ItemResponse)
def create_album(body: AlbumRequest, item_service: ItemService = Depends(get_item_service)):
    return _save(item_service, Album(**body.model_dump()))


@router.post("/movies", response_model=ItemResponse)
def create_movie(body: MovieRequest, item_service: ItemService = Depends(get_item_service)):
    return _save(item_service, Movie(**body.model_dump()))


@router.get("", response_model=List[ItemResponse])
def list_items(type: Optional[str] = None, item_service: ItemService = Depends(get_item_service)):
    """상품 목록 (type: B / A / M)"""
    return [ItemResponse.model_validate(i) for i in item_service.find_items(type)]


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(item_id: int, item_service: ItemService = Depends(get_item_service)):
    return ItemResponse.model_validate(item_service.find_one(item_id))


@router.put("/{item_id}", response_model=ItemResponse)
def update_item(item_id: int, body: UpdateItemRequest, item_service: ItemService = Depends(get_item_service)):
    item = item_service.update_item(item_id, body.name, body.price, body.stock_quantity)
    return ItemResponse.model_validate(item)
