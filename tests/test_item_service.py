"""
상품 서비스 테스트
==================
등록 / 수정 / 구분별 조회
"""
import pytest

from shop.exceptions import InvalidArgumentError, NotFoundError
from shop.models import Album, Book, Item, Movie
from shop.services import ItemService


class TestItemService:
    """상품 등록 / 조회"""

    def test_save_item(self, db):
        """도서 등록 후 조회"""
        book = Book(name="JPA", price=10000, stock_quantity=10, author="김영한", isbn="1234")

        item_id = ItemService(db).save_item(book)

        db.expunge_all()
        found = ItemService(db).find_one(item_id)
        assert isinstance(found, Book)
        assert (found.name, found.price, found.stock_quantity, found.author) == ("JPA", 10000, 10, "김영한")

    def test_save_base_item_rejected(self, db):
        """구분 없는 Item은 저장 불가"""
        with pytest.raises(InvalidArgumentError):
            ItemService(db).save_item(Item(name="x", price=1, stock_quantity=1))

    @pytest.mark.parametrize("price,stock", [(-1, 10), (10, -1)])
    def test_save_negative(self, db, price, stock):
        """음수 가격 / 재고 거부"""
        with pytest.raises(InvalidArgumentError):
            ItemService(db).save_item(Book(name="JPA", price=price, stock_quantity=stock))

    def test_find_items_by_type(self, db):
        """구분값으로 조회 (소문자 허용)"""
        service = ItemService(db)
        service.save_item(Book(name="b", price=1, stock_quantity=1))
        service.save_item(Album(name="a", price=1, stock_quantity=1))
        service.save_item(Movie(name="m", price=1, stock_quantity=1))

        assert [i.name for i in service.find_items()] == ["b", "a", "m"]
        assert [i.name for i in service.find_items("a")] == ["a"]
        assert all(isinstance(i, Movie) for i in service.find_items("M"))

    def test_find_items_unknown_type(self, db):
        with pytest.raises(InvalidArgumentError):
            ItemService(db).find_items("X")

    def test_find_one_missing(self, db):
        with pytest.raises(NotFoundError):
            ItemService(db).find_one(999)


class TestItemUpdate:
    """상품 수정 (변경 감지)"""

    def test_update_item(self, db):
        service = ItemService(db)
        item_id = service.save_item(Book(name="JPA", price=10000, stock_quantity=10))

        service.update_item(item_id, "JPA 2판", 12000, 20)

        db.expunge_all()
        found = service.find_one(item_id)
        assert (found.name, found.price, found.stock_quantity) == ("JPA 2판", 12000, 20)

    def test_update_missing(self, db):
        with pytest.raises(NotFoundError):
            ItemService(db).update_item(999, "x", 1, 1)

    def test_update_invalid(self, db):
        """잘못된 값이면 아무것도 바뀌지 않음"""
        service = ItemService(db)
        item_id = service.save_item(Book(name="JPA", price=10000, stock_quantity=10))

        with pytest.raises(InvalidArgumentError):
            service.update_item(item_id, " ", 10000, 10)

        db.expunge_all()
        assert service.find_one(item_id).name == "JPA"
