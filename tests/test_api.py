"""
API 테스트
==========
TestClient로 라우터, 스키마, 예외 핸들러까지 확인
"""
import pytest


def _create_member(client, name="kim", city="서울"):
    response = client.post("/api/v1/members", json={
        "name": name,
        "address": {"city": city, "street": "강가", "zipcode": "123"},
    })
    assert response.status_code == 200
    return response.json()["id"]


def _create_book(client, name="시골 JPA", price=10000, stock_quantity=10):
    response = client.post("/api/items/books", json={
        "name": name, "price": price, "stock_quantity": stock_quantity, "author": "김영한", "isbn": "1234",
    })
    assert response.status_code == 200
    return response.json()["id"]


@pytest.fixture
def orders(client):
    """주문 3건 (userA 2줄, userB 1줄, userA 취소)"""
    user_a = _create_member(client, "userA", "서울")
    user_b = _create_member(client, "userB", "진주")
    jpa1 = _create_book(client, "JPA1 BOOK", 10000, 100)
    jpa2 = _create_book(client, "JPA2 BOOK", 20000, 100)

    ids = [
        client.post("/api/orders/multi", json={
            "member_id": user_a, "lines": [{"item_id": jpa1, "count": 1}, {"item_id": jpa2, "count": 2}],
        }).json()["order_id"],
        client.post("/api/orders", json={"member_id": user_b, "item_id": jpa2, "count": 3}).json()["order_id"],
        client.post("/api/orders", json={"member_id": user_a, "item_id": jpa1, "count": 1}).json()["order_id"],
    ]
    client.post(f"/api/orders/{ids[2]}/cancel")
    return ids


class TestRoot:
    """루트 / 헬스 체크"""

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"

    def test_root_lists_strategies(self, client):
        """지원하는 주문 목록 조회 방식 6가지"""
        strategies = client.get("/").json()["order_strategies"]
        assert strategies == ["lazy", "fetch_join", "batch", "dto", "dto_batch", "flat"]

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy", "database": "ok"}

    def test_health_db_down(self, client):
        """DB 오류면 503"""
        from sqlalchemy.exc import OperationalError
        from shop.database import get_db
        from shop.main import app

        class BrokenSession:
            def execute(self, statement):
                raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        app.dependency_overrides[get_db] = lambda: BrokenSession()
        response = client.get("/health")
        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"


class TestMemberApi:
    """회원 API"""

    def test_save_v1(self, client):
        member_id = _create_member(client)
        members = client.get("/api/v1/members").json()
        assert members == [{
            "id": member_id,
            "name": "kim",
            "address": {"city": "서울", "street": "강가", "zipcode": "123"},
        }]

    def test_save_v1_blank_name(self, client):
        """V1은 스키마 검증이 없어 서비스에서 400"""
        response = client.post("/api/v1/members", json={"name": " "})
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_ARGUMENT"

    def test_save_v2_duplicate(self, client):
        assert client.post("/api/v2/members", json={"name": "kim"}).status_code == 200
        response = client.post("/api/v2/members", json={"name": "kim"})
        assert response.status_code == 409
        assert response.json()["error"] == "CONFLICT"

    def test_update_v2(self, client):
        member_id = _create_member(client)
        response = client.put(f"/api/v2/members/{member_id}", json={"name": "lee"})
        assert response.json() == {"id": member_id, "name": "lee"}

    def test_update_missing(self, client):
        response = client.put("/api/v2/members/999", json={"name": "lee"})
        assert response.status_code == 404

    def test_members_v2(self, client):
        """{count, data} 래핑, 이름만"""
        _create_member(client, "a")
        _create_member(client, "b")
        assert client.get("/api/v2/members").json() == {
            "count": 2,
            "data": [{"name": "a"}, {"name": "b"}],
        }


class TestItemApi:
    """상품 API"""

    def test_create_and_get(self, client):
        item_id = _create_book(client)
        body = client.get(f"/api/items/{item_id}").json()
        assert body["dtype"] == "B"
        assert body["author"] == "김영한"
        assert body["artist"] is None

    def test_list_by_type(self, client):
        _create_book(client)
        client.post("/api/items/albums", json={"name": "앨범", "price": 1, "stock_quantity": 1, "artist": "a"})
        client.post("/api/items/movies", json={"name": "영화", "price": 1, "stock_quantity": 1, "director": "d"})

        assert len(client.get("/api/items").json()) == 3
        assert [i["name"] for i in client.get("/api/items", params={"type": "A"}).json()] == ["앨범"]
        assert client.get("/api/items", params={"type": "X"}).status_code == 400

    def test_update(self, client):
        item_id = _create_book(client)
        response = client.put(f"/api/items/{item_id}", json={"name": "JPA 2판", "price": 12000, "stock_quantity": 5})
        assert response.json()["name"] == "JPA 2판"
        assert response.json()["stock_quantity"] == 5

    def test_get_missing(self, client):
        response = client.get("/api/items/999")
        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"
        assert response.json()["path"] == "/api/items/999"


class TestOrderApi:
    """주문 / 취소 API"""

    def test_order_and_cancel(self, client):
        """주문 → 재고 차감 → 취소 → 재고 복원 → 재취소도 200"""
        member_id = _create_member(client)
        item_id = _create_book(client, stock_quantity=10)

        order_id = client.post("/api/orders", json={
            "member_id": member_id, "item_id": item_id, "count": 2,
        }).json()["order_id"]

        assert client.get(f"/api/items/{item_id}").json()["stock_quantity"] == 8
        assert client.get(f"/api/orders/{order_id}").json() == {
            "order_id": order_id, "status": "ORDER", "total_price": 20000,
        }

        response = client.post(f"/api/orders/{order_id}/cancel")
        assert response.status_code == 200
        assert response.json()["status"] == "CANCEL"
        assert client.get(f"/api/items/{item_id}").json()["stock_quantity"] == 10

        assert client.post(f"/api/orders/{order_id}/cancel").status_code == 200
        assert client.get(f"/api/items/{item_id}").json()["stock_quantity"] == 10

    def test_not_enough_stock(self, client):
        member_id = _create_member(client)
        item_id = _create_book(client, stock_quantity=10)

        response = client.post("/api/orders", json={"member_id": member_id, "item_id": item_id, "count": 11})
        assert response.status_code == 409
        assert response.json()["error"] == "NOT_ENOUGH_STOCK"
        assert client.get(f"/api/items/{item_id}").json()["stock_quantity"] == 10

    def test_negative_count(self, client):
        member_id = _create_member(client)
        item_id = _create_book(client)
        response = client.post("/api/orders", json={"member_id": member_id, "item_id": item_id, "count": -1})
        assert response.status_code == 400

    def test_unknown_member(self, client):
        item_id = _create_book(client)
        response = client.post("/api/orders", json={"member_id": 999, "item_id": item_id, "count": 1})
        assert response.status_code == 404

    def test_cancel_unknown(self, client):
        assert client.post("/api/orders/999/cancel").status_code == 404

    def test_member_orders(self, client, orders):
        member_id = client.get("/api/v1/members").json()[0]["id"]
        body = client.get(f"/api/members/{member_id}/orders").json()
        assert [o["order_id"] for o in body] == [orders[0], orders[2]]


class TestOrderListApi:
    """주문 목록 v1 ~ v6"""

    VERSIONS = ["v2", "v3", "v3.1", "v4", "v5", "v6"]

    @pytest.mark.parametrize("version", VERSIONS)
    def test_same_body(self, client, orders, version):
        """모든 버전이 같은 응답"""
        expected = client.get("/api/v5/orders").json()
        response = client.get(f"/api/{version}/orders")

        assert response.status_code == 200
        assert response.json() == expected
        assert [o["order_id"] for o in expected] == orders

    def test_body_shape(self, client, orders):
        first = client.get("/api/v5/orders").json()[0]
        assert first["name"] == "userA"
        assert first["order_status"] == "ORDER"
        assert first["address"] == {"city": "서울", "street": "강가", "zipcode": "123"}
        assert first["order_items"] == [
            {"order_id": orders[0], "item_name": "JPA1 BOOK", "order_price": 10000, "count": 1},
            {"order_id": orders[0], "item_name": "JPA2 BOOK", "order_price": 20000, "count": 2},
        ]

    def test_v1_entities(self, client, orders):
        """V1: 엔티티 모양 (회원, 배송, 주문상품의 상품까지)"""
        body = client.get("/api/v1/orders").json()
        assert len(body) == 3
        assert body[0]["member"]["name"] == "userA"
        assert body[0]["delivery"]["status"] == "READY"
        assert body[0]["order_items"][1]["item"]["name"] == "JPA2 BOOK"
        assert body[0]["total_price"] == 50000

    @pytest.mark.parametrize("version", ["v3", "v6"])
    def test_paging_rejected(self, client, orders, version):
        response = client.get(f"/api/{version}/orders", params={"offset": 0, "limit": 1})
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_ARGUMENT"

    @pytest.mark.parametrize("version", ["v2", "v3.1", "v4", "v5"])
    def test_paging(self, client, orders, version):
        body = client.get(f"/api/{version}/orders", params={"offset": 1, "limit": 1}).json()
        assert [o["order_id"] for o in body] == [orders[1]]

    def test_invalid_paging(self, client, orders):
        assert client.get("/api/v3.1/orders", params={"offset": -1}).status_code == 400
        assert client.get("/api/v3.1/orders", params={"limit": 0}).status_code == 400

    def test_filters(self, client, orders):
        body = client.get("/api/v4/orders", params={"status": "CANCEL"}).json()
        assert [o["order_id"] for o in body] == [orders[2]]

        body = client.get("/api/v4/orders", params={"member_name": "userB"}).json()
        assert [o["name"] for o in body] == ["userB"]

    def test_invalid_status(self, client, orders):
        assert client.get("/api/v2/orders", params={"status": "SHIPPED"}).status_code == 400

    def test_strategy_param(self, client, orders):
        """조회 방식 파라미터"""
        expected = client.get("/api/v5/orders").json()
        assert client.get("/api/orders", params={"strategy": "batch"}).json() == expected
        assert client.get("/api/orders").json() == expected
        assert client.get("/api/orders", params={"strategy": "eager"}).status_code == 400
        assert client.get("/api/orders", params={"strategy": "flat", "limit": 1}).status_code == 400


class TestSimpleOrderApi:
    """주문 요약 v2 ~ v4"""

    @pytest.mark.parametrize("version", ["v2", "v3", "v4"])
    def test_same_body(self, client, orders, version):
        expected = client.get("/api/v4/simple-orders").json()
        body = client.get(f"/api/{version}/simple-orders").json()

        assert body == expected
        assert [o["name"] for o in body] == ["userA", "userB", "userA"]
        assert "order_items" not in body[0]
