"""
공통 픽스처
===========
테스트마다 인메모리 SQLite 엔진과 세션을 새로 만든다.
"""
import os
import sys
from pathlib import Path

import pytest

# 프로젝트 루트 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

# 모듈 레벨 엔진이 로컬 DB 파일을 만들지 않도록
os.environ.setdefault("DATABASE_URL", "sqlite://")

from shop.database import Base, create_engine_for_url, create_session_factory, get_db
from shop.models import Address, Album, Book, Member, Movie


@pytest.fixture
def engine():
    """테스트용 인메모리 엔진 (테이블 생성 포함)"""
    import shop.models  # noqa: F401
    eng = create_engine_for_url("sqlite://")
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    """테스트용 세션"""
    session = create_session_factory(engine)()
    yield session
    session.close()


@pytest.fixture
def session_factory(engine):
    """같은 DB에 세션을 여러 개 열어야 하는 테스트용"""
    return create_session_factory(engine)


# ─── 데이터 빌더 ───

def make_member(db, name="회원1", city="서울", street="강가", zipcode="123-123") -> Member:
    member = Member(name=name, address=Address(city, street, zipcode))
    db.add(member)
    db.commit()
    return member


def make_book(db, name="시골 JPA", price=10000, stock_quantity=10, author="김영한", isbn="1234") -> Book:
    book = Book(name=name, price=price, stock_quantity=stock_quantity, author=author, isbn=isbn)
    db.add(book)
    db.commit()
    return book


def make_album(db, name="앨범", price=20000, stock_quantity=5) -> Album:
    album = Album(name=name, price=price, stock_quantity=stock_quantity, artist="아티스트", etc="기타")
    db.add(album)
    db.commit()
    return album


def make_movie(db, name="영화", price=15000, stock_quantity=3) -> Movie:
    movie = Movie(name=name, price=price, stock_quantity=stock_quantity, director="감독", actor="배우")
    db.add(movie)
    db.commit()
    return movie


@pytest.fixture
def sample_orders(db):
    """
    주문 4건

    - userA: JPA1 BOOK ×1 + JPA2 BOOK ×2
    - userB: SPRING1 BOOK ×3 + SPRING2 BOOK ×4
    - userA: JPA1 BOOK ×1 (취소)
    - userC: 수량 0 주문 (주문상품 없음)
    """
    from shop.services import OrderService

    user_a = make_member(db, "userA", "서울", "1", "1111")
    user_b = make_member(db, "userB", "진주", "2", "2222")
    user_c = make_member(db, "userC", "부산", "3", "3333")
    jpa1 = make_book(db, "JPA1 BOOK", 10000, 100)
    jpa2 = make_book(db, "JPA2 BOOK", 20000, 100)
    spring1 = make_book(db, "SPRING1 BOOK", 20000, 200)
    spring2 = make_book(db, "SPRING2 BOOK", 40000, 300)

    service = OrderService(db)
    ids = [
        service.order_lines(user_a.id, [(jpa1.id, 1), (jpa2.id, 2)]),
        service.order_lines(user_b.id, [(spring1.id, 3), (spring2.id, 4)]),
        service.order(user_a.id, jpa1.id, 1),
        service.order(user_c.id, jpa2.id, 0),
    ]
    service.cancel_order(ids[2])

    # 영속성 컨텍스트를 비워 이후 조회가 DB에서 새로 로딩되도록
    db.expunge_all()
    return ids


# ─── API ───

@pytest.fixture
def client(session_factory):
    """get_db를 테스트 엔진 세션으로 바꾼 TestClient (startup 이벤트는 실행하지 않음)"""
    from fastapi.testclient import TestClient
    from shop.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
