"""
주문 DB 초기화 스크립트
=====================
테이블 생성, 필요하면 기존 테이블 삭제 후 재생성, 조회 비교용 샘플 주문 적재

샘플 주문:
- userA (서울): JPA1 BOOK ×1 + JPA2 BOOK ×2
- userB (진주): SPRING1 BOOK ×3 + SPRING2 BOOK ×4

사용법:
    python scripts/init_db.py                          # 설정된 DB에 테이블 생성
    python scripts/init_db.py --reset --sample         # 삭제 후 재생성 + 샘플 주문
    python scripts/init_db.py --url sqlite:///demo.db  # 다른 DB 지정
"""
import sys
import argparse
import logging
from pathlib import Path

# 프로젝트 루트를 파이썬 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import inspect

from shop.database import Base, create_engine_for_url, create_session_factory, engine as default_engine, init_db
from shop.models import Address, Book, Member
from shop.repositories import MemberRepository
from shop.services import ItemService, MemberService, OrderService

logger = logging.getLogger(__name__)

SAMPLE_ORDERS = [
    (("userA", "서울", "1", "1111"), [("JPA1 BOOK", 10000, 100, 1), ("JPA2 BOOK", 20000, 100, 2)]),
    (("userB", "진주", "2", "2222"), [("SPRING1 BOOK", 20000, 200, 3), ("SPRING2 BOOK", 40000, 300, 4)]),
]


def load_sample_orders(db) -> list:
    """샘플 회원 / 도서 / 주문 적재 (회원이 이미 있으면 건너뜀)"""
    if MemberRepository(db).count() > 0:
        logger.info("회원 데이터가 이미 있어 샘플 적재를 건너뜁니다.")
        return []

    member_service = MemberService(db)
    item_service = ItemService(db)
    order_service = OrderService(db)

    order_ids = []
    for (name, city, street, zipcode), books in SAMPLE_ORDERS:
        member_id = member_service.join(Member(name=name, address=Address(city, street, zipcode)))
        lines = []
        for book_name, price, stock, count in books:
            book_id = item_service.save_item(Book(name=book_name, price=price, stock_quantity=stock))
            lines.append((book_id, count))
        order_ids.append(order_service.order_lines(member_id, lines))
    return order_ids


def main(argv=None):
    parser = argparse.ArgumentParser(description="주문 DB 초기화")
    parser.add_argument("--url", type=str, help="DB URL (기본: DATABASE_URL / 설정값)")
    parser.add_argument("--reset", action="store_true", help="기존 테이블 삭제 후 재생성")
    parser.add_argument("--sample", action="store_true", help="샘플 주문 적재")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='[%(asctime)s] %(levelname)s %(message)s')

    bind = create_engine_for_url(args.url) if args.url else default_engine
    print(f"Initializing database... ({bind.url.render_as_string(hide_password=True)})")

    if args.reset:
        import shop.models  # noqa: F401
        Base.metadata.drop_all(bind=bind)
        print("Dropped existing tables")

    init_db(bind=bind)

    existing = set(inspect(bind).get_table_names())
    print("\nTables:")
    for table in Base.metadata.sorted_tables:
        mark = "ok" if table.name in existing else "missing"
        print(f"  - {table.name} [{mark}]")

    order_ids = []
    if args.sample:
        db = create_session_factory(bind)()
        try:
            order_ids = load_sample_orders(db)
        finally:
            db.close()
        print(f"\nSample orders: {order_ids}")

    if args.url:
        bind.dispose()
    return order_ids


if __name__ == "__main__":
    main()
