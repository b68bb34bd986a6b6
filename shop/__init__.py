"""회원 / 상품 / 주문 REST API 백엔드"""

__version__ = "0.1.0"
