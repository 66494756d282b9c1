"""
HTTP tests for the quote and coupon commit endpoints

Runs the test app against the in-memory store backend with a fixed clock.
"""

from collections.abc import Generator
from decimal import Decimal

from fastapi.testclient import TestClient
import jwt
import pytest

from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.service.pricing.domain.enum.membership_tier import MembershipTier
from src.service.pricing.driven_adapter.repo.in_memory_catalog_query_repo import (
    InMemoryCatalogQueryRepo,
)
from src.service.pricing.driven_adapter.repo.in_memory_pricing_store import InMemoryPricingStore
from test.service.pricing.helpers import (
    OTHER_SCREEN_ID,
    WEDNESDAY,
    FixedPricingClock,
    make_coupon,
    make_rule,
    make_seats,
    make_showtime,
)
from test.test_main import app


QUOTE_URL = '/api/pricing/quote'
COMMIT_URL = '/internal/pricing/coupon-redemptions'


def bearer(user_id: int) -> dict[str, str]:
    token = jwt.encode(
        {'user_id': user_id}, settings.SECRET_KEY.get_secret_value(), algorithm=settings.ALGORITHM
    )
    return {'Authorization': f'Bearer {token}'}


def internal_headers() -> dict[str, str]:
    return {'X-Internal-Token': settings.INTERNAL_API_TOKEN.get_secret_value()}


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    container.pricing_clock.override(FixedPricingClock())
    with TestClient(app) as test_client:
        yield test_client
    container.pricing_clock.reset_override()


@pytest.fixture
def catalog() -> InMemoryCatalogQueryRepo:
    repo = container.in_memory_catalog_query_repo()
    repo.put_showtime(make_showtime(1))
    repo.put_seats(make_seats(start_id=1, count=2))
    repo.put_seats(make_seats(screen_id=OTHER_SCREEN_ID, start_id=50, count=1))
    return repo


@pytest.fixture
def store() -> InMemoryPricingStore:
    return container.in_memory_pricing_store()


@pytest.mark.api
class TestQuoteEndpoint:
    def test_anonymous_quote_uses_camel_case(
        self, client: TestClient, catalog: InMemoryCatalogQueryRepo
    ) -> None:
        response = client.get(QUOTE_URL, params={'showtimeId': 1, 'seatIds': '1,2'})

        assert response.status_code == 200
        body = response.json()
        assert body['showtimeId'] == 1
        assert body['movie'] == 'Interstellar'
        assert body['membershipTier'] == 'NONE'
        assert [seat['seatId'] for seat in body['seats']] == [1, 2]
        assert body['seats'][0]['basePrice'] == 150.0
        assert body['seats'][0]['finalPrice'] == 150.0
        assert body['subtotal'] == 300.0
        assert body['total'] == 300.0
        assert body['coupon'] is None
        assert body['couponError'] is None
        assert body['calculationMs'] >= 0

    def test_member_quote_with_rule_and_coupon(
        self,
        client: TestClient,
        catalog: InMemoryCatalogQueryRepo,
        store: InMemoryPricingStore,
    ) -> None:
        """
        Given: a Wednesday rule ×1.2, a GOLD member and a 10% coupon
        When: two ₹150 seats are quoted
        Then: 150 → 180 → 162 per seat, coupon takes 32.40 off 324.00
        """
        container.in_memory_user_membership_query_repo().put_tier(
            user_id=42, tier=MembershipTier.GOLD
        )
        store.put_rule(
            make_rule(
                rule_type='DAY_TYPE', condition={'days': [WEDNESDAY]}, multiplier=Decimal('1.2')
            )
        )
        store.put_coupon(make_coupon())

        response = client.get(
            QUOTE_URL,
            params={'showtimeId': 1, 'seatIds': '1,2', 'couponCode': 'save10'},
            headers=bearer(42),
        )

        assert response.status_code == 200
        body = response.json()
        assert body['membershipTier'] == 'GOLD'
        seat = body['seats'][0]
        assert seat['appliedRules'][0]['ruleType'] == 'DAY_TYPE'
        assert seat['afterRules'] == 180.0
        assert seat['membershipDiscountPercent'] == 10.0
        assert seat['afterMembership'] == 162.0
        assert body['subtotal'] == 324.0
        assert body['coupon']['code'] == 'SAVE10'
        assert body['couponDiscount'] == 32.4
        assert body['total'] == 291.6
        assert sum(s['couponDiscountAmount'] for s in body['seats']) == pytest.approx(32.4)

    def test_rejected_coupon_still_quotes(
        self, client: TestClient, catalog: InMemoryCatalogQueryRepo
    ) -> None:
        response = client.get(
            QUOTE_URL, params={'showtimeId': 1, 'seatIds': '1', 'couponCode': 'NOPE'}
        )

        assert response.status_code == 200
        body = response.json()
        assert body['couponError'] == 'invalid coupon code'
        assert body['couponDiscount'] == 0.0
        assert body['total'] == 150.0

    @pytest.mark.parametrize('seat_ids', ['1,50', '1,1', 'abc', ''])
    def test_invalid_seat_selection_is_400(
        self, client: TestClient, catalog: InMemoryCatalogQueryRepo, seat_ids: str
    ) -> None:
        response = client.get(QUOTE_URL, params={'showtimeId': 1, 'seatIds': seat_ids})

        assert response.status_code == 400

    def test_unknown_showtime_is_404(
        self, client: TestClient, catalog: InMemoryCatalogQueryRepo
    ) -> None:
        response = client.get(QUOTE_URL, params={'showtimeId': 999, 'seatIds': '1'})

        assert response.status_code == 404
        assert response.json()['detail'] == 'Showtime 999 not found'

    def test_invalid_token_is_401(
        self, client: TestClient, catalog: InMemoryCatalogQueryRepo
    ) -> None:
        response = client.get(
            QUOTE_URL,
            params={'showtimeId': 1, 'seatIds': '1'},
            headers={'Authorization': 'Bearer not-a-jwt'},
        )

        assert response.status_code == 401


@pytest.mark.api
class TestCouponRedemptionEndpoint:
    def test_commit_requires_internal_token(self, client: TestClient) -> None:
        response = client.post(COMMIT_URL, json={'couponId': 1, 'userId': 42})

        assert response.status_code == 401

    def test_last_use_commits_once(self, client: TestClient, store: InMemoryPricingStore) -> None:
        store.put_coupon(make_coupon(max_uses=1))

        first = client.post(
            COMMIT_URL,
            json={'couponId': 1, 'userId': 42, 'bookingId': 'b-1'},
            headers=internal_headers(),
        )
        second = client.post(
            COMMIT_URL,
            json={'couponId': 1, 'userId': 43, 'bookingId': 'b-2'},
            headers=internal_headers(),
        )

        assert first.status_code == 200
        assert first.json() == {'committed': True, 'reason': None, 'requoteRequired': False}
        assert second.status_code == 200
        assert second.json() == {
            'committed': False,
            'reason': 'coupon usage limit reached',
            'requoteRequired': True,
        }
        assert store.get_coupon(1).used_count == 1

    def test_committed_coupon_is_reported_exhausted_on_next_quote(
        self,
        client: TestClient,
        catalog: InMemoryCatalogQueryRepo,
        store: InMemoryPricingStore,
    ) -> None:
        store.put_coupon(make_coupon(max_uses=1))
        client.post(
            COMMIT_URL, json={'couponId': 1, 'userId': 42}, headers=internal_headers()
        )
        # Rules and coupons are read through a TTL cache; drop it as an admin write would
        container.coupon_query_repo().invalidate()

        response = client.get(
            QUOTE_URL, params={'showtimeId': 1, 'seatIds': '1', 'couponCode': 'SAVE10'}
        )

        assert response.json()['couponError'] == 'coupon usage limit reached'


@pytest.mark.api
class TestCommonEndpoints:
    def test_health(self, client: TestClient) -> None:
        response = client.get('/health')

        assert response.status_code == 200
        assert response.json() == {'status': 'healthy', 'service': 'Pricing Engine'}

    def test_metrics_expose_quote_counters(
        self, client: TestClient, catalog: InMemoryCatalogQueryRepo
    ) -> None:
        client.get(QUOTE_URL, params={'showtimeId': 1, 'seatIds': '1'})

        response = client.get('/metrics')

        assert response.status_code == 200
        assert 'pricing_quote' in response.text
