# tests/conftest.py
"""
Pytest fixtures for BizLedger tests.

- Two companies (tenants) so every cross-tenant path can be exercised
- One user per role in the first company, an ADMIN in the second
- API clients carrying real bearer tokens issued by accounts.authentication
"""

from decimal import Decimal

import pytest
from django.core.cache import cache
from django.utils import timezone
from rest_framework.test import APIClient

from accounts.authentication import issue_token
from accounts.authz import ActorContext
from accounts.models import Company, User
from financial.models import Account


PASSWORD = "testpass123"


@pytest.fixture(autouse=True)
def _clear_throttle_cache():
    """Throttle counters live in the cache; start every test from zero."""
    cache.clear()
    yield
    cache.clear()


# =============================================================================
# Company & User Fixtures
# =============================================================================

@pytest.fixture
def company(db):
    return Company.objects.create(name="Test Company", email="info@test.com")


@pytest.fixture
def second_company(db):
    """A second tenant for isolation tests."""
    return Company.objects.create(name="Second Company")


@pytest.fixture
def make_user(db, company):
    """Factory: make_user(role, email=None, company=None, **fields)."""
    counter = {"n": 0}

    def _make(role, email=None, company_=None, **fields):
        counter["n"] += 1
        return User.objects.create_user(
            email=email or f"{role.lower()}{counter['n']}@test.com",
            password=PASSWORD,
            name=fields.pop("name", f"Test {role.title()}"),
            role=role,
            company=company_ or company,
            **fields,
        )

    return _make


@pytest.fixture
def admin_user(make_user):
    return make_user(User.Role.ADMIN, email="admin@test.com")


@pytest.fixture
def accountant(make_user):
    return make_user(User.Role.ACCOUNTANT, email="accountant@test.com")


@pytest.fixture
def regular_user(make_user):
    return make_user(User.Role.USER, email="user@test.com")


@pytest.fixture
def viewer(make_user):
    return make_user(User.Role.VIEWER, email="viewer@test.com")


@pytest.fixture
def other_admin(make_user, second_company):
    """ADMIN of the second company."""
    return make_user(User.Role.ADMIN, email="admin@second.com", company_=second_company)


@pytest.fixture
def actor(accountant):
    return ActorContext(user=accountant, company=accountant.company, role=accountant.role)


@pytest.fixture
def other_actor(other_admin):
    return ActorContext(user=other_admin, company=other_admin.company, role=other_admin.role)


# =============================================================================
# API Clients
# =============================================================================

@pytest.fixture
def api_client():
    """Unauthenticated client."""
    return APIClient()


@pytest.fixture
def auth_client():
    """Factory: auth_client(user) -> APIClient sending ``Authorization: Bearer <token>``."""

    def _client(user):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_token(user)}")
        return client

    return _client


@pytest.fixture
def accountant_client(auth_client, accountant):
    return auth_client(accountant)


@pytest.fixture
def viewer_client(auth_client, viewer):
    return auth_client(viewer)


# =============================================================================
# Financial Fixtures
# =============================================================================

@pytest.fixture
def cash_account(company):
    return Account.objects.create(
        company=company,
        name="Cash",
        account_type=Account.AccountType.ASSET,
    )


@pytest.fixture
def bank_account(company):
    return Account.objects.create(
        company=company,
        name="Bank",
        account_type=Account.AccountType.ASSET,
        balance=Decimal("1000.00"),
    )


@pytest.fixture
def foreign_account(second_company):
    """An account owned by the second company."""
    return Account.objects.create(
        company=second_company,
        name="Their Cash",
        account_type=Account.AccountType.ASSET,
        balance=Decimal("500.00"),
    )


@pytest.fixture
def now():
    return timezone.now()
