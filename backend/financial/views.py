# financial/views.py
"""
Thin views that delegate to financial.ledger.

Views handle: HTTP parsing, authentication, role checks, response formatting.
The ledger handles: tenant validation of referenced ids, postings, balances.
"""

from decimal import Decimal

from django.db.models import Sum
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from accounts.authz import CanWrite, resolve_actor
from ops.responses import command_failure, created, envelope, paginated, parse_query
from tenant.scoping import get_for_tenant_or_404

from .ledger import create_account, create_category, post_transaction
from .models import Account, Category, Transaction
from .serializers import (
    AccountCreateSerializer,
    AccountSerializer,
    CategoryCreateSerializer,
    CategorySerializer,
    DateRangeQuerySerializer,
    TransactionCreateSerializer,
    TransactionListQuerySerializer,
    TransactionSerializer,
)

ZERO = Decimal("0.00")


def _in_date_range(queryset, params: dict):
    if params.get("start_date"):
        queryset = queryset.filter(date__gte=params["start_date"])
    if params.get("end_date"):
        queryset = queryset.filter(date__lte=params["end_date"])
    return queryset


# =============================================================================
# Transactions
# =============================================================================

class TransactionListCreateView(APIView):
    """
    GET  /api/financial/transactions/ -> paginated postings of the tenant
    POST /api/financial/transactions/ -> post a transaction (ACCOUNTANT)
    """
    permission_classes = [IsAuthenticated, CanWrite]

    def get(self, request):
        actor = resolve_actor(request)
        params = parse_query(request, TransactionListQuerySerializer)

        transactions = Transaction.objects.for_tenant(actor.company).select_related(
            "account", "transfer_account", "category",
        )
        transactions = _in_date_range(transactions, params)
        if params.get("transaction_type"):
            transactions = transactions.filter(transaction_type=params["transaction_type"])
        if params.get("category_id"):
            transactions = transactions.filter(category_id=params["category_id"])
        if params.get("account_id"):
            transactions = transactions.filter(account_id=params["account_id"])

        return paginated("transactions", transactions, params, TransactionSerializer)

    def post(self, request):
        actor = resolve_actor(request)
        serializer = TransactionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = post_transaction(actor, **serializer.validated_data)
        if not result.success:
            return command_failure(result)

        posting = Transaction.objects.select_related(
            "account", "transfer_account", "category",
        ).get(pk=result.data.pk)
        return created(
            {"transaction": TransactionSerializer(posting).data},
            "Transaction created successfully",
        )


# =============================================================================
# Accounts
# =============================================================================

class AccountListCreateView(APIView):
    """
    GET  /api/financial/accounts/ -> active accounts ordered by name
    POST /api/financial/accounts/ -> open an account (ACCOUNTANT)
    """
    permission_classes = [IsAuthenticated, CanWrite]

    def get(self, request):
        actor = resolve_actor(request)
        accounts = Account.objects.for_tenant(actor.company).filter(is_active=True).order_by("name")
        return envelope({"accounts": AccountSerializer(accounts, many=True).data})

    def post(self, request):
        actor = resolve_actor(request)
        serializer = AccountCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = create_account(actor, **serializer.validated_data)
        if not result.success:
            return command_failure(result)

        return created({"account": AccountSerializer(result.data).data}, "Account created successfully")


class AccountDetailView(APIView):
    """GET /api/financial/accounts/<pk>/ -> one account with its current balance."""

    def get(self, request, pk):
        actor = resolve_actor(request)
        account = get_for_tenant_or_404(Account, actor.company, pk, label="Account")
        return envelope({"account": AccountSerializer(account).data})


# =============================================================================
# Categories
# =============================================================================

class CategoryListCreateView(APIView):
    permission_classes = [IsAuthenticated, CanWrite]

    def get(self, request):
        actor = resolve_actor(request)
        categories = Category.objects.for_tenant(actor.company)
        category_type = request.query_params.get("type")
        if category_type:
            categories = categories.filter(category_type=category_type.upper())
        return envelope({"categories": CategorySerializer(categories, many=True).data})

    def post(self, request):
        actor = resolve_actor(request)
        serializer = CategoryCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = create_category(actor, **serializer.validated_data)
        if not result.success:
            return command_failure(result)

        return created({"category": CategorySerializer(result.data).data}, "Category created successfully")


# =============================================================================
# Summary
# =============================================================================

class SummaryView(APIView):
    """
    GET /api/financial/summary/?start_date=&end_date=

    Income and expenses are summed over the date range; total_balance
    is the current sum of the tenant's account balances.
    """

    def get(self, request):
        actor = resolve_actor(request)
        params = parse_query(request, DateRangeQuerySerializer)

        postings = _in_date_range(Transaction.objects.for_tenant(actor.company), params)
        total_income = postings.filter(
            transaction_type=Transaction.TransactionType.INCOME,
        ).aggregate(total=Sum("amount"))["total"] or ZERO
        total_expenses = postings.filter(
            transaction_type=Transaction.TransactionType.EXPENSE,
        ).aggregate(total=Sum("amount"))["total"] or ZERO
        total_balance = Account.objects.for_tenant(actor.company).aggregate(
            total=Sum("balance"),
        )["total"] or ZERO

        return envelope({
            "total_income": total_income,
            "total_expenses": total_expenses,
            "net_income": total_income - total_expenses,
            "total_balance": total_balance,
        })
