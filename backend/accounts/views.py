# accounts/views.py
"""
Authentication and tenant user administration.

POST /api/auth/register/                 -> create company + ADMIN user, returns token
POST /api/auth/login/                    -> exchange credentials for a token
GET  /api/auth/me/                       -> current user with company
PUT  /api/auth/profile/                  -> update own name/email
GET  /api/auth/users/                    -> list users of the tenant (ADMIN)
POST /api/auth/users/                    -> create a user in the tenant (ADMIN)
PUT  /api/auth/users/<pk>/deactivate/    -> revoke a user's access (ADMIN)
"""

from rest_framework import permissions, status
from rest_framework.views import APIView

from ops.responses import PageQuerySerializer, command_failure, created, envelope, failure, paginated, parse_query
from tenant.scoping import get_for_tenant_or_404

from .authentication import issue_token
from .authz import AdminOnly, resolve_actor
from .commands import create_company_user, deactivate_user, login, register_signup, update_profile
from .models import User
from .serializers import (
    LoginSerializer,
    ProfileUpdateSerializer,
    RegistrationSerializer,
    UserCreateSerializer,
    UserSerializer,
    UserWithCompanySerializer,
)
from .throttles import LoginThrottle, RegistrationThrottle


class RegisterView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []
    throttle_classes = [RegistrationThrottle]

    def post(self, request):
        serializer = RegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = register_signup(**serializer.validated_data)
        if not result.success:
            return command_failure(result)

        user = result.data["user"]
        return created(
            {"user": UserSerializer(user).data, "token": issue_token(user)},
            "User registered successfully",
        )


class LoginView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []
    throttle_classes = [LoginThrottle]

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = login(request=request, **serializer.validated_data)
        if not result.success:
            return failure(result.error, code=result.code, status_code=status.HTTP_401_UNAUTHORIZED)

        user = result.data
        return envelope(
            {"user": UserWithCompanySerializer(user).data, "token": issue_token(user)},
            message="Login successful",
        )


class MeView(APIView):
    def get(self, request):
        return envelope({"user": UserWithCompanySerializer(request.user).data})


class ProfileView(APIView):
    def put(self, request):
        actor = resolve_actor(request)
        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = update_profile(actor, **serializer.validated_data)
        if not result.success:
            return command_failure(result)

        return envelope(
            {"user": UserSerializer(result.data).data},
            message="Profile updated successfully",
        )


class UserListCreateView(APIView):
    permission_classes = [permissions.IsAuthenticated, AdminOnly]

    def get(self, request):
        actor = resolve_actor(request)
        params = parse_query(request, PageQuerySerializer)
        users = User.objects.for_tenant(actor.company).order_by("name", "id")
        return paginated("users", users, params, UserSerializer)

    def post(self, request):
        actor = resolve_actor(request)
        serializer = UserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = create_company_user(actor, **serializer.validated_data)
        if not result.success:
            return command_failure(result)

        return created({"user": UserSerializer(result.data).data}, "User created successfully")


class UserDeactivateView(APIView):
    permission_classes = [permissions.IsAuthenticated, AdminOnly]

    def put(self, request, pk):
        actor = resolve_actor(request)
        user = get_for_tenant_or_404(User, actor.company, pk, label="User")

        result = deactivate_user(actor, user)
        if not result.success:
            return command_failure(result)

        return envelope({"user": UserSerializer(result.data).data}, message="User deactivated successfully")
