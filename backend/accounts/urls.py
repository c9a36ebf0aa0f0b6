# accounts/urls.py
from django.urls import path

from .views import (
    LoginView,
    MeView,
    ProfileView,
    RegisterView,
    UserDeactivateView,
    UserListCreateView,
)

app_name = "accounts"

urlpatterns = [
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    path("me/", MeView.as_view(), name="me"),
    path("profile/", ProfileView.as_view(), name="profile"),
    path("users/", UserListCreateView.as_view(), name="user-list"),
    path("users/<int:pk>/deactivate/", UserDeactivateView.as_view(), name="user-deactivate"),
]
