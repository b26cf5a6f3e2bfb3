from django.apps import AppConfig


class UsersConfig(AppConfig):
    """Config for users app"""

    name = "users"
