"""User models"""

from django.contrib.auth.base_user import BaseUserManager
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models, transaction
from mitol.common.models import TimestampedModel

from users.constants import (
    PROFILE_FIELD_DATATYPE_CHOICES,
    USERNAME_MAX_LEN,
)


class UserManager(BaseUserManager):
    """User manager for custom user model"""

    use_in_migrations = True

    @transaction.atomic
    def _create_user(self, username, email, password, **extra_fields):
        """Create and save a user with the given email and password"""
        email = self.normalize_email(email)
        fields = {**extra_fields, "email": email}
        if username is not None:
            fields["username"] = username
        user = self.model(**fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, username, email=None, password=None, **extra_fields):
        """Create a user"""
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        return self._create_user(username, email, password, **extra_fields)

    def create_superuser(self, username, email, password, **extra_fields):
        """Create a superuser"""
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_active", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")  # noqa: EM101
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")  # noqa: EM101

        return self._create_user(username, email, password, **extra_fields)


class User(AbstractBaseUser, TimestampedModel, PermissionsMixin):
    """Primary user class"""

    EMAIL_FIELD = "email"
    USERNAME_FIELD = "username"
    REQUIRED_FIELDS = ["email", "name"]

    username = models.CharField(unique=True, max_length=USERNAME_MAX_LEN)
    email = models.EmailField(blank=False, unique=True)
    name = models.TextField(blank=True, default="")
    is_staff = models.BooleanField(
        default=False, help_text="The user can access the admin site"
    )
    is_active = models.BooleanField(
        default=False, help_text="The user account is active"
    )

    objects = UserManager()

    def get_full_name(self):
        """Returns the user's fullname"""
        return self.name

    def __str__(self):
        """Str representation for the user"""
        return f"User username={self.username} email={self.email}"


class ProfileFieldCategory(models.Model):
    """A named group of custom profile fields"""

    name = models.CharField(max_length=255, unique=True)
    sortorder = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name_plural = "profile field categories"

    def __str__(self):
        return self.name


class ProfileField(TimestampedModel):
    """
    A custom profile field definition.

    For autocomplete fields, param1 holds the newline separated list of allowed
    values and param2 is "1" when multiple values can be selected. For datetime
    fields param1 and param2 hold the minimum and maximum selectable years.
    """

    shortname = models.CharField(max_length=255, unique=True)
    name = models.CharField(max_length=255)
    datatype = models.CharField(max_length=255, choices=PROFILE_FIELD_DATATYPE_CHOICES)
    category = models.ForeignKey(
        ProfileFieldCategory,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="fields",
    )
    param1 = models.TextField(blank=True, default="")
    param2 = models.TextField(blank=True, default="")
    sortorder = models.PositiveIntegerField(default=0)
    required = models.BooleanField(default=False)
    locked = models.BooleanField(default=False)
    visible = models.BooleanField(default=False)

    def __str__(self):
        return f"ProfileField shortname={self.shortname} datatype={self.datatype}"


class ProfileFieldData(TimestampedModel):
    """A user's stored value for a custom profile field"""

    user = models.ForeignKey(
        User, on_delete=models.CASCADE, related_name="profile_field_data"
    )
    field = models.ForeignKey(
        ProfileField, on_delete=models.CASCADE, related_name="user_data"
    )
    data = models.TextField(blank=True, default="")

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["user", "field"], name="unique_user_profile_field_data"
            )
        ]

    def __str__(self):
        return f"ProfileFieldData user={self.user_id} field={self.field_id}"
