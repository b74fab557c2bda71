"""Identity provider backed by django.contrib.auth."""

import logging

from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.forms import PasswordResetForm
from django.db import IntegrityError, transaction

from univista.domain import Identity
from univista.domain.errors import IdentityExistsError
from univista.stores.interfaces import IdentityProvider

logger = logging.getLogger(__name__)


def identity_for_user(user) -> Identity:
    return Identity(uid=str(user.pk), email=user.email)


class DjangoIdentityProvider(IdentityProvider):
    """Accounts are Django users whose username is their email address."""

    def create_identity(self, email: str, password: str) -> Identity:
        User = get_user_model()
        email = User.objects.normalize_email(email).lower()
        if User.objects.filter(username=email).exists():
            raise IdentityExistsError(email)
        try:
            with transaction.atomic():
                user = User.objects.create_user(username=email, email=email, password=password)
        except IntegrityError as exc:
            raise IdentityExistsError(email) from exc
        return identity_for_user(user)

    def authenticate(self, email: str, password: str) -> Identity | None:
        user = authenticate(username=email.strip().lower(), password=password)
        return identity_for_user(user) if user is not None else None

    def delete_identity(self, uid: str) -> None:
        get_user_model().objects.filter(pk=uid).delete()

    def send_password_reset(self, email: str) -> None:
        form = PasswordResetForm(data={"email": email})
        if form.is_valid():
            form.save(domain_override="univista", use_https=True)
        else:
            logger.warning("Password reset requested with an invalid email")

    def user_for(self, uid: str):
        return get_user_model().objects.get(pk=uid)
