"""Factory Boy definition for :class:`aquatrack.models.user.User`."""

from __future__ import annotations

import factory
from aquatrack.models.user import User
from tests.factories import BaseFactory
from werkzeug.security import generate_password_hash

DEFAULT_PASSWORD = "Passw0rd!"


class UserFactory(BaseFactory):
    """Build persisted :class:`aquatrack.models.user.User` instances.

    Pass ``password=...`` to choose the raw password; it is hashed the same
    way the model setter does and never stored in clear.
    """

    class Meta:
        model = User

    class Params:
        password = DEFAULT_PASSWORD

    id = None  # let autoincrement handle it
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    name = factory.Faker("first_name")
    gender = "undefined"
    daily_norm = 2000.0
    weight = 0.0
    time_active = 0.0
    password_hash = factory.LazyAttribute(lambda o: generate_password_hash(o.password))
