"""
Tracker test suite: shared fixtures.

Run:  pytest tests/ -v
"""

from __future__ import annotations

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from projects.models import Project, Status, Task


@pytest.fixture(autouse=True)
def _reset_throttle_cache():
    """Throttle counters live in the default cache; start every test clean."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def _fast_password_hashing(settings):
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(
        email="owner@example.com", password="s3cure-Passw0rd!", name="Owner"
    )


@pytest.fixture
def other_user(django_user_model):
    return django_user_model.objects.create_user(
        email="intruder@example.com", password="s3cure-Passw0rd!", name="Intruder"
    )


@pytest.fixture
def auth_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def other_client(other_user):
    client = APIClient()
    client.force_authenticate(user=other_user)
    return client


@pytest.fixture
def make_project(user):
    def _make(name="Website relaunch", owner=None):
        return Project.objects.create(name=name, owner=owner or user)
    return _make


@pytest.fixture
def make_task():
    def _make(project, name="Task", status=Status.DRAFT, weight=1):
        return Task.objects.create(project=project, name=name, status=status, weight=weight)
    return _make
