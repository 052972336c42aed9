"""
Test configuration and fixtures for pytest.

Fixtures include: an in-memory fake Kubernetes cluster, Kubernetes handles
built on mocked API clients, an in-memory SQLite template store and an
HTTP client bound to the FastAPI app.
"""

import copy
import os
from types import SimpleNamespace
from unittest.mock import Mock

import pytest
import pytest_asyncio


def pytest_configure(config):
    """
    Pytest hook called before test collection.
    Sets up test environment variables and registers custom markers.
    """
    # Set test environment variables BEFORE any app imports
    os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
    os.environ["ENVIRONMENT"] = "development"
    os.environ["LOG_LEVEL"] = "DEBUG"

    from mcp_cloud.config import get_settings
    get_settings.cache_clear()

    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "kubernetes: mark test as exercising the Kubernetes facade")


# ============================================================================
# Kubernetes fakes
# ============================================================================

def _merge_patch(target: dict, patch: dict) -> dict:
    """RFC 7386 JSON merge patch."""
    for key, value in patch.items():
        if value is None:
            target.pop(key, None)
        elif isinstance(value, dict) and isinstance(target.get(key), dict):
            _merge_patch(target[key], value)
        else:
            target[key] = copy.deepcopy(value)
    return target


class FakeCluster:
    """
    In-memory stand-in for the API server.

    Exposes Mock-based core_v1/apps_v1/networking_v1 groups whose namespaced
    methods read and write a shared object store, so calls can be both
    asserted on and observed through later reads.
    """

    GROUPS = {
        "core_v1": {"pod": "Pod", "service": "Service", "secret": "Secret"},
        "apps_v1": {"deployment": "Deployment"},
        "networking_v1": {"ingress": "Ingress"},
    }

    def __init__(self):
        self.objects = {}
        self.namespaces = ["default"]
        for group, resources in self.GROUPS.items():
            api = Mock(name=group)
            for resource, kind in resources.items():
                self._bind(api, resource, kind)
            setattr(self, group, api)
        self.core_v1.list_namespace.side_effect = lambda **kwargs: SimpleNamespace(
            items=[{"metadata": {"name": ns}} for ns in self.namespaces]
        )

    def add(self, kind: str, namespace: str, manifest: dict) -> None:
        stored = copy.deepcopy(manifest)
        stored.setdefault("metadata", {})["namespace"] = namespace
        self.objects[(kind, namespace, stored["metadata"]["name"])] = stored

    def _lookup(self, kind, namespace, name):
        key = (kind, namespace, name)
        if key not in self.objects:
            raise _api_exception(404, "Not Found")
        return key

    def _bind(self, api: Mock, resource: str, kind: str) -> None:
        def list_(namespace, **kwargs):
            return SimpleNamespace(items=[
                copy.deepcopy(obj) for (k, ns, _), obj in self.objects.items()
                if k == kind and ns == namespace
            ])

        def read(name, namespace, **kwargs):
            return copy.deepcopy(self.objects[self._lookup(kind, namespace, name)])

        def create(namespace, body, **kwargs):
            name = body["metadata"]["name"]
            if (kind, namespace, name) in self.objects:
                raise _api_exception(409, "Conflict")
            self.add(kind, namespace, body)
            return copy.deepcopy(self.objects[(kind, namespace, name)])

        def replace(name, namespace, body, **kwargs):
            self._lookup(kind, namespace, name)
            self.add(kind, namespace, body)
            return copy.deepcopy(self.objects[(kind, namespace, name)])

        def patch(name, namespace, body, **kwargs):
            key = self._lookup(kind, namespace, name)
            return copy.deepcopy(_merge_patch(self.objects[key], body))

        def delete(name, namespace, **kwargs):
            del self.objects[self._lookup(kind, namespace, name)]
            return {"kind": "Status", "status": "Success", "details": {"name": name}}

        getattr(api, f"list_namespaced_{resource}").side_effect = list_
        getattr(api, f"read_namespaced_{resource}").side_effect = read
        getattr(api, f"create_namespaced_{resource}").side_effect = create
        getattr(api, f"replace_namespaced_{resource}").side_effect = replace
        getattr(api, f"patch_namespaced_{resource}").side_effect = patch
        getattr(api, f"delete_namespaced_{resource}").side_effect = delete


def _api_exception(status: int, reason: str):
    from kubernetes.client.rest import ApiException
    return ApiException(status=status, reason=reason)


@pytest.fixture
def fake_cluster():
    """Empty in-memory cluster with only the default namespace."""
    return FakeCluster()


@pytest.fixture
def k8s_handle(fake_cluster):
    """KubernetesHandle whose API groups are served by fake_cluster."""
    from kubernetes import client
    from mcp_cloud.services.kubernetes import KubernetesHandle, ResourceClientSet

    return KubernetesHandle(
        api_client=client.ApiClient(),
        clients=ResourceClientSet(
            core_v1=fake_cluster.core_v1,
            apps_v1=fake_cluster.apps_v1,
            networking_v1=fake_cluster.networking_v1,
        ),
    )


@pytest.fixture
def operations(k8s_handle):
    from mcp_cloud.services.kubernetes import ResourceOperations
    return ResourceOperations(k8s_handle)


@pytest.fixture
def uninitialized_operations():
    from mcp_cloud.services.kubernetes import ResourceOperations
    return ResourceOperations(None)


# ============================================================================
# Database and HTTP
# ============================================================================

@pytest_asyncio.fixture
async def db_engine():
    """In-memory SQLite engine with the schema created."""
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool
    from mcp_cloud.database import Base
    from mcp_cloud import models  # noqa: F401

    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def async_client(session_factory, k8s_handle):
    """HTTP client for the app, with the test database and fake cluster wired in."""
    from httpx import AsyncClient, ASGITransport
    from mcp_cloud.main import app
    from mcp_cloud.database import get_db

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.state.kubernetes = k8s_handle

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
    app.state.kubernetes = None
