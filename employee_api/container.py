from __future__ import annotations

import threading
from dataclasses import dataclass
from functools import partial
from typing import Callable, Optional

from employee_api.core.settings import AppSettings, get_app_settings
from employee_api.db.config import StoreSettings, get_store_settings
from employee_api.db.seed import default_users
from employee_api.db.store import JsonFileStore, RecordStore
from employee_api.repositories.employees import EmployeeRepository
from employee_api.repositories.users import UserRepository
from employee_api.services.auth import AuthService
from employee_api.services.employees import EmployeeService


@dataclass(frozen=True)
class Container:
    settings: AppSettings

    users_store: RecordStore
    employees_store: RecordStore

    users_repo: UserRepository
    employees_repo: EmployeeRepository

    auth_service: AuthService
    employee_service: EmployeeService


def build_container(
    *,
    users_store: RecordStore,
    employees_store: RecordStore,
    settings: Optional[AppSettings] = None,
) -> Container:
    """Wire repositories and services around the given stores."""
    settings = settings if settings is not None else get_app_settings()
    users_repo = UserRepository(users_store)
    employees_repo = EmployeeRepository(employees_store)

    return Container(
        settings=settings,
        users_store=users_store,
        employees_store=employees_store,
        users_repo=users_repo,
        employees_repo=employees_repo,
        auth_service=AuthService(users_repo, settings),
        employee_service=EmployeeService(employees_repo),
    )


def build_file_container(
    settings: Optional[AppSettings] = None,
    store_settings: Optional[StoreSettings] = None,
) -> Container:
    """Container backed by the JSON documents under store_settings.DATA_DIR."""
    settings = settings if settings is not None else get_app_settings()
    store_settings = store_settings or get_store_settings()
    return build_container(
        users_store=JsonFileStore(
            store_settings.users_path,
            seed=partial(default_users, settings),
            strict=store_settings.STORE_STRICT_LOAD,
        ),
        employees_store=JsonFileStore(
            store_settings.employees_path, strict=store_settings.STORE_STRICT_LOAD
        ),
        settings=settings,
    )


class ContainerProvider:
    """
    Hands out the application's Container, building it on first use.

    Nothing touches DATA_DIR until the first request needs a repository, so
    importing the application (e.g. to export its OpenAPI document) has no
    side effects on disk.
    """

    def __init__(
        self,
        factory: Callable[[], Container],
        container: Optional[Container] = None,
    ) -> None:
        self._factory = factory
        self._container = container
        self._lock = threading.Lock()

    @property
    def built(self) -> bool:
        return self._container is not None

    def get(self) -> Container:
        if self._container is None:
            with self._lock:
                if self._container is None:
                    self._container = self._factory()
        return self._container
