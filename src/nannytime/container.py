from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta, tzinfo
from typing import Optional

from .core.constants import DEFAULT_SESSION_TTL_HOURS, DEFAULT_WEEK_START
from .database.connection import DBConfig, DatabaseConnection
from .payroll.service import PayStubService
from .profiles.mysql_profile_repository import MySQLProfileRepository
from .profiles.repository import ProfileRepository
from .profiles.service import ProfileService
from .shifts.lifecycle import ShiftLifecycleManager
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .state.app_state import AppController
from .state.registry import ClientRegistry
from .summary.base import NullSummarizer, Summarizer
from .summary.service import SummaryService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthGate, AuthService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    profiles_repo: ProfileRepository
    shifts_repo: ShiftRepository

    auth_service: AuthService
    profile_service: ProfileService
    shift_lifecycle: ShiftLifecycleManager
    summary_service: SummaryService
    pay_stub_service: PayStubService

    clients: ClientRegistry


def wire_container(
    *,
    users_repo: UserRepository,
    profiles_repo: ProfileRepository,
    shifts_repo: ShiftRepository,
    summarizer: Optional[Summarizer] = None,
    week_start: int = DEFAULT_WEEK_START,
    tz: Optional[tzinfo] = None,
    session_ttl: timedelta = timedelta(hours=DEFAULT_SESSION_TTL_HOURS),
    enforce_single_active: bool = True,
    allow_inverted_range: bool = False,
) -> Container:
    auth_service = AuthService(users_repo, session_ttl=session_ttl)
    profile_service = ProfileService(profiles_repo)
    shift_lifecycle = ShiftLifecycleManager(
        shifts_repo,
        enforce_single_active=enforce_single_active,
        allow_inverted_range=allow_inverted_range,
    )
    summary_service = SummaryService(summarizer or NullSummarizer())
    pay_stub_service = PayStubService(summary_service, week_start=week_start, tz=tz)

    def new_controller() -> AppController:
        return AppController(AuthGate(auth_service), shift_lifecycle, profile_service, pay_stub_service)

    return Container(
        users_repo=users_repo,
        profiles_repo=profiles_repo,
        shifts_repo=shifts_repo,
        auth_service=auth_service,
        profile_service=profile_service,
        shift_lifecycle=shift_lifecycle,
        summary_service=summary_service,
        pay_stub_service=pay_stub_service,
        clients=ClientRegistry(new_controller, is_valid=lambda token: auth_service.get_session(token) is not None),
    )


def build_container(*, db_config: dict, summarizer: Optional[Summarizer] = None, **options) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return wire_container(
        users_repo=MySQLUserRepository(conn),
        profiles_repo=MySQLProfileRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        summarizer=summarizer,
        **options,
    )
