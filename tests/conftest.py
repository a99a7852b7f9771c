from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

import pytest

from nannytime.container import wire_container
from nannytime.core.exceptions import StoreError
from nannytime.profiles.model import Profile
from nannytime.shifts.model import Shift
from nannytime.users.model import User

UTC = timezone.utc


def at(year, month, day, hour=0, minute=0, second=0, microsecond=0) -> datetime:
    return datetime(year, month, day, hour, minute, second, microsecond, tzinfo=UTC)


class InMemoryShifts:
    def __init__(self, shifts: Optional[list[Shift]] = None):
        self._by_id: dict[str, Shift] = {s.shift_id: s for s in shifts or []}
        self._id = 0
        self.fail_reads = False
        self.fail_writes = False
        self.calls: list[str] = []

    def _read(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_reads:
            raise StoreError("store offline")

    def _write(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_writes:
            raise StoreError("store offline")

    def list_for_user(self, user_id: str):
        self._read("list_for_user")
        return [s for s in self._by_id.values() if s.user_id == user_id]

    def get_by_id(self, *, user_id: str, shift_id: str) -> Optional[Shift]:
        self._read("get_by_id")
        shift = self._by_id.get(shift_id)
        return shift if shift and shift.user_id == user_id else None

    def insert(self, *, user_id, start_time, end_time, notes=None) -> Shift:
        self._write("insert")
        self._id += 1
        shift = Shift(shift_id=f"s{self._id}", user_id=user_id, start_time=start_time, end_time=end_time, notes=notes)
        self._by_id[shift.shift_id] = shift
        return shift

    def update(self, *, user_id, shift_id, start_time, end_time, notes=None) -> bool:
        self._write("update")
        shift = self._by_id.get(shift_id)
        if not shift or shift.user_id != user_id:
            return False
        self._by_id[shift_id] = replace(shift, start_time=start_time, end_time=end_time, notes=notes)
        return True

    def delete(self, *, user_id, shift_id) -> bool:
        self._write("delete")
        shift = self._by_id.get(shift_id)
        if not shift or shift.user_id != user_id:
            return False
        del self._by_id[shift_id]
        return True

    def get(self, shift_id: str) -> Optional[Shift]:
        return self._by_id.get(shift_id)


class InMemoryProfiles:
    def __init__(self):
        self.by_user: dict[str, Profile] = {}
        self.fail_reads = False
        self.fail_writes = False

    def get(self, user_id: str) -> Optional[Profile]:
        if self.fail_reads:
            raise StoreError("store offline")
        return self.by_user.get(user_id)

    def create(self, profile: Profile) -> Profile:
        if self.fail_writes:
            raise StoreError("store offline")
        self.by_user[profile.user_id] = profile
        return profile

    def upsert(self, profile: Profile) -> None:
        if self.fail_writes:
            raise StoreError("store offline")
        self.by_user[profile.user_id] = profile


class InMemoryUsers:
    def __init__(self):
        self._by_email: dict[str, User] = {}
        self._id = 0

    def get_by_email(self, email: str) -> Optional[User]:
        return self._by_email.get(email)

    def create_user(self, *, email: str, password_hash: str) -> User:
        self._id += 1
        user = User(user_id=f"u{self._id}", email=email, password_hash=password_hash)
        self._by_email[email] = user
        return user


@pytest.fixture
def shifts_repo() -> InMemoryShifts:
    return InMemoryShifts()


@pytest.fixture
def profiles_repo() -> InMemoryProfiles:
    return InMemoryProfiles()


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def container(users_repo, profiles_repo, shifts_repo):
    return wire_container(users_repo=users_repo, profiles_repo=profiles_repo, shifts_repo=shifts_repo)
