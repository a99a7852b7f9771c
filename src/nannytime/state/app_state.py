from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Callable, Optional

from ..common.datetime_utils import format_elapsed, now_utc
from ..core.enums import Period, SessionEvent, ViewState, VoiceAction
from ..payroll.service import PayStub, PayStubService
from ..profiles.model import Profile
from ..profiles.service import ProfileService
from ..shifts.lifecycle import ShiftLifecycleManager, find_active
from ..shifts.model import Shift
from ..users.model import Session
from ..users.service import AuthGate
from ..voice.commands import interpret

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """Everything a client renders from; owned by one AppController."""

    session: Optional[Session] = None
    view: ViewState = ViewState.HOME
    shifts: list[Shift] = field(default_factory=list)
    active_shift: Optional[Shift] = None
    profile: Optional[Profile] = None
    is_loading: bool = True
    last_error: Optional[str] = None

    @property
    def user_id(self) -> Optional[str]:
        return self.session.user_id if self.session else None


class AppController:
    """Owns AppState and applies every user action to it.

    Mutations are write -> refresh -> find_active, in that order.
    """

    def __init__(
        self,
        gate: AuthGate,
        lifecycle: ShiftLifecycleManager,
        profiles: ProfileService,
        pay_stubs: PayStubService,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._gate = gate
        self._lifecycle = lifecycle
        self._profiles = profiles
        self._pay_stubs = pay_stubs
        self._clock = clock
        self._unsubscribe: Optional[Callable[[], None]] = None
        self.state = AppState()

    @property
    def gate(self) -> AuthGate:
        return self._gate

    # Lifecycle -----------------------------------------------------------

    def mount(self) -> None:
        if self._unsubscribe is not None:
            return
        self._unsubscribe = self._gate.on_session_change(self._on_session_change)

        session = self._gate.current_session()
        self.state.session = session
        if session:
            self.load_data()
        else:
            self.state.is_loading = False

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_session_change(self, event: SessionEvent, session: Optional[Session]) -> None:
        self.state.session = session
        if event == SessionEvent.SIGNED_IN and session:
            self.load_data()
        else:
            self._clear()

    def _clear(self) -> None:
        self.state.shifts = []
        self.state.profile = None
        self.state.active_shift = None
        self.state.last_error = None
        self.state.is_loading = False

    def load_data(self) -> None:
        user_id = self.state.user_id
        if not user_id:
            return
        self.state.is_loading = True
        try:
            self.state.shifts = self._lifecycle.list_shifts(user_id)
            self.state.profile = self._profiles.get_or_create(user_id)
            self.state.active_shift = find_active(self.state.shifts)
        finally:
            self.state.is_loading = False

    def _refresh_shifts(self) -> None:
        self.state.shifts = self._lifecycle.list_shifts(self.state.user_id)
        self.state.active_shift = find_active(self.state.shifts)

    def _run(self, action: Callable[[], object]):
        """Run a write and then refresh; errors are recorded and re-raised."""
        try:
            result = action()
        except Exception as e:
            self.state.last_error = str(e)
            raise
        self.state.last_error = None
        self._refresh_shifts()
        return result

    # Shift actions -------------------------------------------------------

    def clock_in(self) -> Shift:
        return self._run(lambda: self._lifecycle.clock_in(self.state.user_id, now=self._clock()))

    def clock_out(self, shift_id: Optional[str] = None) -> Shift:
        if shift_id is None and self.state.active_shift is not None:
            shift_id = self.state.active_shift.shift_id
        return self._run(lambda: self._lifecycle.clock_out(self.state.user_id, shift_id or "", now=self._clock()))

    def add_shift(self, notes: Optional[str] = None) -> Shift:
        return self._run(lambda: self._lifecycle.manual_add(self.state.user_id, now=self._clock(), notes=notes))

    def update_shift(self, shift: Shift) -> Shift:
        return self._run(lambda: self._lifecycle.edit_shift(self.state.user_id, shift))

    def delete_shift(self, shift_id: str, *, confirmed: bool) -> bool:
        if not confirmed:
            return False
        self._run(lambda: self._lifecycle.delete_shift(self.state.user_id, shift_id))
        return True

    # Profile / navigation ------------------------------------------------

    def update_profile(self, *, name: str, hourly_rate: float, currency: str) -> Profile:
        try:
            profile = self._profiles.update(self.state.user_id, name=name, hourly_rate=hourly_rate, currency=currency)
        except Exception as e:
            self.state.last_error = str(e)
            raise
        self.state.last_error = None
        self.state.profile = profile
        return profile

    def navigate(self, view: ViewState) -> None:
        self.state.view = ViewState(view)

    def sign_out(self) -> None:
        self._gate.sign_out()

    # Derived values ------------------------------------------------------

    def elapsed(self, now: Optional[datetime] = None) -> str:
        active = self.state.active_shift
        if active is None:
            return "00:00"
        return format_elapsed(active.start_time, now or self._clock())

    def pay_stub(
        self,
        period: Period = Period.WEEK,
        *,
        now: Optional[datetime] = None,
        tz: Optional[tzinfo] = None,
    ) -> Optional[PayStub]:
        if self.state.profile is None:
            return None
        return self._pay_stubs.build_from(
            self.state.shifts,
            self.state.profile,
            period=period,
            now=now or self._clock(),
            tz=tz,
        )

    def pay_stub_note(
        self,
        period: Period = Period.WEEK,
        *,
        now: Optional[datetime] = None,
        tz: Optional[tzinfo] = None,
    ) -> Optional[str]:
        stub = self.pay_stub(period, now=now, tz=tz)
        return self._pay_stubs.note(stub) if stub else None

    def handle_voice_command(self, transcript: str) -> Optional[VoiceAction]:
        action = interpret(transcript, has_active_shift=self.state.active_shift is not None)
        if action == VoiceAction.CLOCK_IN:
            self.clock_in()
        elif action == VoiceAction.CLOCK_OUT:
            self.clock_out()
        logger.debug("Voice command %r -> %s", transcript, action)
        return action
