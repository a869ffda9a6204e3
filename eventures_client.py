"""Connection and session handling for Eventures clients.

A client has to go through three steps before it can work with
events: connect to an API URL, then log in or register, then list,
add or reload events.  :class:`SessionStateMachine` makes these steps
explicit as named states with guarded transitions, and decides which
controls a UI should offer in each state:

==================  ==============================================
State               Enabled controls
==================  ==============================================
``DISCONNECTED``    Connect
``CONNECTING``      none
``CONNECTED``       Connect, Login, Register
``AUTHENTICATING``  none
``AUTHENTICATED``   Connect, Login, Register, Add, Reload
==================  ==============================================

:class:`EventuresClient` drives the state machine from the actions a
user takes and keeps the single line of status text a UI displays.
Its status strings are part of the client contract and must not
change.  Validation problems with a Register or Add form are reported
through :attr:`EventuresClient.alert` as one combined message; the
state does not change, so the form can be corrected and resubmitted.

Running this module starts a line‑oriented driver on stdin/stdout that
exposes the same actions, e.g.::

    python eventures_client.py --api-url http://localhost:8000/api/
"""

from __future__ import annotations

import argparse
import logging
import shlex
import sys
from enum import Enum
from typing import Any, Dict, List, Optional, TextIO

import requests
from pydantic import ValidationError

from eventures.app.core.config import settings
from eventures.app.core.logging_config import setup_logging
from eventures.app.schemas.event import EventBindingModel
from eventures.app.schemas.user import RegisterUserModel
from eventures.app.services.results import combine_messages
from eventures.app.services.validation import validate_event, validate_registration
from eventures_api import EventuresAPI

logger = logging.getLogger(__name__)

STATUS_CONNECT_FAILED = "Could not connect. Try again."
STATUS_CONNECTED = "Connected successfully."
STATUS_AUTH_FAILED = "Could not authorize."
STATUS_EVENTS_FOUND = "Events found: {count}"
STATUS_LOAD_FAILED = "Could not load events. Try again."


class SessionState(Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class Control(str, Enum):
    """UI controls, named by the widget ids of the mobile app."""

    CONNECT = "buttonConnect"
    LOGIN = "buttonLogin"
    REGISTER = "buttonRegister"
    ADD = "buttonAdd"
    RELOAD = "buttonReload"


class Trigger(Enum):
    BEGIN_CONNECT = "begin_connect"
    CONNECT_SUCCEEDED = "connect_succeeded"
    CONNECT_FAILED = "connect_failed"
    BEGIN_AUTH = "begin_auth"
    AUTH_SUCCEEDED = "auth_succeeded"
    AUTH_FAILED = "auth_failed"


class InvalidTransition(RuntimeError):
    """An action was attempted in a state that does not allow it."""


ENABLED_CONTROLS: Dict[SessionState, frozenset] = {
    SessionState.DISCONNECTED: frozenset({Control.CONNECT}),
    SessionState.CONNECTING: frozenset(),
    SessionState.CONNECTED: frozenset({Control.CONNECT, Control.LOGIN, Control.REGISTER}),
    SessionState.AUTHENTICATING: frozenset(),
    SessionState.AUTHENTICATED: frozenset(Control),
}

# trigger -> (allowed source states, target state)
TRANSITIONS: Dict[Trigger, tuple] = {
    Trigger.BEGIN_CONNECT: (
        {SessionState.DISCONNECTED, SessionState.CONNECTED, SessionState.AUTHENTICATED},
        SessionState.CONNECTING,
    ),
    Trigger.CONNECT_SUCCEEDED: ({SessionState.CONNECTING}, SessionState.CONNECTED),
    Trigger.CONNECT_FAILED: ({SessionState.CONNECTING}, SessionState.DISCONNECTED),
    Trigger.BEGIN_AUTH: (
        {SessionState.CONNECTED, SessionState.AUTHENTICATED},
        SessionState.AUTHENTICATING,
    ),
    Trigger.AUTH_SUCCEEDED: ({SessionState.AUTHENTICATING}, SessionState.AUTHENTICATED),
    Trigger.AUTH_FAILED: ({SessionState.AUTHENTICATING}, SessionState.CONNECTED),
}


class SessionStateMachine:
    """Finite state machine for a client's connection and session."""

    def __init__(self) -> None:
        self.state = SessionState.DISCONNECTED

    def fire(self, trigger: Trigger) -> SessionState:
        sources, target = TRANSITIONS[trigger]
        if self.state not in sources:
            raise InvalidTransition(f"Cannot {trigger.value} while {self.state.value}")
        logger.debug("Session %s -> %s (%s)", self.state.value, target.value, trigger.value)
        self.state = target
        return target

    def enabled_controls(self) -> frozenset:
        return ENABLED_CONTROLS[self.state]

    def is_enabled(self, control: Control) -> bool:
        return control in ENABLED_CONTROLS[self.state]


class EventuresClient:
    """The actions a user can take, gated by the session state."""

    def __init__(self, *, session: Optional[requests.Session] = None, timeout: Optional[float] = None) -> None:
        self.machine = SessionStateMachine()
        self.session = session
        self.timeout = timeout
        self.api: Optional[EventuresAPI] = None
        self.status_text = ""
        # Combined validation message of the last rejected Register/Add.
        self.alert: Optional[str] = None
        self.events: List[Dict[str, Any]] = []

    @property
    def state(self) -> SessionState:
        return self.machine.state

    def is_enabled(self, control: Control) -> bool:
        return self.machine.is_enabled(control)

    def _require(self, control: Control) -> None:
        self.alert = None
        if not self.machine.is_enabled(control):
            raise InvalidTransition(f"{control.value} is disabled while {self.state.value}")

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def connect(self, api_url: str) -> bool:
        """Probe ``api_url``; on success Login and Register become available.

        A failed attempt leaves the client disconnected, dropping any
        earlier connection or session.
        """
        self._require(Control.CONNECT)
        self.machine.fire(Trigger.BEGIN_CONNECT)
        api = EventuresAPI(base_url=api_url, session=self.session, timeout=self.timeout)
        reachable = False
        try:
            reachable, _ = api.probe()
        finally:
            if reachable:
                self.api = api
                self.machine.fire(Trigger.CONNECT_SUCCEEDED)
                self.status_text = STATUS_CONNECTED
            else:
                self.api = None
                self.events = []
                self.machine.fire(Trigger.CONNECT_FAILED)
                self.status_text = STATUS_CONNECT_FAILED
        logger.info("Connect to %s: %s", api_url, self.status_text)
        return reachable

    def login(self, username: str, password: str) -> bool:
        self._require(Control.LOGIN)
        self.machine.fire(Trigger.BEGIN_AUTH)
        authorized = False
        try:
            _, error = self.api.login(username, password)
            authorized = error is None
        finally:
            self._finish_auth(authorized)
        if authorized:
            self._show_events()
        return authorized

    def register(self, draft: RegisterUserModel) -> bool:
        """Validate locally, create the account, then log in with it."""
        self._require(Control.REGISTER)
        errors = validate_registration(draft)
        if errors:
            self.alert = combine_messages(errors)
            return False
        self.machine.fire(Trigger.BEGIN_AUTH)
        authorized = False
        try:
            _, error = self.api.register(draft)
            if error is None:
                _, error = self.api.login(draft.username.strip(), draft.password)
                authorized = error is None
            elif error["status_code"] == 400:
                self.alert = error["message"]
        finally:
            self._finish_auth(authorized)
        if authorized:
            self._show_events()
        return authorized

    def add_event(self, draft: EventBindingModel) -> bool:
        """Create an event and refresh the displayed count."""
        self._require(Control.ADD)
        errors = validate_event(draft)
        if errors:
            self.alert = combine_messages(errors)
            return False
        _, error = self.api.create_event(draft)
        if error is not None:
            if error["status_code"] == 400:
                self.alert = error["message"]
            else:
                self.status_text = error["message"]
            return False
        return self._show_events()

    def reload(self) -> bool:
        self._require(Control.RELOAD)
        return self._show_events()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _finish_auth(self, authorized: bool) -> None:
        if authorized:
            self.machine.fire(Trigger.AUTH_SUCCEEDED)
            return
        self.api.logout()
        self.events = []
        self.machine.fire(Trigger.AUTH_FAILED)
        self.status_text = STATUS_AUTH_FAILED

    def _show_events(self) -> bool:
        events, error = self.api.list_events()
        if error is not None:
            self.status_text = STATUS_LOAD_FAILED
            return False
        self.events = events
        self.status_text = STATUS_EVENTS_FOUND.format(count=len(events))
        return True


# ----------------------------------------------------------------------
# Line-oriented driver
# ----------------------------------------------------------------------
HELP_TEXT = (
    "Commands:\n"
    "  connect [url]\n"
    "  login <username> <password>\n"
    "  register username=.. email=.. password=.. confirmPassword=.. firstName=.. lastName=..\n"
    "  add name=.. place=.. start=.. end=.. totalTickets=.. pricePerTicket=..\n"
    "  reload\n"
    "  list\n"
    "  help\n"
    "  quit"
)


def _key_values(args: List[str]) -> Dict[str, str]:
    pairs = {}
    for arg in args:
        key, sep, value = arg.partition("=")
        if sep:
            pairs[key] = value or None
    return pairs


class ClientShell:
    """Reads commands from a stream and runs them against a client."""

    def __init__(self, client: EventuresClient, default_url: str, out: TextIO = sys.stdout) -> None:
        self.client = client
        self.default_url = default_url
        self.out = out

    def _print(self, text: str) -> None:
        self.out.write(text + "\n")

    def _report(self) -> None:
        if self.client.alert:
            self._print(f"! {self.client.alert.strip()}")
        self._print(self.client.status_text)
        enabled = ", ".join(c.name.lower() for c in Control if self.client.is_enabled(c))
        self._print(f"[{enabled}]")

    def execute(self, line: str) -> bool:
        """Run one command line.  Returns ``False`` when the shell should stop."""
        try:
            parts = shlex.split(line)
        except ValueError as exc:
            self._print(f"! {exc}")
            return True
        if not parts:
            return True
        command, args = parts[0].lower(), parts[1:]
        if command in {"quit", "exit"}:
            return False
        if command == "help":
            self._print(HELP_TEXT)
            return True
        try:
            if command == "connect":
                self.client.connect(args[0] if args else self.default_url)
            elif command == "login" and len(args) == 2:
                self.client.login(args[0], args[1])
            elif command == "register":
                self.client.register(RegisterUserModel.model_validate(_key_values(args)))
            elif command == "add":
                self.client.add_event(EventBindingModel.model_validate(_key_values(args)))
            elif command == "reload":
                self.client.reload()
            elif command == "list":
                for event in self.client.events:
                    self._print(f"#{event['id']} {event['name']} @ {event['place']} ({event['start']})")
            else:
                self._print(HELP_TEXT)
                return True
        except InvalidTransition as exc:
            self._print(f"! {exc}")
            return True
        except ValidationError as exc:
            fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err["loc"])
            self._print(f"! Invalid value for: {fields}")
            return True
        self._report()
        return True

    def run(self, stream: TextIO = sys.stdin) -> None:
        self._report()
        for line in stream:
            if not self.execute(line):
                break


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Eventures command-line client.")
    parser.add_argument("--api-url", default=settings.client_api_url, help="API base URL, including /api/")
    parser.add_argument("--timeout", type=float, default=settings.client_timeout, help="request timeout in seconds")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    shell = ClientShell(EventuresClient(timeout=args.timeout), args.api_url)
    try:
        shell.run()
    except KeyboardInterrupt:
        logger.info("Client stopped by user.")


if __name__ == "__main__":
    main()
