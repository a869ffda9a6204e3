"""
HTML rendering for the web UI.

Pages are small enough to be assembled from strings.  Every value that
comes from the database or the user goes through ``html.escape``.
"""

import html
from datetime import datetime
from typing import Any, Iterable, Optional

from eventures.app.schemas.event import EventBindingModel, EventListingModel

from .controller import ViewResult


def _e(value: Any) -> str:
    return html.escape("" if value is None else str(value))


def _dt(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%dT%H:%M") if value else ""


def layout(title: str, body: str) -> str:
    return (
        "<!DOCTYPE html>\n"
        f"<html><head><meta charset=\"utf-8\"><title>{_e(title)} - Eventures</title></head>\n"
        "<body>\n"
        "<nav><a href=\"/events/all\">All Events</a> | <a href=\"/events/create\">Create Event</a> | "
        "<a href=\"/users/login\">Login</a></nav>\n"
        f"<h1>{_e(title)}</h1>\n{body}\n</body></html>"
    )


def render_errors(errors: Iterable[str]) -> str:
    items = "".join(f"<li>{_e(message)}</li>" for message in errors)
    return f"<ul class=\"errors\">{items}</ul>" if items else ""


def render_all(events: Iterable[EventListingModel]) -> str:
    rows = "".join(
        "<tr>"
        f"<td>{_e(event.name)}</td><td>{_e(event.place)}</td>"
        f"<td>{_e(event.start)}</td><td>{_e(event.end)}</td>"
        f"<td>{_e(event.total_tickets)}</td><td>{_e(event.price_per_ticket)}</td>"
        f"<td>{_e(event.owner)}</td>"
        f"<td><a href=\"/events/edit/{event.id}\">Edit</a> "
        f"<a href=\"/events/delete/{event.id}\">Delete</a></td>"
        "</tr>"
        for event in events
    )
    return layout(
        "All Events",
        "<table><tr><th>Name</th><th>Place</th><th>Start</th><th>End</th>"
        f"<th>Tickets</th><th>Price</th><th>Owner</th><th></th></tr>{rows}</table>",
    )


def render_form(title: str, action: str, model: EventBindingModel, errors: Iterable[str]) -> str:
    return layout(
        title,
        render_errors(errors)
        + f"<form method=\"post\" action=\"{_e(action)}\">"
        f"<label>Name <input name=\"name\" value=\"{_e(model.name)}\"></label>"
        f"<label>Place <input name=\"place\" value=\"{_e(model.place)}\"></label>"
        f"<label>Start <input type=\"datetime-local\" name=\"start\" value=\"{_dt(model.start)}\"></label>"
        f"<label>End <input type=\"datetime-local\" name=\"end\" value=\"{_dt(model.end)}\"></label>"
        f"<label>Total Tickets <input type=\"number\" name=\"total_tickets\" value=\"{_e(model.total_tickets)}\"></label>"
        f"<label>Price Per Ticket <input name=\"price_per_ticket\" value=\"{_e(model.price_per_ticket)}\"></label>"
        f"<button type=\"submit\">{_e(title)}</button></form>",
    )


def render_delete(event: EventListingModel, event_id: int) -> str:
    return layout(
        "Delete Event",
        f"<p>Are you sure you want to delete <strong>{_e(event.name)}</strong> in {_e(event.place)}?</p>"
        f"<form method=\"post\" action=\"/events/delete/{event_id}\">"
        "<button type=\"submit\">Delete</button></form>",
    )


def render_login(error: Optional[str] = None) -> str:
    return layout(
        "Login",
        render_errors([error] if error else [])
        + "<form method=\"post\" action=\"/users/login\">"
        "<label>Username <input name=\"username\"></label>"
        "<label>Password <input type=\"password\" name=\"password\"></label>"
        "<button type=\"submit\">Login</button></form>",
    )


def render(result: ViewResult) -> str:
    """Render the page a controller action selected."""
    if result.view == "all":
        return render_all(result.model)
    if result.view == "create":
        return render_form("Create Event", "/events/create", result.model, result.errors)
    if result.view == "edit":
        return render_form("Edit Event", f"/events/edit/{result.event_id}", result.model, result.errors)
    if result.view == "delete":
        return render_delete(result.model, result.event_id)
    raise ValueError(f"Unknown view {result.view!r}")
