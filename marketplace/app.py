from __future__ import annotations

import datetime as dt
import time
import uuid

from fastapi import Depends, FastAPI, HTTPException, Request
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events, record_event
from .auth.dependencies import get_viewer_email, require_admin, require_user
from .auth.users import authenticate
from .catalog.data_store import (
    add_listing,
    get_catalog,
    get_listing,
    get_listings_for_owner,
    record_view,
    remove_listing,
)
from .catalog.models import (
    Listing,
    ListingCreateRequest,
    ListingsResponse,
    listing_from_record,
)
from .config import DEFAULT_APP_CONFIG
from .messages.models import (
    Message,
    MessageBox,
    MessageCreateRequest,
    MessageListResponse,
)
from .messages.store import get_messages, notify_rental_request, send_message
from .recommendations.history import (
    claim_view_ping,
    clear_history,
    get_history,
    record_history,
)
from .recommendations.models import (
    HistoryResponse,
    LoginRequest,
    RelatedResponse,
    SearchRequest,
)
from .recommendations.related import recommend, resolve_recently_viewed
from .rentals.models import (
    Rental,
    RentalCreateRequest,
    RentalListResponse,
    RentalStatusUpdate,
    normalize_rental_status,
)
from .rentals.store import (
    active_rental_listing_ids,
    create_rental,
    get_rental,
    get_rentals_for_owner,
    get_rentals_for_user,
    set_status,
)
from .search.popularity import popular
from .search.ranker import exclude_owned, rank
from .search.text import normalize

app = FastAPI(title="Ebeveyn Rental Marketplace API", version="1.0.0")
app.add_middleware(SessionMiddleware, secret_key=DEFAULT_APP_CONFIG.session_secret)


def _require_listing(listing_id: str) -> Listing:
    listing = get_listing(listing_id.strip())
    if listing is None:
        raise HTTPException(status_code=404, detail="Listing not found")
    return listing


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    catalog = get_catalog()
    tags: set[str] = set()
    for listing in catalog:
        for t in listing.tags:
            t = t.strip().lower()
            if t:
                tags.add(t)
    return {"tags": sorted(tags), "total_listings": len(catalog)}


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.email, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    # Browsing history belongs to the client, not the account.
    request.session.pop("user", None)
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── Listing endpoints ────────────────────────────────────────────────────


@app.get("/listings", response_model=ListingsResponse)
def listings(owner_email: str | None = None) -> ListingsResponse:
    catalog = get_listings_for_owner(owner_email) if owner_email else get_catalog()
    return ListingsResponse(listings=catalog, total=len(catalog))


@app.post("/listings/search", response_model=ListingsResponse)
def search_listings(
    body: SearchRequest,
    viewer_email: str | None = Depends(get_viewer_email),
) -> ListingsResponse:
    start_time = time.time()

    visible = exclude_owned(get_catalog(), viewer_email)
    results = rank(visible, body.tags, body.q)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event("search", {
        "query": normalize(body.q),
        "tags": body.tags,
        "total_candidates": len(visible),
        "results_returned": len(results),
        "response_time_ms": elapsed_ms,
    })
    return ListingsResponse(listings=results, total=len(results))


@app.get("/listings/popular", response_model=ListingsResponse)
def popular_listings(
    viewer_email: str | None = Depends(get_viewer_email),
) -> ListingsResponse:
    top = popular(exclude_owned(get_catalog(), viewer_email))
    return ListingsResponse(listings=top, total=len(top))


@app.get("/listings/{listing_id}", response_model=Listing)
def listing_detail(listing_id: str) -> Listing:
    return _require_listing(listing_id)


@app.post("/listings/{listing_id}/view", response_model=HistoryResponse)
def view_listing(listing_id: str, request: Request) -> HistoryResponse:
    listing = _require_listing(listing_id)
    history = record_history(request.session, listing.id)

    # One view per listing per session.
    counted = claim_view_ping(request.session, listing.id)
    if counted:
        record_view(listing.id)
    return HistoryResponse(recently_viewed=history, view_counted=counted)


@app.get("/listings/{listing_id}/related", response_model=RelatedResponse)
def related_listings(
    listing_id: str,
    request: Request,
    viewer_email: str | None = Depends(get_viewer_email),
) -> RelatedResponse:
    start_time = time.time()
    focal = _require_listing(listing_id)
    catalog = get_catalog()
    history = get_history(request.session)

    rented_ids = (
        active_rental_listing_ids(get_rentals_for_user(viewer_email))
        if viewer_email
        else set()
    )
    viewed = resolve_recently_viewed(catalog, history, focal.id, limit=len(history))
    related = recommend(catalog, focal, viewed, rented_ids, viewer_email)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event("related", {
        "listing_id": focal.id,
        "history_size": len(history),
        "results_returned": len(related),
        "response_time_ms": elapsed_ms,
    })
    return RelatedResponse(
        listing_id=focal.id,
        recently_viewed=resolve_recently_viewed(catalog, history, focal.id),
        related=related,
    )


@app.delete("/history", response_model=HistoryResponse)
def clear_recently_viewed(request: Request) -> HistoryResponse:
    clear_history(request.session)
    return HistoryResponse(recently_viewed=[])


# ── Rental endpoints ─────────────────────────────────────────────────────


@app.post("/rentals", response_model=Rental)
def request_rental(
    body: RentalCreateRequest,
    user: dict = Depends(require_user),
) -> Rental:
    listing = _require_listing(body.listing_id)
    if listing.owner_email and listing.owner_email == user["email"]:
        raise HTTPException(status_code=400, detail="Cannot rent your own listing")
    try:
        rental = create_rental(listing, user["email"], body.start_date, body.end_date)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    notify_rental_request(rental)
    return rental


@app.get("/rentals", response_model=RentalListResponse)
def my_rentals(user: dict = Depends(require_user)) -> RentalListResponse:
    return RentalListResponse(rentals=get_rentals_for_user(user["email"]))


@app.get("/owner/rentals", response_model=RentalListResponse)
def owner_rentals(user: dict = Depends(require_user)) -> RentalListResponse:
    return RentalListResponse(rentals=get_rentals_for_owner(user["email"]))


@app.patch("/rentals/{rental_id}", response_model=Rental)
def update_rental_status(
    rental_id: str,
    body: RentalStatusUpdate,
    user: dict = Depends(require_user),
) -> Rental:
    status = normalize_rental_status(body.status)
    if status is None:
        raise HTTPException(status_code=400, detail="Invalid status")

    rental = get_rental(rental_id)
    if rental is None:
        raise HTTPException(status_code=404, detail="Rental not found")

    owner = rental.owner_email
    if owner is None:
        listing = get_listing(rental.listing_id)
        owner = listing.owner_email if listing else None
    if not owner or owner != user["email"]:
        raise HTTPException(status_code=403, detail="Only the listing owner can update this rental")

    updated = set_status(rental_id, status)
    if updated is None:
        raise HTTPException(status_code=404, detail="Rental not found")
    return updated


# ── Owner listing endpoints ──────────────────────────────────────────────


@app.get("/owner/listings", response_model=ListingsResponse)
def owner_listings(user: dict = Depends(require_user)) -> ListingsResponse:
    mine = get_listings_for_owner(user["email"])
    return ListingsResponse(listings=mine, total=len(mine))


@app.post("/owner/listings", response_model=Listing)
def create_owner_listing(
    body: ListingCreateRequest,
    user: dict = Depends(require_user),
) -> Listing:
    if not body.title.strip() or not body.description.strip():
        raise HTTPException(status_code=400, detail="title and description are required")
    if body.daily_price <= 0:
        raise HTTPException(status_code=400, detail="daily_price must be positive")

    listing = listing_from_record({
        **body.model_dump(),
        "id": str(uuid.uuid4()),
        "owner_email": user["email"],
        "view_count": 0,
        "created_at": dt.datetime.now(dt.timezone.utc).isoformat(),
    })
    if listing is None:
        raise HTTPException(status_code=400, detail="Invalid listing")
    if not add_listing(listing):
        raise HTTPException(status_code=502, detail="Could not save listing")
    return listing


@app.delete("/owner/listings/{listing_id}")
def delete_owner_listing(listing_id: str, user: dict = Depends(require_user)) -> dict:
    listing = _require_listing(listing_id)
    if not listing.owner_email or listing.owner_email != user["email"]:
        raise HTTPException(status_code=403, detail="Only the listing owner can delete it")
    if not remove_listing(listing.id):
        raise HTTPException(status_code=502, detail="Could not delete listing")
    return {"status": "deleted", "id": listing.id}


# ── Message endpoints ────────────────────────────────────────────────────


@app.post("/messages", response_model=Message)
def post_message(
    body: MessageCreateRequest,
    user: dict = Depends(require_user),
) -> Message:
    listing = _require_listing(body.listing_id)
    try:
        return send_message(listing, user["email"], body.text)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.get("/messages", response_model=MessageListResponse)
def list_messages(
    box: MessageBox = MessageBox.inbox,
    user: dict = Depends(require_user),
) -> MessageListResponse:
    return MessageListResponse(messages=get_messages(user["email"], box))


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.get("/analytics")
def analytics(user: dict = Depends(require_admin)) -> dict:
    return compute_analytics(get_events())
