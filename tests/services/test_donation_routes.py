"""Donation Routes — tests for POST/GET donations over HTTP.

Tests cover:
    - Authenticated and guest donations update the campaign total
    - Check order: amount, campaign existence, campaign status, guest name
    - Anonymous donations hide the donor on public listings
    - /donations/mine joins campaign title
"""

from decimal import Decimal

from sqlalchemy import select

from crowdfund.models.campaign import Campaign
from crowdfund.models.donation import Donation


async def _total(test_db, campaign_id) -> Decimal:
    result = await test_db.execute(
        select(Campaign.current_amount).where(Campaign.id == campaign_id),
    )
    return Decimal(str(result.scalar_one()))


async def test_authenticated_donation(client, test_db, seed_campaign, auth_headers):
    resp = await client.post(
        f"/api/campaigns/{seed_campaign.id}/donations",
        json={"amount": 100, "message": "Go!"},
        headers=auth_headers,
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Donation successful"
    assert body["amount"] == 100
    assert isinstance(body["id"], int)
    assert await _total(test_db, seed_campaign.id) == Decimal("100")


async def test_guest_donation_stores_stripped_name(client, test_db, seed_campaign):
    resp = await client.post(
        f"/api/campaigns/{seed_campaign.id}/donations",
        json={"amount": "25.50", "donor_name": "  Carla  "},
    )
    assert resp.status_code == 201

    donation = (await test_db.execute(select(Donation))).scalar_one()
    assert donation.user_id is None
    assert donation.donor_name == "Carla"
    assert await _total(test_db, seed_campaign.id) == Decimal("25.50")


async def test_authenticated_donor_name_is_not_stored(client, test_db, seed_campaign, auth_headers):
    await client.post(
        f"/api/campaigns/{seed_campaign.id}/donations",
        json={"amount": 10, "donor_name": "Someone Else"},
        headers=auth_headers,
    )
    donation = (await test_db.execute(select(Donation))).scalar_one()
    assert donation.donor_name is None


async def test_two_donations_sum(client, test_db, seed_campaign, auth_headers):
    url = f"/api/campaigns/{seed_campaign.id}/donations"
    await client.post(url, json={"amount": 100}, headers=auth_headers)
    await client.post(url, json={"amount": 250, "donor_name": "Guest"})

    assert await _total(test_db, seed_campaign.id) == Decimal("350")
    resp = await client.get(f"/api/campaigns/{seed_campaign.id}")
    assert resp.json()["current_amount"] == 350


async def test_zero_amount_rejected(client, test_db, seed_campaign, auth_headers):
    resp = await client.post(
        f"/api/campaigns/{seed_campaign.id}/donations",
        json={"amount": 0}, headers=auth_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "INVALID_DONATION_AMOUNT"
    assert await _total(test_db, seed_campaign.id) == Decimal("0")


async def test_negative_amount_checked_before_campaign_existence(client):
    resp = await client.post(
        "/api/campaigns/9999/donations",
        json={"amount": -5, "donor_name": "Ana"},
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "INVALID_DONATION_AMOUNT"


async def test_unknown_campaign_is_404(client):
    resp = await client.post(
        "/api/campaigns/9999/donations",
        json={"amount": 5, "donor_name": "Ana"},
    )
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_cancelled_campaign_rejects_donations(client, test_db, seed_campaign):
    seed_campaign.status = "cancelled"
    await test_db.commit()

    resp = await client.post(
        f"/api/campaigns/{seed_campaign.id}/donations",
        json={"amount": 5, "donor_name": "Ana"},
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "CAMPAIGN_NOT_ACTIVE"


async def test_guest_without_name_rejected(client, test_db, seed_campaign):
    resp = await client.post(
        f"/api/campaigns/{seed_campaign.id}/donations",
        json={"amount": 5, "donor_name": "   "},
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "GUEST_NAME_REQUIRED"
    assert await _total(test_db, seed_campaign.id) == Decimal("0")


async def test_invalid_token_is_rejected_not_downgraded_to_guest(client, seed_campaign):
    resp = await client.post(
        f"/api/campaigns/{seed_campaign.id}/donations",
        json={"amount": 5, "donor_name": "Ana"},
        headers={"Authorization": "Bearer not.a.token"},
    )
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Bearer"


async def test_listing_hides_anonymous_donor(client, seed_campaign, auth_headers):
    url = f"/api/campaigns/{seed_campaign.id}/donations"
    await client.post(url, json={"amount": 10, "is_anonymous": True}, headers=auth_headers)
    await client.post(url, json={"amount": 20}, headers=auth_headers)
    await client.post(url, json={"amount": 30, "donor_name": "Dana"})

    resp = await client.get(url)
    assert resp.status_code == 200
    names = sorted(d["donor_display_name"] for d in resp.json())
    assert names == ["Alice", "Anonymous", "Dana"]


async def test_listing_unknown_campaign_is_404(client):
    resp = await client.get("/api/campaigns/9999/donations")
    assert resp.status_code == 404


async def test_my_donations(client, seed_campaign, auth_headers):
    await client.post(
        f"/api/campaigns/{seed_campaign.id}/donations",
        json={"amount": 40}, headers=auth_headers,
    )
    resp = await client.get("/api/donations/mine", headers=auth_headers)
    assert resp.status_code == 200
    [mine] = resp.json()
    assert mine["campaign_id"] == seed_campaign.id
    assert mine["campaign_title"] == "Community garden"
    assert mine["amount"] == 40


async def test_my_donations_requires_auth(client):
    resp = await client.get("/api/donations/mine")
    assert resp.status_code == 401
