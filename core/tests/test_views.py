"""Tests für Seiten und JSON-API."""

import json
from unittest.mock import patch

import pytest
from django.db import DatabaseError
from django.urls import reverse

from core.models import UserProfile
from core.roles import Role

pytestmark = [pytest.mark.integration, pytest.mark.django_db]


# --- Seiten -------------------------------------------------------------------


def test_home_is_public(client, collage_factory):
    collage_factory(name="Engineering")
    resp = client.get(reverse("home"))
    assert resp.status_code == 200
    assert b"Engineering" in resp.content


def test_page_urls_carry_locale_prefix():
    assert reverse("home") == "/en/"
    assert reverse("collage_list") == "/en/admin/dashboard/collages"


def test_admin_pages_require_login(client):
    resp = client.get(reverse("admin_overview"))
    assert resp.status_code == 302
    assert reverse("login") in resp["Location"]


def test_guest_is_forbidden(client, guest):
    client.force_login(guest)
    assert client.get(reverse("admin_overview")).status_code == 403


@pytest.mark.parametrize(
    "url_name, allowed",
    [
        ("admin_overview", {"OWNER", "SUPERADMIN", "ADMIN"}),
        ("collage_list", {"OWNER", "SUPERADMIN", "ADMIN"}),
        ("uni_config", {"OWNER"}),
        ("user_list", {"OWNER", "SUPERADMIN"}),
    ],
)
@pytest.mark.parametrize("role", ["OWNER", "SUPERADMIN", "ADMIN", "GUEST"])
def test_role_gating(client, user_factory, url_name, allowed, role):
    client.force_login(user_factory(role=role))
    resp = client.get(reverse(url_name))
    assert resp.status_code == (200 if role in allowed else 403)


def test_overview_counts(client, dept_admin, collage_factory):
    collage_factory(created_by=dept_admin)
    collage_factory(members=[dept_admin])
    client.force_login(dept_admin)
    resp = client.get(reverse("admin_overview"))
    assert resp.context["owned_count"] == 1
    assert resp.context["member_count"] == 1
    assert "collage_count" not in resp.context


def test_overview_totals_for_owner(client, owner, collage_factory):
    collage_factory()
    client.force_login(owner)
    resp = client.get(reverse("admin_overview"))
    assert resp.context["collage_count"] == 1
    assert resp.context["user_count"] >= 2


def test_collage_list_for_admin_shows_accessible_only(client, dept_admin, collage_factory):
    own = collage_factory(created_by=dept_admin, members=[dept_admin])
    joined = collage_factory(members=[dept_admin])
    collage_factory()
    client.force_login(dept_admin)

    resp = client.get(reverse("collage_list"))

    assert {c.pk for c in resp.context["collages"]} == {own.pk, joined.pk}
    counts = {c.pk: c.member_total for c in resp.context["collages"]}
    assert counts[own.pk] == 1


def test_collage_list_type_filter(client, owner, collage_factory):
    collage_factory(type="MEDICAL", slug="med")
    collage_factory(type="TECHNICAL", slug="eng")
    client.force_login(owner)
    resp = client.get(reverse("collage_list"), {"type": "MEDICAL"})
    assert [c.slug for c in resp.context["collages"]] == ["med"]
    assert resp.context["current_type"] == "MEDICAL"


def test_collage_detail_access(client, dept_admin, collage_factory):
    mine = collage_factory(created_by=dept_admin)
    other = collage_factory()
    client.force_login(dept_admin)

    assert client.get(reverse("collage_detail", args=[mine.slug])).status_code == 200
    assert client.get(reverse("collage_detail", args=[other.slug])).status_code == 403
    assert client.get(reverse("collage_detail", args=["missing"])).status_code == 404


def test_collage_detail_owner_sees_everything(client, owner, collage_factory, user_factory):
    member = user_factory(username="mitglied")
    collage = collage_factory(members=[member])
    client.force_login(owner)
    resp = client.get(reverse("collage_detail", args=[collage.slug]))
    assert resp.status_code == 200
    assert list(resp.context["members"]) == [member]


def test_uni_config_counts(client, owner, collage_factory):
    collage_factory(type="ARTS")
    client.force_login(owner)
    resp = client.get(reverse("uni_config"))
    assert ("Arts", 1) in resp.context["collage_types"]
    assert ("Owner", 1) in resp.context["user_roles"]


def test_user_list_role_filter(client, owner, dept_admin, guest):
    client.force_login(owner)
    resp = client.get(reverse("user_list"), {"role": "admin"})
    assert [u.username for u in resp.context["users"]] == [dept_admin.username]
    assert resp.context["current_role_filter"] == "ADMIN"

    resp = client.get(reverse("user_list"), {"role": "bogus"})
    assert resp.context["current_role_filter"] == ""
    assert len(resp.context["users"]) == 3


# --- JSON-API -----------------------------------------------------------------


def test_collage_api_requires_login(client):
    resp = client.get(reverse("api_owned_collages"))
    assert resp.status_code == 401
    assert resp.json() == {"error": "Nicht angemeldet"}


def test_collage_api_lists(client, dept_admin, collage_factory):
    collage_factory(name="Eng", slug="eng", created_by=dept_admin, logo_url="")
    collage_factory(name="Med", slug="med", members=[dept_admin], logo_url="")
    client.force_login(dept_admin)

    assert client.get(reverse("api_owned_collages")).json() == [{"name": "Eng", "slug": "eng", "logoUrl": ""}]
    assert client.get(reverse("api_member_collages")).json() == [{"name": "Med", "slug": "med", "logoUrl": ""}]


def test_collage_api_rejects_post(client, dept_admin):
    client.force_login(dept_admin)
    assert client.post(reverse("api_owned_collages")).status_code == 405


def _toggle(client, user_id, body):
    return client.post(
        reverse("api_toggle_role", args=[user_id]),
        data=body if isinstance(body, str) else json.dumps(body),
        content_type="application/json",
    )


def test_toggle_role_success(client, owner, guest):
    client.force_login(owner)
    resp = _toggle(client, guest.pk, {"role": "ADMIN"})
    assert resp.status_code == 200
    assert resp.json() == {"message": "User role updated successfully"}
    assert UserProfile.objects.get(user=guest).user_type == Role.ADMIN


@pytest.mark.parametrize(
    "body, status, error",
    [
        ("not json", 400, "Invalid JSON"),
        ({}, 400, "Role is required"),
        ({"role": "ROOT"}, 400, "Invalid role"),
        ({"role": "GUEST"}, 400, "User already has this role"),
    ],
)
def test_toggle_role_errors(client, owner, guest, body, status, error):
    client.force_login(owner)
    resp = _toggle(client, guest.pk, body)
    assert resp.status_code == status
    assert resp.json() == {"error": error}


def test_toggle_role_unknown_user(client, owner):
    client.force_login(owner)
    resp = _toggle(client, 999999, {"role": "ADMIN"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "User not found"}


def test_toggle_role_only_for_owner(client, superadmin, guest):
    client.force_login(superadmin)
    assert _toggle(client, guest.pk, {"role": "ADMIN"}).status_code == 403


def test_health(client, collage_factory):
    collage_factory()
    data = client.get(reverse("api_health")).json()
    assert data["status"] == "healthy"
    assert data["database"]["status"] == "connected"
    assert data["stats"]["colleges"] == 1
    assert data["version"] == "1.0.0"


def test_health_database_failure(client):
    with patch("core.views.User.objects.count", side_effect=DatabaseError("kaputt")):
        resp = client.get(reverse("api_health"))
    assert resp.status_code == 503
    data = resp.json()
    assert data["status"] == "unhealthy"
    assert data["database"] == {"status": "disconnected", "error": "kaputt"}


def test_api_docs(client):
    data = client.get(reverse("api_docs")).json()
    assert data["info"]["version"] == "1.0.0"
    assert data["baseUrl"] == "http://testserver/api"
    assert "/users/[id]/toggle-role/" in data["endpoints"]["users"]


# --- Abmelden -----------------------------------------------------------------


def test_sign_out(client, dept_admin):
    client.force_login(dept_admin)
    resp = client.post(reverse("sign_out"))
    assert resp.status_code == 302
    assert resp["Location"] == "/"
    assert client.get(reverse("admin_overview")).status_code == 302


def test_sign_out_requires_post(client, dept_admin):
    client.force_login(dept_admin)
    assert client.get(reverse("sign_out")).status_code == 405
