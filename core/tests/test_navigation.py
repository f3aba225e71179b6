"""Tests für die gerenderte Admin-Sidebar."""

import pytest
from django.urls import reverse

from core.context_processors import SESSION_COLLAPSED, SESSION_OPEN_ITEMS

pytestmark = [pytest.mark.integration, pytest.mark.django_db]


@pytest.fixture
def dept_client(client, dept_admin):
    client.force_login(dept_admin)
    return client


def test_sidebar_context_for_admin(dept_client, dept_admin, collage_factory):
    collage_factory(slug="eng", created_by=dept_admin)
    collage_factory(slug="med", members=[dept_admin])

    resp = dept_client.get(reverse("admin_overview"))

    sidebar = resp.context["sidebar"]
    assert sidebar["role"] == "ADMIN"
    assert sidebar["role_label"] == "Department Admin"
    assert sidebar["collapsed"] is False
    items = {item["key"]: item for section in sidebar["desktop"] for item in section["items"]}
    assert "uni-config" not in items
    assert "users" not in items
    assert items["collages"]["badge"] == "2"
    assert items["collages"]["mode"] == "expandable"
    assert items["overview"]["active"] is True


def test_sidebar_hidden_for_anonymous(client):
    resp = client.get(reverse("home"))
    assert resp.context["sidebar"] is None


def test_owner_sees_university_section(client, owner):
    client.force_login(owner)
    resp = client.get(reverse("admin_overview"))
    assert b'data-nav="uni-config"' in resp.content
    assert b"System Administrator" in resp.content


def test_soon_items_are_inert(dept_client):
    resp = dept_client.get(reverse("admin_overview"))
    html = resp.content.decode()
    assert 'data-nav="analytics"' in html
    assert 'href="#" data-nav="analytics"' in html
    assert 'aria-disabled="true"' in html


def test_toggle_sidebar_flips_session(dept_client):
    resp = dept_client.post(reverse("toggle_sidebar"), {"next": reverse("admin_overview")})
    assert resp.status_code == 302
    assert resp["Location"] == reverse("admin_overview")
    assert dept_client.session[SESSION_COLLAPSED] is True

    page = dept_client.get(reverse("admin_overview"))
    assert page.context["sidebar"]["collapsed"] is True
    assert b'data-collapsed="true"' in page.content
    modes = {item["mode"] for section in page.context["sidebar"]["desktop"] for item in section["items"]}
    assert modes == {"collapsed_icon"}
    mobile_modes = {item["mode"] for section in page.context["sidebar"]["mobile"] for item in section["items"]}
    assert "collapsed_icon" not in mobile_modes

    dept_client.post(reverse("toggle_sidebar"))
    assert dept_client.session[SESSION_COLLAPSED] is False


def test_toggle_sidebar_json(dept_client):
    resp = dept_client.post(reverse("toggle_sidebar"), HTTP_ACCEPT="application/json")
    assert resp.json() == {"collapsed": True}


def test_toggle_sidebar_rejects_foreign_next(dept_client):
    resp = dept_client.post(reverse("toggle_sidebar"), {"next": "https://evil.example.com/"})
    assert resp["Location"] == "/"


def test_toggle_sidebar_requires_login(client):
    resp = client.post(reverse("toggle_sidebar"))
    assert resp.status_code == 302
    assert reverse("login") in resp["Location"]


def test_toggle_nav_item_opens_children(dept_client, dept_admin, collage_factory):
    collage_factory(slug="eng", created_by=dept_admin)
    collage_url = reverse("collage_detail", args=["eng"])

    closed = dept_client.get(reverse("admin_overview"))
    assert collage_url.encode() not in closed.content

    resp = dept_client.post(
        reverse("toggle_nav_item", args=["collages"]),
        HTTP_X_REQUESTED_WITH="XMLHttpRequest",
    )
    assert resp.json() == {"key": "collages", "open": True}
    assert dept_client.session[SESSION_OPEN_ITEMS] == {"collages": True}

    opened = dept_client.get(collage_url)
    assert f'href="{collage_url}"'.encode() in opened.content
    children = [
        child
        for section in opened.context["sidebar"]["desktop"]
        for item in section["items"]
        for child in item["children"]
    ]
    assert [c["active"] for c in children] == [True]


def test_toggle_unknown_nav_item(dept_client):
    assert dept_client.post(reverse("toggle_nav_item", args=["nope"])).status_code == 404


def test_breadcrumbs(dept_client, dept_admin, collage_factory):
    collage_factory(slug="eng", created_by=dept_admin)
    resp = dept_client.get(reverse("collage_detail", args=["eng"]))
    assert resp.context["breadcrumbs"] == [
        {"url": "/en/admin", "label": "Admin"},
        {"url": None, "label": "Dashboard"},
        {"url": "/en/admin/dashboard/collages", "label": "Collages"},
        {"url": None, "label": "Eng"},
    ]


def test_arabic_locale_links(dept_client):
    resp = dept_client.get("/ar/admin")
    assert resp.status_code == 200
    items = {item["key"]: item for section in resp.context["sidebar"]["mobile"] for item in section["items"]}
    assert items["overview"]["href"] == "/ar/admin"
    assert items["overview"]["active"] is True
    assert items["main-site"]["href"] == "/ar/"
