from django.urls import path

from . import views

# Seiten mit Sprachpräfix, eingebunden über ``i18n_patterns``.
page_urlpatterns = [
    path("", views.home, name="home"),
    path("admin", views.admin_overview, name="admin_overview"),
    path("admin/dashboard/collages", views.collage_list, name="collage_list"),
    path(
        "admin/dashboard/collages/<slug:slug>",
        views.collage_detail,
        name="collage_detail",
    ),
    path("admin/dashboard/uni", views.uni_config, name="uni_config"),
    path("admin/dashboard/users", views.user_list, name="user_list"),
]

urlpatterns = [
    path("api/collages/owned/", views.owned_collages_api, name="api_owned_collages"),
    path("api/collages/member/", views.member_collages_api, name="api_member_collages"),
    path(
        "api/users/<int:user_id>/toggle-role/",
        views.toggle_role_api,
        name="api_toggle_role",
    ),
    path("api/health/", views.health, name="api_health"),
    path("api/docs/", views.api_docs, name="api_docs"),
    path("sidebar/toggle/", views.toggle_sidebar, name="toggle_sidebar"),
    path(
        "sidebar/items/<str:key>/toggle/",
        views.toggle_nav_item,
        name="toggle_nav_item",
    ),
    path("sign-out/", views.sign_out, name="sign_out"),
]
