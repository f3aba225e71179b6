from django.conf.urls.i18n import i18n_patterns
from django.contrib import admin
from django.contrib.auth import views as auth_views
from django.urls import include, path

from core import urls as core_urls

urlpatterns = [
    path("django-admin/", admin.site.urls),
    path("accounts/login/", auth_views.LoginView.as_view(), name="login"),
    path("", include(core_urls.urlpatterns)),
]

urlpatterns += i18n_patterns(path("", include(core_urls.page_urlpatterns)))
