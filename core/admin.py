from django import forms
from django.contrib import admin
from django.contrib.admin.widgets import FilteredSelectMultiple
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.models import User
from django.utils.html import format_html

from .models import Collage, UserProfile


class CollageAdminForm(forms.ModelForm):
    """Formular für Collage mit Mitglieder-Auswahl."""

    members = forms.ModelMultipleChoiceField(
        queryset=User.objects.all(),
        required=False,
        widget=FilteredSelectMultiple("Mitglieder", is_stacked=False),
    )

    class Meta:
        model = Collage
        fields = ["name", "slug", "type", "logo_url", "theme", "created_by", "members"]


class CollageAdmin(admin.ModelAdmin):
    form = CollageAdminForm
    list_display = ("name", "slug", "type", "logo_thumb", "created_by", "members_display")
    list_filter = ("type",)
    search_fields = ("name", "slug")
    prepopulated_fields = {"slug": ("name",)}

    def members_display(self, obj) -> str:
        """Zeigt die Mitglieder der Collage."""
        return ", ".join(u.username for u in obj.members.all())

    members_display.short_description = "Mitglieder"

    def logo_thumb(self, obj) -> str:
        """Gibt eine kleine Logovorschau zurück."""
        if obj.logo_url:
            return format_html('<img src="{}" style="height:32px;" />', obj.logo_url)
        return "-"

    logo_thumb.short_description = "Logo"


class UserProfileInline(admin.StackedInline):
    model = UserProfile
    can_delete = False
    extra = 0


class CustomUserAdmin(BaseUserAdmin):
    inlines = [UserProfileInline]
    list_display = BaseUserAdmin.list_display + ("role_display",)

    def role_display(self, obj) -> str:
        profile = getattr(obj, "profile", None)
        return profile.get_user_type_display() if profile else "-"

    role_display.short_description = "Rolle"


admin.site.unregister(User)
admin.site.register(User, CustomUserAdmin)

# Registrierung der Modelle
admin.site.register(Collage, CollageAdmin)
