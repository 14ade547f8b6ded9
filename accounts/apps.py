from django.apps import AppConfig


class AccountsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'accounts'
    verbose_name = 'Accounts'

    def ready(self):
        from django.contrib import admin

        admin.site.site_header = "Campus Marketplace Admin"
        admin.site.site_title = "Campus Marketplace"
        admin.site.index_title = "Campus Marketplace"
