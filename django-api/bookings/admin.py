from django.contrib import admin

from bookings.models import Account, Booking, OpeningHours, Service, Shop, Subscription


class ServiceInline(admin.TabularInline):
    model = Service
    extra = 1


class OpeningHoursInline(admin.TabularInline):
    model = OpeningHours
    extra = 0
    max_num = 7


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = ["full_name", "email", "user_type", "created_at"]
    list_filter = ["user_type"]
    search_fields = ["full_name", "email"]


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    list_display = ["account", "plan_type", "status", "current_period_end"]
    list_filter = ["plan_type", "status"]


@admin.register(Shop)
class ShopAdmin(admin.ModelAdmin):
    list_display = ["name", "owner", "address", "deployed", "created_at"]
    search_fields = ["name", "address"]
    inlines = [ServiceInline, OpeningHoursInline]


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ["shop", "customer", "appointment_date", "appointment_time", "status"]
    list_filter = ["status", "shop"]
    date_hierarchy = "appointment_date"
