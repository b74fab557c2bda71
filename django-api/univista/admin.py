from django.contrib import admin

from univista.models import CrewUsername, Event, Ticket, UserProfile


class TicketInline(admin.TabularInline):
    model = Ticket
    extra = 0
    can_delete = False
    readonly_fields = ["ticket_id", "user_email", "ticket_count", "amount_paid", "booked_at"]
    fields = readonly_fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["name", "faculty", "date", "status", "available_tickets"]
    list_filter = ["status", "faculty"]
    search_fields = ["name", "location"]
    readonly_fields = ["available_tickets"]
    inlines = [TicketInline]


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    list_display = ["ticket_id", "event", "user_email", "ticket_count", "amount_paid"]
    list_filter = ["event__faculty"]
    search_fields = ["ticket_id", "user_email"]


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ["email", "role", "faculty", "username"]
    list_filter = ["role", "faculty"]


@admin.register(CrewUsername)
class CrewUsernameAdmin(admin.ModelAdmin):
    list_display = ["username", "is_registered", "uid"]
