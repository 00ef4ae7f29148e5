from django.contrib import admin

from messaging.commands import RecalculateProject
from messaging.dispatcher import CommandDispatcher
from .models import Project, Task


def recalculate(*project_ids):
    CommandDispatcher().dispatch_all(
        RecalculateProject(project_id) for project_id in project_ids if project_id
    )


class TaskInline(admin.TabularInline):
    model = Task
    extra = 0
    fields = ['name', 'status', 'weight', 'updated_at']
    readonly_fields = ['updated_at']


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ['name', 'owner', 'status', 'progress', 'updated_at']
    list_filter = ['status']
    search_fields = ['name', 'owner__email']
    # Derived fields are only ever written by the aggregation engine.
    readonly_fields = ['id', 'owner', 'status', 'progress', 'created_at', 'updated_at']
    inlines = [TaskInline]

    def has_add_permission(self, request):
        # Projects need an owner, which only the API assigns.
        return False

    def save_related(self, request, form, formsets, change):
        super().save_related(request, form, formsets, change)
        recalculate(form.instance.id)


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ['name', 'project', 'status', 'weight', 'updated_at']
    list_filter = ['status']
    search_fields = ['name', 'project__name']
    readonly_fields = ['id', 'created_at', 'updated_at']

    def save_model(self, request, obj, form, change):
        previous_project_id = form.initial.get('project') if change else None
        super().save_model(request, obj, form, change)
        recalculate(previous_project_id, obj.project_id)

    def delete_model(self, request, obj):
        project_id = obj.project_id
        super().delete_model(request, obj)
        recalculate(project_id)

    def delete_queryset(self, request, queryset):
        project_ids = set(queryset.values_list('project_id', flat=True))
        super().delete_queryset(request, queryset)
        recalculate(*project_ids)
